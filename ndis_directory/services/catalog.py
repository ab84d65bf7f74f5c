"""
Provider catalog stored as a flat JSON file.

The file holds a JSON array of provider objects (camelCase keys). Writes go
to a temporary file that replaces the original, so readers never see a
half-written catalog.
"""
import asyncio
import json
import os
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as SchemaValidationError

from ndis_directory.core.exceptions import NotFoundError, UnavailableError
from ndis_directory.core.logging import logger
from ndis_directory.schemas.service import Provider, ProviderCreate


class ServiceCatalog:
    """Read and update the provider catalog file."""

    def __init__(self, path: str):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    async def list_services(self) -> List[Provider]:
        try:
            return await asyncio.to_thread(self._load)
        except (OSError, ValueError, SchemaValidationError) as e:
            logger.error(f"Failed to read catalog {self.path}: {str(e)}", exc_info=True)
            raise UnavailableError(f"Provider catalog unavailable: {str(e)}") from e

    async def get_service(self, service_id: str) -> Optional[Provider]:
        for provider in await self.list_services():
            if provider.id == str(service_id):
                return provider
        return None

    async def require_service(self, service_id: str) -> Provider:
        """Like get_service, but a missing provider is a NotFoundError."""
        provider = await self.get_service(service_id)
        if provider is None:
            raise NotFoundError(
                f"Service not found: {service_id}",
                details={"service_id": str(service_id)},
            )
        return provider

    async def add_service(self, data: ProviderCreate) -> Provider:
        async with self._write_lock:
            providers = await self.list_services()
            provider = Provider(
                id=self._next_id(providers),
                date_added=date.today().isoformat(),
                **data.model_dump(),
            )
            providers.append(provider)
            await self._save(providers)

        logger.info("Provider added", extra={"service_id": provider.id, "service_name": provider.name})
        return provider

    async def set_premium(self, service_id: str, is_premium: bool) -> Provider:
        async with self._write_lock:
            providers = await self.list_services()
            for i, provider in enumerate(providers):
                if provider.id == str(service_id):
                    providers[i] = provider.model_copy(update={"is_premium": is_premium})
                    await self._save(providers)
                    break
            else:
                raise NotFoundError(
                    f"Service not found: {service_id}",
                    details={"service_id": str(service_id)},
                )

        logger.info(
            "Provider premium flag updated",
            extra={"service_id": str(service_id), "is_premium": is_premium},
        )
        return providers[i]

    @staticmethod
    def _next_id(providers: List[Provider]) -> str:
        numeric = [int(p.id) for p in providers if p.id.isdigit()]
        return str(max(numeric, default=0) + 1)

    def _load(self) -> List[Provider]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, list):
            raise ValueError("catalog file must contain a JSON array")
        return [Provider.model_validate(item) for item in raw]

    async def _save(self, providers: List[Provider]) -> None:
        payload = [p.model_dump(by_alias=True) for p in providers]
        try:
            await asyncio.to_thread(self._write, payload)
        except OSError as e:
            logger.error(f"Failed to write catalog {self.path}: {str(e)}", exc_info=True)
            raise UnavailableError(f"Provider catalog unavailable: {str(e)}") from e

    def _write(self, payload: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
