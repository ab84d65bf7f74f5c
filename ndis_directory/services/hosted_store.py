"""
Hosted review store: a backend-as-a-service reached over its REST API.

The remote side is a PostgREST-style ``reviews`` table:

    id, service_id, reviewer_name, rating, comment, created_at

``id`` and ``created_at`` are assigned by the remote database.

Configuration:
    HOSTED_URL, HOSTED_API_KEY, HOSTED_TIMEOUT
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from ndis_directory.core.exceptions import UnavailableError
from ndis_directory.core.logging import logger
from ndis_directory.services.review_store import ReviewDraft, ReviewRecord, ensure_aware


class HostedReviewStore:
    """Async REST client for the hosted reviews table."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        table: str = "reviews",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._path = f"/rest/v1/{table}"
        self._client = client

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
            )
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def append(self, draft: ReviewDraft) -> ReviewRecord:
        client = await self._get_client()
        payload = {
            "service_id": draft.target_id,
            "reviewer_name": draft.author,
            "rating": draft.rating,
            "comment": draft.comment,
        }

        try:
            resp = await client.post(
                self._path,
                json=[payload],
                headers={**self._headers(), "Prefer": "return=representation"},
            )
            resp.raise_for_status()
            rows = resp.json()
            return _to_record(rows[0], draft.provider_name)
        except httpx.HTTPStatusError as e:
            logger.error(
                "Hosted store rejected review %d: %s",
                e.response.status_code,
                e.response.text,
                extra={"target_id": draft.target_id},
            )
            raise UnavailableError(
                "Hosted review store rejected the write",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Hosted store call failed: {str(e)}", extra={"target_id": draft.target_id})
            raise UnavailableError(f"Hosted review store unreachable: {str(e)}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UnavailableError(f"Unexpected response from hosted review store: {str(e)}") from e

    async def query_by_target(self, target_id: str) -> List[ReviewRecord]:
        params = {
            "select": "*",
            "service_id": f"eq.{target_id}",
            "order": "created_at.desc",
        }
        return await self._select(params, extra={"target_id": target_id})

    async def latest(self, limit: int) -> List[ReviewRecord]:
        params = {
            "select": "*",
            "order": "created_at.desc",
            "limit": str(limit),
        }
        return await self._select(params, extra={"limit": limit})

    async def _select(self, params: Dict[str, str], extra: Dict[str, Any]) -> List[ReviewRecord]:
        client = await self._get_client()

        try:
            resp = await client.get(self._path, params=params, headers=self._headers())
            resp.raise_for_status()
            rows = resp.json()
            return [_to_record(row) for row in rows]
        except httpx.HTTPStatusError as e:
            logger.error(
                "Hosted store query error %d: %s",
                e.response.status_code,
                e.response.text,
                extra=extra,
            )
            raise UnavailableError(
                "Hosted review store query failed",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Hosted store call failed: {str(e)}", extra=extra)
            raise UnavailableError(f"Hosted review store unreachable: {str(e)}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise UnavailableError(f"Unexpected response from hosted review store: {str(e)}") from e


def _to_record(row: Dict[str, Any], provider_name: Optional[str] = None) -> ReviewRecord:
    created_at = row["created_at"]
    if isinstance(created_at, str):
        # PostgREST may emit a trailing 'Z'
        created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))

    return ReviewRecord(
        id=str(row["id"]),
        target_id=str(row["service_id"]),
        rating=int(row["rating"]),
        comment=row["comment"],
        author=row["reviewer_name"],
        created_at=ensure_aware(created_at),
        provider_name=provider_name,
    )
