"""
Review storage backends.

Every backend exposes the same two operations:

- ``append(draft)`` writes one immutable review and returns it with the
  backend-assigned ``id`` and ``created_at``
- ``query_by_target(target_id)`` returns the reviews of one provider,
  newest first
- ``latest(limit)`` returns the most recent reviews across all providers

Validation happens before a draft reaches a store (see ``review_service``),
so stores only deal with persistence. Storage failures are raised as
``UnavailableError``.
"""
import asyncio
import json
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ndis_directory.core.exceptions import UnavailableError
from ndis_directory.core.logging import logger


@dataclass(frozen=True)
class ReviewDraft:
    """Validated review input that has not been stored yet."""

    target_id: str
    rating: int
    comment: str
    author: str
    provider_name: Optional[str] = None


@dataclass(frozen=True)
class ReviewRecord:
    """A stored review. Immutable once created."""

    id: str
    target_id: str
    rating: int
    comment: str
    author: str
    created_at: datetime
    provider_name: Optional[str] = None

    @classmethod
    def from_draft(cls, draft: ReviewDraft, review_id: str, created_at: datetime) -> "ReviewRecord":
        return cls(id=review_id, created_at=created_at, **asdict(draft))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReviewRecord":
        return cls(
            id=str(data["id"]),
            target_id=str(data["target_id"]),
            rating=int(data["rating"]),
            comment=data["comment"],
            author=data["author"],
            created_at=ensure_aware(datetime.fromisoformat(data["created_at"])),
            provider_name=data.get("provider_name"),
        )


class ReviewStore(Protocol):
    """Storage capability required by the review service."""

    async def append(self, draft: ReviewDraft) -> ReviewRecord: ...

    async def query_by_target(self, target_id: str) -> List[ReviewRecord]: ...

    async def latest(self, limit: int) -> List[ReviewRecord]: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive timestamps (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def newest_first(records: List[ReviewRecord]) -> List[ReviewRecord]:
    """
    Order records by created_at descending.

    Records are kept in insertion order, so walking them backwards before the
    stable sort puts the later insert first when two timestamps are equal.
    """
    return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)


class MemoryReviewStore:
    """Process-local store. Reviews are lost on restart."""

    def __init__(self):
        self._records: List[ReviewRecord] = []

    async def append(self, draft: ReviewDraft) -> ReviewRecord:
        record = ReviewRecord.from_draft(draft, uuid.uuid4().hex, utcnow())
        self._records.append(record)
        return record

    async def query_by_target(self, target_id: str) -> List[ReviewRecord]:
        return newest_first([r for r in self._records if r.target_id == target_id])

    async def latest(self, limit: int) -> List[ReviewRecord]:
        return newest_first(self._records)[:limit]


class JsonFileReviewStore:
    """
    Append-only JSON Lines log.

    Each review is serialized to a single line and written with one
    ``write`` call on a file opened in append mode, so a review is either
    fully present in the log or absent.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    async def append(self, draft: ReviewDraft) -> ReviewRecord:
        record = ReviewRecord.from_draft(draft, uuid.uuid4().hex, utcnow())
        line = json.dumps(record.to_dict(), ensure_ascii=False) + "\n"
        try:
            await asyncio.to_thread(self._append_line, line)
        except OSError as e:
            logger.error(
                f"Failed to append review to {self.path}: {str(e)}",
                extra={"target_id": draft.target_id},
                exc_info=True,
            )
            raise UnavailableError(f"Review log unavailable: {str(e)}") from e
        return record

    async def query_by_target(self, target_id: str) -> List[ReviewRecord]:
        records = await self._load()
        return newest_first([r for r in records if r.target_id == target_id])

    async def latest(self, limit: int) -> List[ReviewRecord]:
        return newest_first(await self._load())[:limit]

    async def _load(self) -> List[ReviewRecord]:
        try:
            return await asyncio.to_thread(self._read_all)
        except OSError as e:
            logger.error(f"Failed to read review log {self.path}: {str(e)}", exc_info=True)
            raise UnavailableError(f"Review log unavailable: {str(e)}") from e

    def _append_line(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line)
            fh.flush()

    def _read_all(self) -> List[ReviewRecord]:
        if not self.path.exists():
            return []

        records = []
        with self.path.open("r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                if not line.strip():
                    continue
                try:
                    records.append(ReviewRecord.from_dict(json.loads(line)))
                except (ValueError, KeyError, TypeError) as e:
                    raise UnavailableError(
                        "Review log is corrupt",
                        details={"path": str(self.path), "line": lineno},
                    ) from e
        return records
