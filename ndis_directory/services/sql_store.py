"""
Relational review store backed by the ``reviews`` table.
"""
import uuid
from typing import Any, Dict, List

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ndis_directory.core.exceptions import UnavailableError
from ndis_directory.core.logging import logger
from ndis_directory.db.database import AsyncSessionLocal
from ndis_directory.models import Review
from ndis_directory.services.review_store import (
    ReviewDraft,
    ReviewRecord,
    ensure_aware,
    utcnow,
)


def _to_record(row: Review) -> ReviewRecord:
    return ReviewRecord(
        id=str(row.id),
        target_id=row.target_id,
        rating=row.rating,
        comment=row.comment,
        author=row.author,
        created_at=ensure_aware(row.created_at),
        provider_name=row.provider_name,
    )


class SqlReviewStore:
    """
    SQLAlchemy async store.

    Each append is a single INSERT committed in its own session. Ids are
    uuid4 values generated client-side, so concurrent appends never collide.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal):
        self._session_factory = session_factory

    async def append(self, draft: ReviewDraft) -> ReviewRecord:
        row = Review(
            id=uuid.uuid4(),
            target_id=draft.target_id,
            provider_name=draft.provider_name,
            rating=draft.rating,
            comment=draft.comment,
            author=draft.author,
            created_at=utcnow(),
        )

        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                f"Failed to insert review: {str(e)}",
                extra={"target_id": draft.target_id},
                exc_info=True,
            )
            raise UnavailableError(f"Database operation failed: {str(e)}") from e

        logger.debug("Review row inserted", extra={"review_id": str(row.id)})
        return _to_record(row)

    async def query_by_target(self, target_id: str) -> List[ReviewRecord]:
        stmt = (
            select(Review)
            .where(Review.target_id == target_id)
            .order_by(Review.created_at.desc())
        )
        return await self._fetch(stmt, extra={"target_id": target_id})

    async def latest(self, limit: int) -> List[ReviewRecord]:
        stmt = select(Review).order_by(Review.created_at.desc()).limit(limit)
        return await self._fetch(stmt, extra={"limit": limit})

    async def _fetch(self, stmt: Select, extra: Dict[str, Any]) -> List[ReviewRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to query reviews: {str(e)}", extra=extra, exc_info=True)
            raise UnavailableError(f"Database operation failed: {str(e)}") from e

        return [_to_record(row) for row in rows]
