"""
Review service - review submission and retrieval.

Handles:
- Input validation (rating range, required text fields)
- Delegating persistence to the configured review store
- Building the review store selected by ``REVIEW_BACKEND``
"""
from typing import Any, List, Optional, Tuple

from ndis_directory.core.config import Settings
from ndis_directory.core.exceptions import ValidationError
from ndis_directory.core.logging import logger
from ndis_directory.services.aggregator import RatingSummary, aggregate
from ndis_directory.services.review_store import (
    JsonFileReviewStore,
    MemoryReviewStore,
    ReviewDraft,
    ReviewRecord,
    ReviewStore,
)

MIN_RATING = 1
MAX_RATING = 5
FEED_LIMIT = 50


def validate_review_input(rating: Any, comment: Any, author: Any) -> Tuple[int, str, str]:
    """
    Validate raw review input.

    Returns:
        (rating, trimmed comment, trimmed author)

    Raises:
        ValidationError: rating is not an integer in [1, 5], or comment/author
            is empty after trimming
    """
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(
            "Rating must be an integer between 1 and 5",
            details={"field": "rating", "value": repr(rating)},
        )
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            "Rating must be between 1 and 5",
            details={"field": "rating", "value": rating},
        )

    fields = {}
    for name, value in (("comment", comment), ("author", author)):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{name} is required", details={"field": name})
        fields[name] = value.strip()

    return rating, fields["comment"], fields["author"]


class ReviewService:
    """Review submission and lookup on top of a review store."""

    def __init__(self, store: ReviewStore):
        self.store = store

    async def add_review(
        self,
        target_id: str,
        rating: Any,
        comment: Any,
        author: Any,
        provider_name: Optional[str] = None,
    ) -> ReviewRecord:
        """
        Validate and append a review.

        Nothing is written when validation fails. Storage failures propagate
        as UnavailableError and are not retried here.
        """
        rating, comment, author = validate_review_input(rating, comment, author)

        draft = ReviewDraft(
            target_id=str(target_id),
            rating=rating,
            comment=comment,
            author=author,
            provider_name=provider_name,
        )
        record = await self.store.append(draft)

        logger.info(
            "Review submitted",
            extra={"review_id": record.id, "target_id": record.target_id, "rating": record.rating},
        )
        return record

    async def get_reviews(self, target_id: str) -> List[ReviewRecord]:
        """Reviews for a target, newest first. Empty list when there are none."""
        return await self.store.query_by_target(str(target_id))

    async def get_latest_reviews(self, limit: int = FEED_LIMIT) -> List[ReviewRecord]:
        """Most recent reviews across all providers, newest first."""
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(
                "Limit must be a positive integer",
                details={"field": "limit", "value": repr(limit)},
            )
        return await self.store.latest(limit)

    async def get_reviews_with_summary(
        self, target_id: str
    ) -> Tuple[List[ReviewRecord], RatingSummary]:
        reviews = await self.get_reviews(target_id)
        return reviews, aggregate(reviews)


def build_review_store(settings: Settings) -> ReviewStore:
    """Create the review store selected by settings.REVIEW_BACKEND."""
    backend = settings.REVIEW_BACKEND

    if backend == "memory":
        return MemoryReviewStore()
    if backend == "file":
        return JsonFileReviewStore(settings.REVIEWS_FILE)
    if backend == "sql":
        from ndis_directory.services.sql_store import SqlReviewStore

        return SqlReviewStore()
    if backend == "hosted":
        from ndis_directory.services.hosted_store import HostedReviewStore

        if not settings.HOSTED_URL:
            raise ValueError("HOSTED_URL must be set when REVIEW_BACKEND=hosted")
        return HostedReviewStore(
            base_url=settings.HOSTED_URL,
            api_key=settings.HOSTED_API_KEY,
            timeout=settings.HOSTED_TIMEOUT,
        )

    raise ValueError(f"Unknown review backend: {backend}")
