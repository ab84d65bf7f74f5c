"""
Rating aggregation.

Summary statistics are derived from the stored reviews on every read and
never persisted, so they always agree with the review data.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    """Average rating (one decimal) and number of reviews for a provider."""

    average_rating: float
    review_count: int


def _rating_of(review: Any) -> int:
    if isinstance(review, Mapping):
        return review["rating"]
    return review.rating


def aggregate(reviews: Iterable[Any]) -> RatingSummary:
    """
    Compute the rating summary of a review sequence.

    Accepts review records or plain mappings with a ``rating`` key. The mean
    is computed exactly and rounded half away from zero, so 14/3 gives 4.7
    and 17/4 gives 4.3. An empty sequence has an average of 0.
    """
    ratings = [_rating_of(review) for review in reviews]
    if not ratings:
        return RatingSummary(average_rating=0.0, review_count=0)

    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    rounded = mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
    return RatingSummary(average_rating=float(rounded), review_count=len(ratings))
