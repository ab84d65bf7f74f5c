"""Unit tests for rating aggregation."""

from datetime import datetime, timezone

from ndis_directory.services.aggregator import RatingSummary, aggregate
from ndis_directory.services.review_store import ReviewRecord


def _record(rating, review_id="r1"):
    return ReviewRecord(
        id=review_id,
        target_id="1",
        rating=rating,
        comment="ok",
        author="A",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_empty_sequence_has_zero_average():
    summary = aggregate([])
    assert summary == RatingSummary(average_rating=0, review_count=0)


def test_exact_mean():
    summary = aggregate([{"rating": 5}, {"rating": 4}, {"rating": 3}])
    assert summary.average_rating == 4.0
    assert summary.review_count == 3


def test_mean_rounds_to_one_decimal():
    # 14 / 3 = 4.666...
    summary = aggregate([{"rating": 5}, {"rating": 5}, {"rating": 4}])
    assert summary.average_rating == 4.7
    assert summary.review_count == 3


def test_half_rounds_away_from_zero():
    # 17 / 4 = 4.25; banker's rounding would give 4.2
    summary = aggregate([{"rating": r} for r in (5, 4, 4, 4)])
    assert summary.average_rating == 4.3

    # 9 / 4 = 2.25
    summary = aggregate([{"rating": r} for r in (3, 2, 2, 2)])
    assert summary.average_rating == 2.3


def test_accepts_review_records():
    summary = aggregate([_record(2, "a"), _record(3, "b")])
    assert summary.average_rating == 2.5
    assert summary.review_count == 2


def test_order_does_not_matter():
    ratings = [1, 5, 2, 4, 4, 3, 5]
    forward = aggregate([{"rating": r} for r in ratings])
    backward = aggregate([{"rating": r} for r in reversed(ratings)])
    assert forward == backward


def test_accepts_generators():
    summary = aggregate({"rating": r} for r in (1, 2))
    assert summary == RatingSummary(average_rating=1.5, review_count=2)
