"""Tests for review submission and retrieval through the review service."""

import asyncio

import pytest

from ndis_directory.core.config import Settings
from ndis_directory.core.exceptions import UnavailableError, ValidationError
from ndis_directory.services.hosted_store import HostedReviewStore
from ndis_directory.services.review_service import ReviewService, build_review_store
from ndis_directory.services.review_store import JsonFileReviewStore, MemoryReviewStore


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_valid_review_echoes_input(review_service, rating):
    review = asyncio.run(review_service.add_review("7", rating, "  Great staff  ", " Kim "))

    assert review.target_id == "7"
    assert review.rating == rating
    assert review.comment == "Great staff"
    assert review.author == "Kim"
    assert review.id
    assert review.created_at.tzinfo is not None


@pytest.mark.parametrize("rating", [0, 6, -1, 3.5, 4.0, "4", None, True])
def test_invalid_rating_is_rejected_and_not_stored(review_service, rating):
    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(review_service.add_review("7", rating, "Fine", "Kim"))

    assert exc_info.value.details["field"] == "rating"
    assert asyncio.run(review_service.get_reviews("7")) == []


@pytest.mark.parametrize(
    "comment, author, field",
    [
        ("", "Kim", "comment"),
        ("   ", "Kim", "comment"),
        (None, "Kim", "comment"),
        ("Fine", "", "author"),
        ("Fine", "\t\n", "author"),
    ],
)
def test_blank_text_fields_are_rejected(review_service, comment, author, field):
    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(review_service.add_review("7", 4, comment, author))

    assert exc_info.value.details["field"] == field
    assert asyncio.run(review_service.get_reviews("7")) == []


def test_unknown_target_has_no_reviews(review_service):
    assert asyncio.run(review_service.get_reviews("does-not-exist")) == []


def test_target_is_not_checked_against_catalog(review_service):
    review = asyncio.run(review_service.add_review("ghost-99", 3, "Never existed?", "Kim"))
    assert asyncio.run(review_service.get_reviews("ghost-99")) == [review]


def test_reviews_are_newest_first_and_scoped_to_target(review_service):
    async def scenario():
        first = await review_service.add_review("1", 5, "first", "A")
        await review_service.add_review("2", 1, "other provider", "B")
        second = await review_service.add_review("1", 3, "second", "C")
        return first, second, await review_service.get_reviews("1")

    first, second, reviews = asyncio.run(scenario())
    assert [r.id for r in reviews] == [second.id, first.id]


def test_repeated_reads_are_identical(review_service):
    async def scenario():
        for rating in (5, 4, 3, 2):
            await review_service.add_review("1", rating, "text", "A")
        return await review_service.get_reviews("1"), await review_service.get_reviews("1")

    once, twice = asyncio.run(scenario())
    assert once == twice


def test_concurrent_submissions_all_land_with_unique_ids(review_service):
    async def scenario():
        created = await asyncio.gather(
            *(review_service.add_review("1", (i % 5) + 1, f"review {i}", f"user {i}") for i in range(25))
        )
        return created, await review_service.get_reviews("1")

    created, stored = asyncio.run(scenario())
    assert len({r.id for r in created}) == 25
    assert {r.id for r in stored} == {r.id for r in created}


def test_summary_tracks_stored_reviews(review_service):
    async def scenario():
        for rating in (5, 5, 4):
            await review_service.add_review("1", rating, "text", "A")
        return await review_service.get_reviews_with_summary("1")

    reviews, summary = asyncio.run(scenario())
    assert len(reviews) == 3
    assert summary.average_rating == 4.7
    assert summary.review_count == 3


class FailingStore:
    async def append(self, draft):
        raise UnavailableError("down")

    async def query_by_target(self, target_id):
        raise UnavailableError("down")

    async def latest(self, limit):
        raise UnavailableError("down")


def test_storage_failures_propagate():
    service = ReviewService(FailingStore())

    with pytest.raises(UnavailableError):
        asyncio.run(service.add_review("1", 4, "text", "A"))
    with pytest.raises(UnavailableError):
        asyncio.run(service.get_reviews("1"))


def test_latest_reviews_span_targets_newest_first(review_service):
    async def scenario():
        created = [
            await review_service.add_review(target, 4, "text", "A")
            for target in ("1", "2", "3", "1")
        ]
        return created, await review_service.get_latest_reviews(3)

    created, latest = asyncio.run(scenario())
    assert [r.id for r in latest] == [r.id for r in reversed(created)][:3]


@pytest.mark.parametrize("limit", [0, -5, True, 2.5, "10"])
def test_latest_reviews_rejects_bad_limit(limit):
    service = ReviewService(FailingStore())

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.get_latest_reviews(limit))
    assert exc_info.value.details["field"] == "limit"


def test_validation_runs_before_storage():
    service = ReviewService(FailingStore())

    with pytest.raises(ValidationError):
        asyncio.run(service.add_review("1", 9, "text", "A"))


def test_build_review_store_selects_backend(tmp_path):
    assert isinstance(build_review_store(Settings(REVIEW_BACKEND="memory")), MemoryReviewStore)

    file_store = build_review_store(
        Settings(REVIEW_BACKEND="file", REVIEWS_FILE=str(tmp_path / "r.jsonl"))
    )
    assert isinstance(file_store, JsonFileReviewStore)

    hosted = build_review_store(
        Settings(REVIEW_BACKEND="hosted", HOSTED_URL="https://db.example.com", HOSTED_API_KEY="k")
    )
    assert isinstance(hosted, HostedReviewStore)


def test_hosted_backend_requires_url():
    with pytest.raises(ValueError):
        build_review_store(Settings(REVIEW_BACKEND="hosted", HOSTED_URL=None))


def test_unknown_backend_is_rejected_by_settings():
    with pytest.raises(ValueError):
        Settings(REVIEW_BACKEND="redis")
