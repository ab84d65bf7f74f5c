"""Tests for the directory service (catalog joined with live ratings)."""

import asyncio

from ndis_directory.services.directory import DirectoryService
from ndis_directory.services.review_service import ReviewService
from ndis_directory.services.review_store import MemoryReviewStore


class GatedStore(MemoryReviewStore):
    """Holds every target query until ``expected`` of them are in flight."""

    def __init__(self, expected):
        super().__init__()
        self.expected = expected
        self.in_flight = 0
        self.queried = []
        self._all_started = asyncio.Event()

    async def query_by_target(self, target_id):
        self.queried.append(target_id)
        self.in_flight += 1
        if self.in_flight == self.expected:
            self._all_started.set()
        await self._all_started.wait()
        return await super().query_by_target(target_id)


def test_search_looks_up_providers_concurrently(catalog):
    async def scenario():
        store = GatedStore(expected=3)
        reviews = ReviewService(store)
        await reviews.add_review("1", 5, "great", "A")
        await reviews.add_review("3", 2, "meh", "B")

        directory = DirectoryService(catalog, reviews)
        # one query at a time would never release the gate
        results = await asyncio.wait_for(directory.search(), timeout=2)
        return store, results

    store, results = asyncio.run(scenario())

    assert sorted(store.queried) == ["1", "2", "3"]
    by_id = {r.id: r for r in results}
    assert (by_id["1"].average_rating, by_id["1"].review_count) == (5.0, 1)
    assert (by_id["2"].average_rating, by_id["2"].review_count) == (0.0, 0)
    assert (by_id["3"].average_rating, by_id["3"].review_count) == (2.0, 1)
    assert [r.id for r in results] == ["2", "1", "3"]


def test_detail_uses_single_provider_lookup(catalog):
    async def scenario():
        store = GatedStore(expected=1)
        reviews = ReviewService(store)
        await reviews.add_review("3", 4, "good", "A")
        detail = await DirectoryService(catalog, reviews).get_detail("3")
        return store, detail

    store, detail = asyncio.run(scenario())
    assert store.queried == ["3"]
    assert detail.review_count == 1
    assert detail.reviews[0].comment == "good"
