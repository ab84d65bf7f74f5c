"""Unit tests for search ranking and filtering."""

from dataclasses import dataclass, field
from typing import List, Optional

from ndis_directory.schemas.service import ServiceSummary
from ndis_directory.services.ranker import filter_by_query, matches_query, rank


@dataclass
class Listing:
    name: str
    is_featured: bool = False
    average_rating: float = 0.0
    review_count: int = 0
    location: Optional[str] = None
    category: List[str] = field(default_factory=list)
    description: Optional[str] = None


def _names(listings):
    return [item.name for item in listings]


def test_featured_first_then_rating_then_count():
    a = Listing("A", is_featured=False, average_rating=4.9, review_count=10)
    b = Listing("B", is_featured=True, average_rating=3.0, review_count=1)
    c = Listing("C", is_featured=False, average_rating=4.9, review_count=20)

    assert _names(rank([a, b, c])) == ["B", "C", "A"]


def test_higher_rating_beats_more_reviews():
    many = Listing("many", average_rating=4.0, review_count=100)
    best = Listing("best", average_rating=4.5, review_count=1)

    assert _names(rank([many, best])) == ["best", "many"]


def test_featured_beats_any_rating():
    plain = Listing("plain", average_rating=5.0, review_count=50)
    featured = Listing("featured", is_featured=True)

    assert _names(rank([plain, featured])) == ["featured", "plain"]


def test_full_ties_keep_input_order():
    listings = [Listing(name, average_rating=4.0, review_count=3) for name in "qwerty"]

    assert _names(rank(listings)) == list("qwerty")


def test_unreviewed_listings_sort_last_among_non_featured():
    new = Listing("new")
    rated = Listing("rated", average_rating=1.0, review_count=1)

    assert _names(rank([new, rated])) == ["rated", "new"]


def test_rank_does_not_mutate_input():
    listings = [Listing("x"), Listing("y", is_featured=True)]
    rank(listings)
    assert _names(listings) == ["x", "y"]


def test_rank_works_on_service_summaries():
    summaries = [
        ServiceSummary(id="1", name="A", average_rating=4.9, review_count=10),
        ServiceSummary(id="2", name="B", is_featured=True, average_rating=3.0, review_count=1),
        ServiceSummary(id="3", name="C", average_rating=4.9, review_count=20),
    ]
    assert [s.id for s in rank(summaries)] == ["2", "3", "1"]


def test_matches_query_fields_case_insensitively():
    listing = Listing(
        "Therapy Plus",
        location="Brisbane, QLD",
        category=["Occupational Therapist"],
        description="NDIS registered services",
    )

    assert matches_query(listing, "therapy")
    assert matches_query(listing, "BRISBANE")
    assert matches_query(listing, "occupational")
    assert matches_query(listing, "registered")
    assert not matches_query(listing, "sydney")


def test_matches_query_tolerates_missing_fields():
    assert not matches_query(Listing("Bare"), "sydney")


def test_filter_preserves_order_and_blank_query_keeps_all():
    listings = [
        Listing("Sydney Support", location="Sydney"),
        Listing("Perth Care", location="Perth"),
        Listing("North Sydney OT", location="Sydney"),
    ]

    assert _names(filter_by_query(listings, "sydney")) == ["Sydney Support", "North Sydney OT"]
    assert _names(filter_by_query(listings, "   ")) == _names(listings)
    assert _names(filter_by_query(listings, None)) == _names(listings)
