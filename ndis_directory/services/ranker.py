"""
Search ranking and filtering for provider listings.
"""
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, TypeVar


class Rankable(Protocol):
    is_featured: bool
    average_rating: float
    review_count: int


class Searchable(Protocol):
    name: str
    location: Optional[str]
    category: Sequence[str]
    description: Optional[str]


R = TypeVar("R", bound=Rankable)
S = TypeVar("S", bound=Searchable)


def _rank_key(entity: Rankable) -> Tuple[bool, float, int]:
    return (not entity.is_featured, -entity.average_rating, -entity.review_count)


def rank(entities: Iterable[R]) -> List[R]:
    """
    Order listings for presentation.

    Featured listings come first, then higher average rating, then more
    reviews. ``sorted`` is stable, so remaining ties keep their input order.
    """
    return sorted(entities, key=_rank_key)


def matches_query(entity: Searchable, query: str) -> bool:
    """Case-insensitive substring match on name, location, categories and description."""
    q = query.lower()
    return (
        q in (entity.name or "").lower()
        or q in (entity.location or "").lower()
        or any(q in c.lower() for c in entity.category)
        or q in (entity.description or "").lower()
    )


def filter_by_query(entities: Iterable[S], query: Optional[str]) -> List[S]:
    """Keep entities matching ``query``, preserving order. Blank queries keep everything."""
    query = (query or "").strip()
    if not query:
        return list(entities)
    return [e for e in entities if matches_query(e, query)]
