"""
Directory service - provider search and detail views.

Combines the provider catalog with live review data. Ratings are
recomputed from the review store on every call; nothing is cached.
"""
import asyncio
from typing import List, Optional

from ndis_directory.core.logging import logger
from ndis_directory.schemas.review import ReviewOutput
from ndis_directory.schemas.service import Provider, ServiceDetail, ServiceSummary
from ndis_directory.services.aggregator import RatingSummary
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.ranker import filter_by_query, rank
from ndis_directory.services.review_service import ReviewService


def _summarize(provider: Provider, summary: RatingSummary) -> dict:
    return dict(
        provider.model_dump(),
        average_rating=summary.average_rating,
        review_count=summary.review_count,
        is_featured=provider.is_premium,
    )


class DirectoryService:
    """Search and detail lookups over the catalog and the review store."""

    def __init__(self, catalog: ServiceCatalog, reviews: ReviewService):
        self.catalog = catalog
        self.reviews = reviews

    async def search(self, query: Optional[str] = None) -> List[ServiceSummary]:
        """
        Ranked providers, optionally filtered by free text.

        Ranking runs over the whole catalog and filtering keeps rank order.
        """
        providers = await self.catalog.list_services()

        # One lookup per provider, issued concurrently; results keep catalog order
        lookups = await asyncio.gather(
            *(self.reviews.get_reviews_with_summary(p.id) for p in providers)
        )
        enriched = [
            ServiceSummary(**_summarize(provider, summary))
            for provider, (_, summary) in zip(providers, lookups)
        ]

        results = filter_by_query(rank(enriched), query)

        logger.info(
            "Search completed",
            extra={"query": query, "catalog_size": len(providers), "results": len(results)},
        )
        return results

    async def get_detail(self, service_id: str) -> ServiceDetail:
        """Provider with reviews (newest first) and rating summary. NotFoundError if unknown."""
        provider = await self.catalog.require_service(service_id)
        reviews, summary = await self.reviews.get_reviews_with_summary(provider.id)

        return ServiceDetail(
            **_summarize(provider, summary),
            reviews=[ReviewOutput.model_validate(r) for r in reviews],
        )
