"""
Review API endpoints.
"""
from fastapi import APIRouter, Depends, Query, status

from ndis_directory.api.deps import get_catalog, get_review_service
from ndis_directory.core.middleware import get_request_id
from ndis_directory.core.logging import logger
from ndis_directory.schemas.review import (
    ReviewFeedResponse,
    ReviewInput,
    ReviewOutput,
    ReviewListResponse,
    ReviewSubmitResponse,
)
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.review_service import FEED_LIMIT, ReviewService


router = APIRouter(prefix="/api", tags=["reviews"])

ANONYMOUS_AUTHOR = "Anonymous"


@router.get("/reviews", response_model=ReviewFeedResponse)
async def latest_reviews(
    limit: int = Query(FEED_LIMIT, ge=1, le=200, description="Maximum number of reviews"),
    reviews: ReviewService = Depends(get_review_service),
):
    """
    Get the most recent reviews across all providers, newest first.

    Raises:
        422: limit outside 1-200
        503: Review storage unavailable
    """
    request_id = get_request_id()

    records = await reviews.get_latest_reviews(limit)

    logger.info(
        "Review feed fetched",
        extra={"request_id": request_id, "limit": limit, "count": len(records)},
    )

    return ReviewFeedResponse(
        request_id=request_id,
        count=len(records),
        reviews=[ReviewOutput.model_validate(r) for r in records],
    )


@router.get("/service/{service_id}/reviews", response_model=ReviewListResponse)
async def list_reviews(
    service_id: str,
    reviews: ReviewService = Depends(get_review_service),
):
    """
    Get reviews for a provider, newest first, with the rating summary.

    A provider without reviews returns an empty list.

    Raises:
        503: Review storage unavailable
    """
    request_id = get_request_id()

    records, summary = await reviews.get_reviews_with_summary(service_id)

    logger.info(
        "Reviews fetched",
        extra={"request_id": request_id, "service_id": service_id, "count": summary.review_count},
    )

    return ReviewListResponse(
        request_id=request_id,
        target_id=service_id,
        average_rating=summary.average_rating,
        review_count=summary.review_count,
        reviews=[ReviewOutput.model_validate(r) for r in records],
    )


@router.post(
    "/service/{service_id}/reviews",
    response_model=ReviewSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_review(
    service_id: str,
    request: ReviewInput,
    reviews: ReviewService = Depends(get_review_service),
    catalog: ServiceCatalog = Depends(get_catalog),
):
    """
    Submit a review for a provider.

    Raises:
        404: Provider not in the catalog
        422: Rating outside 1-5, or empty comment/author
        503: Review storage unavailable
    """
    request_id = get_request_id()

    logger.info(
        "Processing review submission",
        extra={"request_id": request_id, "service_id": service_id, "rating": request.rating},
    )

    provider = await catalog.require_service(service_id)

    author = request.author if request.author is not None else ANONYMOUS_AUTHOR
    record = await reviews.add_review(
        target_id=provider.id,
        rating=request.rating,
        comment=request.comment,
        author=author,
        provider_name=request.provider_name or provider.name,
    )

    return ReviewSubmitResponse(
        request_id=request_id,
        review=ReviewOutput.model_validate(record),
    )
