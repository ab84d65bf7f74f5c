"""
API dependencies for dependency injection.

Services are built once in the application lifespan and kept on
``app.state``; tests replace them through ``app.dependency_overrides``.
"""
from fastapi import Depends, Header, Request

from ndis_directory.core.config import settings
from ndis_directory.core.exceptions import UnauthorizedError
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.directory import DirectoryService
from ndis_directory.services.review_service import ReviewService


def get_review_service(request: Request) -> ReviewService:
    """
    Dependency for the review service.

    Usage:
        @router.get("/endpoint")
        async def endpoint(reviews: ReviewService = Depends(get_review_service)):
            ...
    """
    return request.app.state.review_service


def get_catalog(request: Request) -> ServiceCatalog:
    """Dependency for the provider catalog."""
    return request.app.state.catalog


def get_directory(
    catalog: ServiceCatalog = Depends(get_catalog),
    reviews: ReviewService = Depends(get_review_service),
) -> DirectoryService:
    """Dependency for search/detail lookups."""
    return DirectoryService(catalog, reviews)


async def verify_admin_key(x_admin_key: str = Header(..., alias="X-Admin-Key")) -> str:
    """
    Dependency for verifying admin API key.

    Raises:
        UnauthorizedError: If admin key is invalid
    """
    if x_admin_key != settings.ADMIN_API_KEY:
        raise UnauthorizedError("Invalid admin API key")

    return x_admin_key
