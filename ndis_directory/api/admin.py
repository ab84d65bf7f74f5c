"""
Admin API endpoints for the provider catalog.
"""
from fastapi import APIRouter, Depends, status

from ndis_directory.api.deps import get_catalog, verify_admin_key
from ndis_directory.core.middleware import get_request_id
from ndis_directory.core.logging import logger
from ndis_directory.schemas.service import PremiumUpdate, ProviderCreate, ProviderResponse
from ndis_directory.services.catalog import ServiceCatalog


router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/services", response_model=ProviderResponse, status_code=status.HTTP_201_CREATED)
async def add_service(
    request: ProviderCreate,
    catalog: ServiceCatalog = Depends(get_catalog),
    admin_key: str = Depends(verify_admin_key),
):
    """
    Add a provider to the catalog.

    Raises:
        401: Invalid admin API key
        422: Invalid provider data
        503: Catalog unavailable
    """
    request_id = get_request_id()

    logger.info(
        "Processing add service request",
        extra={"request_id": request_id, "service_name": request.name},
    )

    provider = await catalog.add_service(request)
    return ProviderResponse(request_id=request_id, service=provider)


@router.put("/services/{service_id}/premium", response_model=ProviderResponse)
async def set_premium(
    service_id: str,
    request: PremiumUpdate,
    catalog: ServiceCatalog = Depends(get_catalog),
    admin_key: str = Depends(verify_admin_key),
):
    """
    Set or clear a provider's premium (featured) flag.

    Raises:
        401: Invalid admin API key
        404: Provider not found
        503: Catalog unavailable
    """
    request_id = get_request_id()

    provider = await catalog.set_premium(service_id, request.is_premium)
    return ProviderResponse(request_id=request_id, service=provider)
