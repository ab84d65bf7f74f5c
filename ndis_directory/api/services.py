"""
Provider search and detail endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from ndis_directory.api.deps import get_directory
from ndis_directory.core.middleware import get_request_id
from ndis_directory.schemas.service import SearchResponse, ServiceDetail
from ndis_directory.services.directory import DirectoryService


router = APIRouter(prefix="/api", tags=["services"])


@router.get("/search", response_model=SearchResponse)
async def search_services(
    q: Optional[str] = Query(None, description="Free-text filter"),
    directory: DirectoryService = Depends(get_directory),
):
    """
    Search providers.

    Featured providers come first, then by average rating and review count.

    Raises:
        503: Catalog or review storage unavailable
    """
    results = await directory.search(q)
    return SearchResponse(
        request_id=get_request_id(),
        query=q,
        count=len(results),
        results=results,
    )


@router.get("/service/{service_id}", response_model=ServiceDetail)
async def get_service(
    service_id: str,
    directory: DirectoryService = Depends(get_directory),
):
    """
    Get one provider with its reviews and rating summary.

    Raises:
        404: Provider not found
        503: Catalog or review storage unavailable
    """
    return await directory.get_detail(service_id)
