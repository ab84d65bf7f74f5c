"""
Health check endpoint.
"""
from fastapi import APIRouter
from pydantic import BaseModel, Field, ConfigDict

from ndis_directory.core.config import settings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    review_backend: str = Field(..., alias="reviewBackend")

    model_config = ConfigDict(populate_by_name=True)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Liveness check. Does not touch storage.

    Returns:
        200: Service is up
    """
    return HealthResponse(status="ok", review_backend=settings.REVIEW_BACKEND)
