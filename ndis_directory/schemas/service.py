"""
Pydantic schemas for provider listings (the directory catalog).
"""
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

from ndis_directory.schemas.review import ReviewOutput


class ProviderBase(BaseModel):
    """Descriptive provider fields shared by catalog entries and admin input."""

    name: str = Field(..., min_length=1, description="Provider name")
    category: List[str] = Field(default_factory=list, description="Service categories")
    description: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    is_registered: bool = Field(
        False, alias="isRegistered", description="Whether the provider is NDIS registered"
    )

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        """Older catalog files store a single category string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v

    @field_validator("is_registered", mode="before")
    @classmethod
    def coerce_registered(cls, v: Any) -> Any:
        """Accept the 'Yes'/'No' strings used by the listing form."""
        if isinstance(v, str):
            return v.strip().lower() in ("yes", "true", "1")
        return v


class Provider(ProviderBase):
    """A provider as stored in the catalog file."""

    id: str = Field(..., description="Provider ID")
    is_premium: bool = Field(False, alias="isPremium", description="Paid featured listing")
    date_added: Optional[str] = Field(None, alias="dateAdded")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ProviderCreate(ProviderBase):
    """
    Request schema for adding a provider.
    POST /api/admin/services
    """

    is_premium: bool = Field(False, alias="isPremium")


class PremiumUpdate(BaseModel):
    """
    Request schema for toggling the featured flag.
    PUT /api/admin/services/{id}/premium
    """

    is_premium: bool = Field(..., alias="isPremium")

    model_config = ConfigDict(populate_by_name=True)


class ServiceSummary(Provider):
    """Provider enriched with rating data for search results."""

    average_rating: float = Field(0.0, alias="averageRating")
    review_count: int = Field(0, alias="reviewCount")
    is_featured: bool = Field(False, alias="isFeatured")


class ServiceDetail(ServiceSummary):
    """
    Provider with its reviews.
    GET /api/service/{id}
    """

    reviews: List[ReviewOutput] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """
    Response schema for provider search.
    GET /api/search
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    query: Optional[str] = Field(None, description="Search text, if any")
    count: int = Field(..., description="Number of results")
    results: List[ServiceSummary] = Field(..., description="Ranked providers")

    model_config = ConfigDict(populate_by_name=True)


class ProviderResponse(BaseModel):
    """
    Response schema for admin catalog changes.
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    service: Provider

    model_config = ConfigDict(populate_by_name=True)
