"""
Pydantic schemas for Review-related requests and responses.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, StrictInt


class ReviewInput(BaseModel):
    """
    Request schema for review submission.
    POST /api/service/{id}/reviews

    Range and emptiness checks are done by the review service so that every
    caller gets the same rules; the schema only enforces JSON types.
    """

    rating: StrictInt = Field(..., description="Star rating (1-5)")
    comment: str = Field(..., description="Review text")
    author: Optional[str] = Field(None, description="Reviewer display name (default 'Anonymous')")
    provider_name: Optional[str] = Field(
        None, alias="providerName", description="Provider display name at submission time"
    )

    model_config = ConfigDict(populate_by_name=True)


class ReviewOutput(BaseModel):
    """
    Output schema for a stored review.
    """

    id: str = Field(..., description="Review ID")
    target_id: str = Field(..., alias="targetId", description="Reviewed provider ID")
    provider_name: Optional[str] = Field(None, alias="providerName")
    rating: int
    comment: str
    author: str
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ReviewSubmitResponse(BaseModel):
    """
    Response schema for review submission.
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    success: bool = Field(True, description="Whether the review was stored")
    message: str = Field("Review submitted!", description="User-facing confirmation")
    review: ReviewOutput = Field(..., description="The stored review")

    model_config = ConfigDict(populate_by_name=True)


class ReviewListResponse(BaseModel):
    """
    Response schema for a provider's reviews.
    GET /api/service/{id}/reviews
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    target_id: str = Field(..., alias="targetId")
    average_rating: float = Field(..., alias="averageRating")
    review_count: int = Field(..., alias="reviewCount")
    reviews: List[ReviewOutput] = Field(..., description="Reviews, newest first")

    model_config = ConfigDict(populate_by_name=True)


class ReviewFeedResponse(BaseModel):
    """
    Response schema for the recent-reviews feed.
    GET /api/reviews
    """

    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")
    count: int = Field(..., description="Number of reviews returned")
    reviews: List[ReviewOutput] = Field(..., description="Reviews across all providers, newest first")

    model_config = ConfigDict(populate_by_name=True)
