"""
Pydantic schemas package.
Exports all request/response models.
"""
from ndis_directory.schemas.review import (
    ReviewInput,
    ReviewOutput,
    ReviewSubmitResponse,
    ReviewListResponse,
    ReviewFeedResponse,
)
from ndis_directory.schemas.service import (
    Provider,
    ProviderCreate,
    PremiumUpdate,
    ProviderResponse,
    ServiceSummary,
    ServiceDetail,
    SearchResponse,
)
from ndis_directory.schemas.error import ErrorCode, ErrorDetail, ErrorResponse, ERROR_CODE_TO_HTTP_STATUS

__all__ = [
    # Review
    "ReviewInput",
    "ReviewOutput",
    "ReviewSubmitResponse",
    "ReviewListResponse",
    "ReviewFeedResponse",
    # Provider
    "Provider",
    "ProviderCreate",
    "PremiumUpdate",
    "ProviderResponse",
    "ServiceSummary",
    "ServiceDetail",
    "SearchResponse",
    # Error
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "ERROR_CODE_TO_HTTP_STATUS",
]
