"""
Services package.
Review storage, rating aggregation, ranking and catalog logic.
"""
from ndis_directory.services.aggregator import RatingSummary, aggregate
from ndis_directory.services.ranker import rank, filter_by_query
from ndis_directory.services.review_store import (
    ReviewDraft,
    ReviewRecord,
    ReviewStore,
    MemoryReviewStore,
    JsonFileReviewStore,
)
from ndis_directory.services.review_service import ReviewService, build_review_store
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.directory import DirectoryService

__all__ = [
    "RatingSummary",
    "aggregate",
    "rank",
    "filter_by_query",
    "ReviewDraft",
    "ReviewRecord",
    "ReviewStore",
    "MemoryReviewStore",
    "JsonFileReviewStore",
    "ReviewService",
    "build_review_store",
    "ServiceCatalog",
    "DirectoryService",
]
