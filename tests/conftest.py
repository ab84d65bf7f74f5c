import asyncio
import json
import os

# Settings are read at import time, so configure them before the app loads
os.environ.setdefault("REVIEW_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import pytest
from fastapi.testclient import TestClient

from ndis_directory.api.deps import get_catalog, get_review_service
from ndis_directory.main import app
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.review_service import ReviewService
from ndis_directory.services.review_store import MemoryReviewStore

ADMIN_KEY = "test-admin-key"

SAMPLE_PROVIDERS = [
    {
        "id": 1,
        "name": "Community Care Support",
        "category": "Support Worker",
        "description": "Experienced support workers for daily activities and community access",
        "phone": "0400 123 456",
        "location": "Sydney, NSW",
        "isRegistered": "Yes",
        "dateAdded": "2024-01-15",
    },
    {
        "id": 2,
        "name": "Bright Future SIL",
        "category": ["SIL Provider"],
        "description": "Supported Independent Living accommodations with 24/7 support",
        "phone": "0400 234 567",
        "location": "Melbourne, VIC",
        "isRegistered": "Yes",
        "isPremium": True,
        "dateAdded": "2024-01-10",
    },
    {
        "id": 3,
        "name": "Therapy Plus",
        "category": ["Occupational Therapist"],
        "description": "NDIS registered occupational therapy services",
        "phone": "0400 345 678",
        "location": "Brisbane, QLD",
        "isRegistered": "No",
        "dateAdded": "2024-01-12",
    },
]


@pytest.fixture()
def store():
    return MemoryReviewStore()


@pytest.fixture()
def review_service(store):
    return ReviewService(store)


@pytest.fixture()
def catalog_path(tmp_path):
    path = tmp_path / "services.json"
    path.write_text(json.dumps(SAMPLE_PROVIDERS), encoding="utf-8")
    return path


@pytest.fixture()
def catalog(catalog_path):
    return ServiceCatalog(str(catalog_path))


@pytest.fixture()
def client(review_service, catalog):
    app.dependency_overrides[get_review_service] = lambda: review_service
    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def add_reviews(review_service):
    """Seed reviews synchronously: add_reviews("1", [5, 4, 3])."""

    def _add(target_id, ratings, author="Tester"):
        async def _run():
            for rating in ratings:
                await review_service.add_review(target_id, rating, f"Rated {rating}", author)

        asyncio.run(_run())

    return _add
