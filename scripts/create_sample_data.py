"""
Script to create a sample provider catalog and reviews for local testing.

Writes providers to SERVICES_FILE and submits reviews through the review
backend selected by REVIEW_BACKEND, so search results have ratings to rank.
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ndis_directory.core.config import settings
from ndis_directory.db.database import init_db, close_db
from ndis_directory.schemas.service import ProviderCreate
from ndis_directory.services.catalog import ServiceCatalog
from ndis_directory.services.review_service import ReviewService, build_review_store


SAMPLE_SERVICES = [
    {
        "name": "Community Care Support",
        "category": ["Support Worker"],
        "description": "Experienced support workers for daily activities and community access",
        "phone": "0400 123 456",
        "location": "Sydney, NSW",
        "isRegistered": True,
    },
    {
        "name": "Bright Future SIL",
        "category": ["SIL Provider"],
        "description": "Supported Independent Living accommodations with 24/7 support",
        "phone": "0400 234 567",
        "location": "Melbourne, VIC",
        "isRegistered": True,
        "isPremium": True,
    },
    {
        "name": "Therapy Plus",
        "category": ["Occupational Therapist"],
        "description": "NDIS registered occupational therapy services",
        "phone": "0400 345 678",
        "location": "Brisbane, QLD",
        "isRegistered": True,
    },
]

# (provider index, rating, comment, author)
SAMPLE_REVIEWS = [
    (0, 5, "Our support worker is reliable and always on time.", "Priya"),
    (0, 4, "Good communication, occasional rostering gaps.", "Tom"),
    (1, 3, "Nice house, staff turnover is high.", "Alex"),
    (2, 5, "Made a real difference to my daily routine.", "Jordan"),
    (2, 5, "Thorough assessment and practical advice.", "Sam"),
    (2, 4, "Waitlist was long but worth it.", "Lee"),
]


async def create_sample_data():
    """Create sample providers and reviews."""
    print(f"Creating sample catalog at {settings.SERVICES_FILE}...")
    catalog = ServiceCatalog(settings.SERVICES_FILE)

    providers = []
    for data in SAMPLE_SERVICES:
        providers.append(await catalog.add_service(ProviderCreate(**data)))
    print(f"✓ Created {len(providers)} providers")

    store = build_review_store(settings)
    reviews = ReviewService(store)

    print(f"Submitting {len(SAMPLE_REVIEWS)} reviews via '{settings.REVIEW_BACKEND}' backend...")
    for index, rating, comment, author in SAMPLE_REVIEWS:
        provider = providers[index]
        await reviews.add_review(
            target_id=provider.id,
            rating=rating,
            comment=comment,
            author=author,
            provider_name=provider.name,
        )

    if settings.REVIEW_BACKEND == "hosted":
        await store.close()

    print(f"✓ Created {len(SAMPLE_REVIEWS)} reviews")
    print("\nTry GET /api/search to see the ranked listing.")


async def main():
    """Main entry point."""
    if settings.REVIEW_BACKEND == "sql":
        print("Initializing database...")
        await init_db()
        print("✓ Database initialized\n")

    try:
        await create_sample_data()
    finally:
        if settings.REVIEW_BACKEND == "sql":
            await close_db()


if __name__ == "__main__":
    asyncio.run(main())
