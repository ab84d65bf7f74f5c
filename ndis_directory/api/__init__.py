"""
API routers package.
"""
from ndis_directory.api import health, reviews, services, admin

__all__ = [
    "health",
    "reviews",
    "services",
    "admin",
]
