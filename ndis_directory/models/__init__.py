"""
SQLAlchemy models package.
Exports all database models for easy import.
"""
from ndis_directory.models.review import Review

__all__ = [
    "Review",
]
