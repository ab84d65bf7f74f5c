"""
Review model - stores submitted provider reviews.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    CheckConstraint,
    Column,
    String,
    Text,
    Integer,
    DateTime,
    Index,
    Uuid,
)

from ndis_directory.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    """
    Reviews table.
    Append-only: rows are inserted once and never updated or deleted.
    """

    __tablename__ = "reviews"

    # Primary Key
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Provider being reviewed (not a foreign key, the catalog lives elsewhere)
    target_id = Column(String(255), nullable=False)
    provider_name = Column(String(255), nullable=True)

    # Review Content
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    author = Column(String(255), nullable=False)

    # Timestamp
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        Index("idx_reviews_target_created", "target_id", "created_at"),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, target_id={self.target_id}, rating={self.rating})>"
