"""Destination model definition."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.catalog import TourType
from ..core.database import Base

if TYPE_CHECKING:
    from .holiday_type import HolidayType


class Destination(Base):
    """Destination entity representing a place the agency sells trips to."""

    __tablename__ = "destinations"

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    # Identity
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Content
    description: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    duration: Mapped[str | None] = mapped_column(String(100), nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Classification
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    country: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    state: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    tour_type: Mapped[str] = mapped_column(String(20), nullable=False, default=TourType.INDIA.value, index=True)
    holiday_type_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("holiday_types.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Flags and counters
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_trending: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    visit_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    # Constraints
    __table_args__ = (
        CheckConstraint("visit_count >= 0", name="ck_destination_visit_count_non_negative"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_destination_rating_range"),
        Index("ix_destinations_tour_type_country", "tour_type", "country"),
        Index("ix_destinations_country_state", "country", "state"),
    )

    # Relationships
    holiday_type: Mapped[Optional["HolidayType"]] = relationship("HolidayType", back_populates="destinations")

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}', slug='{self.slug}')>"
