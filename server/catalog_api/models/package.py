"""Package model definition."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.catalog import TourType
from ..core.database import Base

if TYPE_CHECKING:
    from .holiday_type import HolidayType


class Package(Base):
    """Package entity representing a bookable holiday package."""

    __tablename__ = "packages"

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    # Identity
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Content
    description: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    destination: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Pricing
    price: Mapped[float] = mapped_column(Float, nullable=False)
    original_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    discount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

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

    # Media and lists
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    inclusions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    exclusions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Flags
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

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
        CheckConstraint("price >= 0", name="ck_package_price_non_negative"),
        CheckConstraint("discount >= 0 AND discount <= 100", name="ck_package_discount_range"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_package_rating_range"),
        Index("ix_packages_tour_type_country", "tour_type", "country"),
        Index("ix_packages_country_state", "country", "state"),
    )

    # Relationships
    holiday_type: Mapped[Optional["HolidayType"]] = relationship("HolidayType", back_populates="packages")

    @property
    def discounted_price(self) -> float:
        """Price after applying the percentage discount."""
        if self.discount and self.discount > 0:
            return self.price - (self.price * self.discount / 100)
        return self.price

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, title='{self.title}', slug='{self.slug}')>"
