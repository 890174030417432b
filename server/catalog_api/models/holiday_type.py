"""Holiday type model definition."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..core.database import Base

if TYPE_CHECKING:
    from .destination import Destination
    from .package import Package


class HolidayType(Base):
    """Holiday theme (honeymoon, pilgrimage, ...) used to group packages."""

    __tablename__ = "holiday_types"

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    # Identity
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    # Card content
    description: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    travelers: Mapped[str] = mapped_column(String(100), nullable=False)
    badge: Mapped[str] = mapped_column(String(100), nullable=False)
    # Display text such as "From ₹24,999"
    price: Mapped[str] = mapped_column(String(100), nullable=False)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Classification
    country: Mapped[str | None] = mapped_column(String(128), nullable=True)
    state: Mapped[str | None] = mapped_column(String(128), nullable=True)
    tour_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Flags and ordering
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

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

    # Relationships
    packages: Mapped[list["Package"]] = relationship("Package", back_populates="holiday_type")
    destinations: Mapped[list["Destination"]] = relationship("Destination", back_populates="holiday_type")

    def __repr__(self) -> str:
        return f"<HolidayType(id={self.id}, title='{self.title}', slug='{self.slug}')>"
