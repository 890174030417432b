"""Fixed departure model definition."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Float, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.catalog import DepartureStatus
from ..core.database import Base


class FixedDeparture(Base):
    """Group tour leaving on a fixed date with a limited number of seats."""

    __tablename__ = "fixed_departures"

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

    # Schedule and seats
    departure_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    return_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)

    # Media and lists
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    inclusions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    exclusions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Flags
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DepartureStatus.UPCOMING.value,
        index=True
    )

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
        CheckConstraint("price >= 0", name="ck_fixed_departure_price_non_negative"),
        CheckConstraint("discount >= 0 AND discount <= 100", name="ck_fixed_departure_discount_range"),
        CheckConstraint("total_seats >= 1", name="ck_fixed_departure_total_seats_positive"),
        CheckConstraint("available_seats >= 0", name="ck_fixed_departure_available_seats_non_negative"),
        CheckConstraint("available_seats <= total_seats", name="ck_fixed_departure_available_lte_total"),
    )

    @property
    def discounted_price(self) -> float:
        """Price after applying the percentage discount."""
        if self.discount and self.discount > 0:
            return self.price - (self.price * self.discount / 100)
        return self.price

    @property
    def booking_percentage(self) -> float:
        """Share of seats already sold, in percent."""
        if not self.total_seats:
            return 0.0
        return (self.total_seats - self.available_seats) / self.total_seats * 100

    def __repr__(self) -> str:
        return (
            f"<FixedDeparture(id={self.id}, slug='{self.slug}', "
            f"departure_date={self.departure_date}, seats={self.available_seats}/{self.total_seats})>"
        )
