"""Fixed departure Pydantic schemas."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.catalog import DepartureStatus
from .common import SLUG_PATTERN


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CreateFixedDepartureRequest(BaseModel):
    """Request schema for creating a fixed departure."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: str = Field(..., min_length=1)
    short_description: str = Field(..., min_length=1, max_length=1000)
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    discount: int = Field(0, ge=0, le=100)
    duration: str = Field(..., min_length=1, max_length=100)
    destination: str = Field(..., min_length=1, max_length=255)
    departure_date: datetime = Field(..., description="Departure date (ISO 8601)")
    return_date: datetime = Field(..., description="Return date (ISO 8601)")
    available_seats: int = Field(..., ge=0)
    total_seats: int = Field(..., ge=1)
    images: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    inclusions: list[str] = Field(default_factory=list)
    exclusions: list[str] = Field(default_factory=list)
    status: DepartureStatus = DepartureStatus.UPCOMING
    is_active: bool = True
    is_featured: bool = False

    @field_validator("departure_date", "return_date")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def check_schedule_and_seats(self) -> "CreateFixedDepartureRequest":
        if self.return_date < self.departure_date:
            raise ValueError("return_date must not be before departure_date")
        if self.available_seats > self.total_seats:
            raise ValueError("available_seats cannot exceed total_seats")
        return self


class UpdateFixedDepartureRequest(BaseModel):
    """Request schema for a partial fixed departure update."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    discount: Optional[int] = Field(None, ge=0, le=100)
    duration: Optional[str] = Field(None, min_length=1, max_length=100)
    destination: Optional[str] = Field(None, min_length=1, max_length=255)
    departure_date: Optional[datetime] = None
    return_date: Optional[datetime] = None
    available_seats: Optional[int] = Field(None, ge=0)
    total_seats: Optional[int] = Field(None, ge=1)
    images: Optional[list[str]] = None
    highlights: Optional[list[str]] = None
    inclusions: Optional[list[str]] = None
    exclusions: Optional[list[str]] = None
    status: Optional[DepartureStatus] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None

    @field_validator("departure_date", "return_date")
    @classmethod
    def normalize_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else v


class FixedDeparture(BaseModel):
    """Fixed departure response schema."""

    id: str
    title: str
    slug: str
    description: str
    short_description: str
    price: float
    original_price: Optional[float] = None
    discount: int
    discounted_price: float
    duration: str
    destination: str
    departure_date: datetime
    return_date: datetime
    available_seats: int
    total_seats: int
    booking_percentage: float
    images: list[str]
    highlights: list[str]
    inclusions: list[str]
    exclusions: list[str]
    status: str
    is_active: bool
    is_featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FixedDepartureListResponse(BaseModel):
    """Paginated fixed departure listing."""

    fixed_departures: list[FixedDeparture]
    total: int
    total_pages: int
    current_page: int


class ListFixedDeparturesQuery(BaseModel):
    """Filters for the fixed departure listing."""

    status: Optional[DepartureStatus] = None
    featured: bool = False
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


class SearchFixedDeparturesQuery(BaseModel):
    """Filters for the fixed departure search."""

    q: Optional[str] = None
    destination: Optional[str] = None
    status: Optional[DepartureStatus] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
