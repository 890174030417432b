"""Holiday type Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..core.catalog import PackageCategory, TourType
from .common import SLUG_PATTERN


class CreateHolidayTypeRequest(BaseModel):
    """Request schema for creating a holiday type."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: str = Field(..., min_length=1)
    short_description: str = Field(..., min_length=1, max_length=1000)
    image: str = Field("", max_length=1024)
    duration: str = Field(..., min_length=1, max_length=100)
    travelers: str = Field(..., min_length=1, max_length=100)
    badge: str = Field(..., min_length=1, max_length=100)
    price: str = Field(..., min_length=1, max_length=100, description="Display price text")
    country: Optional[str] = Field(None, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    tour_type: Optional[TourType] = None
    category: Optional[PackageCategory] = None
    highlights: list[str] = Field(default_factory=list)
    is_active: bool = True
    is_featured: bool = False
    order: int = 0


class UpdateHolidayTypeRequest(BaseModel):
    """Request schema for a partial holiday type update."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = Field(None, min_length=1, max_length=1000)
    image: Optional[str] = Field(None, max_length=1024)
    duration: Optional[str] = Field(None, min_length=1, max_length=100)
    travelers: Optional[str] = Field(None, min_length=1, max_length=100)
    badge: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[str] = Field(None, min_length=1, max_length=100)
    country: Optional[str] = Field(None, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    tour_type: Optional[TourType] = None
    category: Optional[PackageCategory] = None
    highlights: Optional[list[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    order: Optional[int] = None


class UpdateHolidayTypeOrderRequest(BaseModel):
    """Request schema for moving a holiday type in the display order."""

    order: int = Field(..., description="Sort position; lower comes first")


class HolidayType(BaseModel):
    """Holiday type response schema."""

    id: str
    title: str
    slug: str
    description: str
    short_description: str
    image: str
    duration: str
    travelers: str
    badge: str
    price: str
    country: Optional[str] = None
    state: Optional[str] = None
    tour_type: Optional[str] = None
    category: Optional[str] = None
    highlights: list[str]
    is_active: bool
    is_featured: bool
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
