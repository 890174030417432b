"""Destination-related Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..core.catalog import PackageCategory, TourType
from .common import Pagination


class CreateDestinationRequest(BaseModel):
    """Request schema for creating a destination. The slug is always derived from the name."""

    name: str = Field(..., min_length=1, max_length=255, description="Destination name")
    description: str = Field(..., min_length=1)
    short_description: str = Field(..., min_length=1, max_length=1000)
    image: str = Field("", max_length=1024, description="Image path or URL")
    location: str = Field(..., min_length=1, max_length=255, description="Display location")
    country: str = Field(..., min_length=1, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    tour_type: TourType = Field(..., description="International or India")
    category: PackageCategory = Field(..., description="Catalog category")
    holiday_type_id: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, max_length=100)
    highlights: list[str] = Field(default_factory=list)
    is_active: bool = True
    is_trending: bool = False


class UpdateDestinationRequest(BaseModel):
    """Request schema for a partial destination update."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = Field(None, min_length=1, max_length=1000)
    image: Optional[str] = Field(None, max_length=1024)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    country: Optional[str] = Field(None, min_length=1, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    tour_type: Optional[TourType] = None
    category: Optional[PackageCategory] = None
    holiday_type_id: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, max_length=100)
    highlights: Optional[list[str]] = None
    is_active: Optional[bool] = None
    is_trending: Optional[bool] = None


class Destination(BaseModel):
    """Destination response schema."""

    id: str
    name: str
    slug: str
    description: str
    short_description: str
    image: str
    location: str
    country: str
    state: Optional[str] = None
    tour_type: str
    category: str
    holiday_type_id: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[str] = None
    highlights: list[str]
    rating: float
    is_active: bool
    is_trending: bool
    visit_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DestinationListResponse(BaseModel):
    """Paginated destination listing."""

    destinations: list[Destination]
    pagination: Pagination


class ListDestinationsQuery(BaseModel):
    """Filters for the destination listing."""

    trending: bool = False
    tour_type: Optional[TourType] = None
    country: Optional[str] = None
    state: Optional[str] = None
    category: Optional[PackageCategory] = None
    holiday_type_id: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


class SearchDestinationsQuery(BaseModel):
    """Filters for the full destination search."""

    q: Optional[str] = None
    location: Optional[str] = None
    tour_type: Optional[TourType] = None
    category: Optional[PackageCategory] = None
