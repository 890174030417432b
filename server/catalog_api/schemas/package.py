"""Package-related Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..core.catalog import PackageCategory, TourType
from .common import SLUG_PATTERN, Pagination


class CreatePackageRequest(BaseModel):
    """Request schema for creating a package."""

    title: str = Field(..., min_length=1, max_length=255, description="Package title")
    slug: Optional[str] = Field(
        None, min_length=1, max_length=255, pattern=SLUG_PATTERN,
        description="URL-friendly slug; derived from the title when omitted"
    )
    description: str = Field(..., min_length=1, description="Full description")
    short_description: str = Field(..., min_length=1, max_length=1000, description="Card description")
    price: float = Field(..., ge=0, description="Price per person")
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount")
    discount: int = Field(0, ge=0, le=100, description="Discount percentage")
    duration: str = Field(..., min_length=1, max_length=100, description="Duration, e.g. '5 Days / 4 Nights'")
    destination: str = Field(..., min_length=1, max_length=255, description="Destination name")
    category: PackageCategory = Field(..., description="Catalog category")
    country: str = Field(..., min_length=1, max_length=128, description="Country")
    state: Optional[str] = Field(None, max_length=128, description="State, for India tours")
    tour_type: TourType = Field(TourType.INDIA, description="International or India")
    holiday_type_id: Optional[str] = Field(None, description="Associated holiday type ID")
    images: list[str] = Field(default_factory=list, description="Image paths or URLs")
    highlights: list[str] = Field(default_factory=list)
    inclusions: list[str] = Field(default_factory=list)
    exclusions: list[str] = Field(default_factory=list)
    is_active: bool = Field(True)
    is_featured: bool = Field(False)


class UpdatePackageRequest(BaseModel):
    """Request schema for a partial package update; only sent fields change."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = Field(None, min_length=1, max_length=1000)
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    discount: Optional[int] = Field(None, ge=0, le=100)
    duration: Optional[str] = Field(None, min_length=1, max_length=100)
    destination: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[PackageCategory] = None
    country: Optional[str] = Field(None, min_length=1, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    tour_type: Optional[TourType] = None
    holiday_type_id: Optional[str] = None
    images: Optional[list[str]] = None
    highlights: Optional[list[str]] = None
    inclusions: Optional[list[str]] = None
    exclusions: Optional[list[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


class Package(BaseModel):
    """Package response schema."""

    id: str = Field(..., description="Unique package ID")
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
    category: str
    country: str
    state: Optional[str] = None
    tour_type: str
    holiday_type_id: Optional[str] = None
    images: list[str]
    highlights: list[str]
    inclusions: list[str]
    exclusions: list[str]
    rating: float
    is_active: bool
    is_featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PackageListResponse(BaseModel):
    """Paginated package listing."""

    packages: list[Package] = Field(..., description="Packages on this page")
    pagination: Pagination


class ListPackagesQuery(BaseModel):
    """Filters for the package listing."""

    category: Optional[PackageCategory] = None
    featured: bool = False
    tour_type: Optional[TourType] = None
    country: Optional[str] = None
    state: Optional[str] = None
    holiday_type_id: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)


class SearchPackagesQuery(BaseModel):
    """Filters for the full package search."""

    q: Optional[str] = None
    category: Optional[PackageCategory] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
