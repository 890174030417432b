"""Service layer package."""

from .destination_service import DestinationService
from .fixed_departure_service import FixedDepartureService
from .holiday_type_service import HolidayTypeService
from .package_service import PackageService
from .search_service import RelevanceRanker, SearchField, SuggestionService
from .slug_service import SlugAllocator, derive_base_slug

__all__ = [
    "DestinationService",
    "FixedDepartureService",
    "HolidayTypeService",
    "PackageService",
    "RelevanceRanker",
    "SearchField",
    "SlugAllocator",
    "SuggestionService",
    "derive_base_slug",
]
