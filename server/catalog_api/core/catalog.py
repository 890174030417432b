"""Catalog-wide enumerations shared by models, schemas and services."""

from enum import Enum


class PackageCategory(str, Enum):
    """Categories a package, destination or holiday type can be filed under."""
    BEACH_HOLIDAYS = "Beach Holidays"
    ADVENTURE_TOURS = "Adventure Tours"
    TRENDING_DESTINATIONS = "Trending Destinations"
    PREMIUM_PACKAGES = "Premium Packages"
    POPULAR_PACKAGES = "Popular Packages"
    FIXED_DEPARTURE = "Fixed Departure"
    MOUNTAIN_TREKS = "Mountain Treks"
    WILDLIFE_SAFARIS = "Wildlife Safaris"
    PILGRIMAGE_TOURS = "Pilgrimage Tours"
    HONEYMOON_PACKAGES = "Honeymoon Packages"
    FAMILY_TOURS = "Family Tours"
    LUXURY_TOURS = "Luxury Tours"
    BUDGET_TOURS = "Budget Tours"


class TourType(str, Enum):
    """Whether a tour is domestic (India) or international."""
    INTERNATIONAL = "international"
    INDIA = "india"


class DepartureStatus(str, Enum):
    """Lifecycle status of a fixed departure."""
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
