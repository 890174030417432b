"""Models module exporting all database models."""

from .destination import Destination
from .fixed_departure import FixedDeparture
from .holiday_type import HolidayType
from .package import Package

__all__ = [
    # Catalog entities
    "Package",
    "Destination",
    "FixedDeparture",

    # Taxonomy
    "HolidayType",
]
