"""Type-ahead suggestion schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SuggestionType(str, Enum):
    """Kind of record a suggestion points at."""
    PACKAGE = "package"
    DESTINATION = "destination"
    HOLIDAY_TYPE = "holiday_type"
    LOCATION = "location"


class Suggestion(BaseModel):
    """Reduced projection of a matched record; never the full entity."""

    id: Optional[str] = Field(None, description="Entity ID; null for location matches")
    type: SuggestionType = Field(..., description="Kind of record")
    title: str = Field(..., description="Display title")
    destination: Optional[str] = Field(None, description="Location or destination label")
    price: Optional[float | str] = Field(None, description="Price, when the record has one")
    duration: Optional[str] = None
    category: Optional[str] = None
    slug: str = Field("", description="Slug for building the link")
    image: Optional[str] = Field(None, description="Representative image URL")


class SuggestionResponse(BaseModel):
    """Suggestion endpoint response; always returned with HTTP 200."""

    suggestions: list[Suggestion] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Diagnostic message when the lookup failed")
