"""Common Pydantic schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

# Lowercase alphanumeric words joined by single hyphens
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Dotted path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable explanation")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")
    slug: Optional[str] = Field(None, description="Conflicting slug")
    resource_type: Optional[str] = Field(None, description="Collection the problem concerns")


class Pagination(BaseModel):
    """Page-number pagination metadata."""

    current: int = Field(..., ge=1, description="Current page number")
    total: int = Field(..., ge=0, description="Total number of pages")
    has_next: bool = Field(..., description="Whether a later page exists")
    has_prev: bool = Field(..., description="Whether an earlier page exists")

    @classmethod
    def build(cls, page: int, limit: int, total_items: int) -> "Pagination":
        """Compute pagination metadata for a page of ``limit`` items."""
        return cls(
            current=page,
            total=-(-total_items // limit),
            has_next=page * limit < total_items,
            has_prev=page > 1,
        )


class MessageResponse(BaseModel):
    """Plain acknowledgement response."""

    message: str = Field(..., description="Human-readable outcome")


class DistinctValuesResponse(BaseModel):
    """Sorted distinct values of a catalog field."""

    values: list[str] = Field(..., description="Distinct non-empty values, sorted")


# OpenAPI documentation for the error bodies of write endpoints
PROBLEM_RESPONSES = {
    400: {"model": Problem, "description": "Validation error or slug conflict"},
    404: {"model": Problem, "description": "Record not found"},
}
