"""Shared persistence plumbing for the catalog services."""

import logging
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from ..core.exceptions import NotFoundError, ValidationError
from ..models.holiday_type import HolidayType
from .slug_service import SlugAllocator

logger = logging.getLogger(__name__)


def parse_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    """
    Parse an optional ID string.

    Raises:
        ValidationError: If the value is not a UUID
    """
    if value is None or value == "":
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationError(
            detail=f"Invalid {field}",
            violations=[{"path": field, "message": f"'{value}' is not a valid ID"}],
        )


def column_value(value: Any) -> Any:
    """Enums are stored by value."""
    if isinstance(value, Enum):
        return value.value
    return value


class CatalogService:
    """
    Base class for services over one slugged catalog collection.

    Subclasses set ``model`` and ``collection``; the slug allocator, lookups,
    pagination and the conflict-aware commit live here.
    """

    model: Any = None
    collection: str = "resource"

    def __init__(self, db: AsyncSession):
        self.db = db
        self.slugs = SlugAllocator(db, self.model, self.collection)

    # Lookups

    async def get_by_id(self, entity_id: UUID) -> Optional[Any]:
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_or_raise(self, entity_id: UUID) -> Any:
        """
        Get a record by ID or raise NotFoundError.

        Raises:
            NotFoundError: If no record has this ID
        """
        entity = await self.get_by_id(entity_id)
        if not entity:
            logger.warning(
                "Record not found",
                extra={"collection": self.collection, "id": str(entity_id)}
            )
            raise NotFoundError(resource_type=self.collection, resource_id=str(entity_id))
        return entity

    async def get_by_slug(self, slug: str, active_only: bool = True) -> Optional[Any]:
        stmt = select(self.model).where(self.model.slug == slug)
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug_or_raise(self, slug: str, active_only: bool = True) -> Any:
        """
        Get a record by slug or raise NotFoundError.

        Raises:
            NotFoundError: If no (active) record has this slug
        """
        entity = await self.get_by_slug(slug, active_only)
        if not entity:
            logger.warning(
                "Record not found by slug",
                extra={"collection": self.collection, "slug": slug}
            )
            raise NotFoundError(resource_type=self.collection, resource_id=slug)
        return entity

    async def distinct_values(self, column: Any, *criteria: Any) -> list[str]:
        """Sorted distinct non-empty values of a column across active records."""
        stmt = (
            select(column)
            .where(self.model.is_active.is_(True), column.is_not(None), column != "", *criteria)
            .distinct()
            .order_by(column)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def paginate(self, stmt: Select, page: int, limit: int) -> tuple[list[Any], int]:
        """
        Run a listing query for one page.

        Returns:
            Tuple of (records on the page, total matching records)
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()

        result = await self.db.execute(stmt.offset((page - 1) * limit).limit(limit))
        return list(result.scalars()), total

    # Writes

    async def resolve_holiday_type_id(self, value: Optional[str]) -> Optional[UUID]:
        """
        Parse a holiday type reference and check that it exists.

        Raises:
            ValidationError: If the ID is malformed or unknown
        """
        holiday_type_id = parse_uuid(value, "holiday_type_id")
        if holiday_type_id is None:
            return None

        result = await self.db.execute(select(HolidayType.id).where(HolidayType.id == holiday_type_id))
        if result.first() is None:
            raise ValidationError(
                detail="Unknown holiday type",
                violations=[{"path": "holiday_type_id", "message": f"Holiday type '{value}' does not exist"}],
            )
        return holiday_type_id

    def apply(self, entity: Any, values: dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(entity, field, column_value(value))

    async def save(self, entity: Any, is_new: bool = False) -> Any:
        """
        Commit a created or updated record.

        The table's unique slug constraint is the final arbiter: when a
        concurrent writer took the slug first, the commit fails and is
        reported as a slug conflict.

        Raises:
            SlugConflictError: If the slug was taken by another record
            ValidationError: If another constraint rejected the write
        """
        entity_id = entity.id
        slug = entity.slug

        try:
            if is_new:
                self.db.add(entity)
            await self.db.commit()
            await self.db.refresh(entity)
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Write rejected by integrity constraint",
                extra={
                    "collection": self.collection,
                    "id": str(entity_id),
                    "slug": slug,
                    "error": str(e),
                }
            )
            if await self.slugs.slug_exists(slug, exclude_id=entity_id):
                raise self.slugs.conflict(slug)
            raise ValidationError(detail=f"The {self.collection} violates a data constraint")

        logger.info(
            "Record created" if is_new else "Record updated",
            extra={"collection": self.collection, "id": str(entity_id), "slug": slug}
        )
        return entity

    async def toggle(self, entity_id: UUID, attr: str) -> Any:
        """Flip a boolean flag on a record."""
        entity = await self.get_by_id_or_raise(entity_id)
        setattr(entity, attr, not getattr(entity, attr))
        return await self.save(entity)

    async def delete(self, entity_id: UUID) -> None:
        """
        Delete a record.

        Raises:
            NotFoundError: If no record has this ID
        """
        await self.get_by_id_or_raise(entity_id)
        await self.db.execute(delete(self.model).where(self.model.id == entity_id))
        await self.db.commit()

        logger.info(
            "Record deleted",
            extra={"collection": self.collection, "id": str(entity_id)}
        )
