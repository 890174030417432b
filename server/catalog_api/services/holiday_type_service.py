"""Holiday type service for business logic operations."""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select, update

from ..models.destination import Destination
from ..models.holiday_type import HolidayType
from ..models.package import Package
from ..schemas.holiday_type import CreateHolidayTypeRequest, UpdateHolidayTypeRequest
from .base import CatalogService

logger = logging.getLogger(__name__)


class HolidayTypeService(CatalogService):
    """Service for holiday type operations."""

    model = HolidayType
    collection = "holiday_type"

    async def create_holiday_type(self, request: CreateHolidayTypeRequest) -> HolidayType:
        """
        Create a new holiday type.

        Raises:
            SlugConflictError: If the explicit slug is taken
        """
        holiday_type_id = uuid4()
        slug = await self.slugs.slug_for_create(request.title, request.slug, holiday_type_id)

        holiday_type = HolidayType(id=holiday_type_id, slug=slug)
        self.apply(holiday_type, request.model_dump(exclude={"slug"}))
        return await self.save(holiday_type, is_new=True)

    async def update_holiday_type(self, holiday_type_id: UUID, request: UpdateHolidayTypeRequest) -> HolidayType:
        """
        Apply a partial update to a holiday type.

        Raises:
            NotFoundError: If the holiday type does not exist
            SlugConflictError: If the explicit slug belongs to another holiday type
        """
        holiday_type = await self.get_by_id_or_raise(holiday_type_id)
        values = request.model_dump(exclude_unset=True, exclude={"slug"})

        new_slug = await self.slugs.slug_for_update(holiday_type, values.get("title"), request.slug)

        self.apply(holiday_type, values)
        if new_slug:
            holiday_type.slug = new_slug
        return await self.save(holiday_type)

    async def list_holiday_types(self, include_inactive: bool = False) -> list[HolidayType]:
        """Holiday types in display order, newest first within the same position."""
        stmt = select(HolidayType)
        if not include_inactive:
            stmt = stmt.where(HolidayType.is_active.is_(True))
        stmt = stmt.order_by(HolidayType.order.asc(), HolidayType.created_at.desc(), HolidayType.id)

        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def toggle_status(self, holiday_type_id: UUID) -> HolidayType:
        return await self.toggle(holiday_type_id, "is_active")

    async def toggle_featured(self, holiday_type_id: UUID) -> HolidayType:
        return await self.toggle(holiday_type_id, "is_featured")

    async def set_order(self, holiday_type_id: UUID, order: int) -> HolidayType:
        holiday_type = await self.get_by_id_or_raise(holiday_type_id)
        holiday_type.order = order
        return await self.save(holiday_type)

    async def delete(self, entity_id: UUID) -> None:
        """Delete a holiday type, detaching the packages and destinations that used it."""
        await self.get_by_id_or_raise(entity_id)

        for model in (Package, Destination):
            await self.db.execute(
                update(model)
                .where(model.holiday_type_id == entity_id)
                .values(holiday_type_id=None)
                .execution_options(synchronize_session=False)
            )

        await super().delete(entity_id)
