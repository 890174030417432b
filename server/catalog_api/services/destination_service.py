"""Destination service for business logic operations."""

import logging
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import func, or_, select, update

from ..core.catalog import TourType
from ..core.observability import metrics_collector
from ..models.destination import Destination
from ..schemas.destination import (
    CreateDestinationRequest,
    ListDestinationsQuery,
    SearchDestinationsQuery,
    UpdateDestinationRequest,
)
from .base import CatalogService, column_value

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50


class DestinationService(CatalogService):
    """
    Service for destination-related operations.

    Destination slugs always come from the name; callers cannot choose them.
    """

    model = Destination
    collection = "destination"

    async def create_destination(self, request: CreateDestinationRequest) -> Destination:
        """
        Create a new destination.

        Args:
            request: Destination creation request

        Returns:
            Created destination entity
        """
        destination_id = uuid4()
        values = request.model_dump(exclude={"holiday_type_id"})
        holiday_type_id = await self.resolve_holiday_type_id(request.holiday_type_id)
        slug = await self.slugs.slug_for_create(request.name, None, destination_id)

        destination = Destination(id=destination_id, slug=slug, holiday_type_id=holiday_type_id)
        self.apply(destination, values)
        return await self.save(destination, is_new=True)

    async def update_destination(self, destination_id: UUID, request: UpdateDestinationRequest) -> Destination:
        """
        Apply a partial update; a changed name re-derives the slug.

        Raises:
            NotFoundError: If the destination does not exist
        """
        destination = await self.get_by_id_or_raise(destination_id)
        values = request.model_dump(exclude_unset=True)

        new_slug = await self.slugs.slug_for_update(destination, values.get("name"), None, title_attr="name")
        if "holiday_type_id" in values:
            values["holiday_type_id"] = await self.resolve_holiday_type_id(values["holiday_type_id"])

        self.apply(destination, values)
        if new_slug:
            destination.slug = new_slug
        return await self.save(destination)

    async def visit(self, identifier: str) -> Destination:
        """
        Fetch a destination by ID or slug and count the visit.

        Raises:
            NotFoundError: If nothing matches
        """
        try:
            destination_id = UUID(identifier)
        except ValueError:
            destination_id = None

        if destination_id:
            destination = await self.get_by_id_or_raise(destination_id)
        else:
            destination = await self.get_by_slug_or_raise(identifier)

        await self.db.execute(
            update(Destination)
            .where(Destination.id == destination.id)
            .values(visit_count=Destination.visit_count + 1)
        )
        await self.db.commit()
        await self.db.refresh(destination)

        metrics_collector.record_destination_visit()
        logger.debug(
            "Destination visited",
            extra={"destination_id": str(destination.id), "visit_count": destination.visit_count}
        )
        return destination

    async def list_destinations(self, query: ListDestinationsQuery) -> tuple[list[Destination], int]:
        """
        List active destinations, newest first.

        For international tours the ``state`` filter also matches the country,
        since those destinations usually have no state.
        """
        stmt = select(Destination).where(Destination.is_active.is_(True))

        if query.trending:
            stmt = stmt.where(Destination.is_trending.is_(True))
        if query.tour_type:
            stmt = stmt.where(Destination.tour_type == column_value(query.tour_type))
        if query.country:
            stmt = stmt.where(func.lower(Destination.country) == query.country.lower())
        if query.state:
            state = query.state.lower()
            if query.tour_type == TourType.INTERNATIONAL:
                stmt = stmt.where(or_(
                    func.lower(Destination.state) == state,
                    func.lower(Destination.country) == state,
                ))
            else:
                stmt = stmt.where(func.lower(Destination.state) == state)
        if query.category:
            stmt = stmt.where(Destination.category == column_value(query.category))
        if query.holiday_type_id:
            holiday_type_id = await self.resolve_holiday_type_id(query.holiday_type_id)
            stmt = stmt.where(Destination.holiday_type_id == holiday_type_id)

        stmt = stmt.order_by(Destination.created_at.desc(), Destination.id)
        return await self.paginate(stmt, query.page, query.limit)

    async def trending_destinations(self, limit: int = 6) -> list[Destination]:
        """Active trending destinations, most visited first."""
        stmt = (
            select(Destination)
            .where(Destination.is_active.is_(True), Destination.is_trending.is_(True))
            .order_by(Destination.visit_count.desc(), Destination.rating.desc(), Destination.id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def search_destinations(self, query: SearchDestinationsQuery) -> list[Destination]:
        stmt = select(Destination).where(Destination.is_active.is_(True))

        if query.q and query.q.strip():
            text = query.q.strip()
            stmt = stmt.where(or_(
                Destination.name.icontains(text, autoescape=True),
                Destination.description.icontains(text, autoescape=True),
                Destination.country.icontains(text, autoescape=True),
                Destination.state.icontains(text, autoescape=True),
            ))
        if query.location:
            stmt = stmt.where(Destination.location.icontains(query.location, autoescape=True))
        if query.tour_type:
            stmt = stmt.where(Destination.tour_type == column_value(query.tour_type))
        if query.category:
            stmt = stmt.where(Destination.category == column_value(query.category))

        stmt = stmt.order_by(Destination.rating.desc(), Destination.created_at.desc(), Destination.id)
        result = await self.db.execute(stmt.limit(SEARCH_LIMIT))
        return list(result.scalars())

    async def countries(self, tour_type: Optional[TourType] = None) -> list[str]:
        if tour_type:
            return await self.distinct_values(Destination.country, Destination.tour_type == column_value(tour_type))
        return await self.distinct_values(Destination.country)

    async def states(self, country: Optional[str] = None) -> list[str]:
        if country:
            return await self.distinct_values(
                Destination.state, func.lower(Destination.country) == country.lower()
            )
        return await self.distinct_values(Destination.state)

    async def tour_types(self) -> list[str]:
        return await self.distinct_values(Destination.tour_type)
