"""Fixed departure service for business logic operations."""

import logging
from uuid import UUID, uuid4

from sqlalchemy import or_, select

from ..core.exceptions import ValidationError
from ..models.fixed_departure import FixedDeparture
from ..schemas.fixed_departure import (
    CreateFixedDepartureRequest,
    ListFixedDeparturesQuery,
    SearchFixedDeparturesQuery,
    UpdateFixedDepartureRequest,
    as_utc,
)
from .base import CatalogService, column_value

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6
SEARCH_LIMIT = 20


class FixedDepartureService(CatalogService):
    """Service for fixed departure operations."""

    model = FixedDeparture
    collection = "fixed_departure"

    async def create_fixed_departure(self, request: CreateFixedDepartureRequest) -> FixedDeparture:
        """
        Create a new fixed departure.

        Raises:
            SlugConflictError: If the explicit slug is taken
        """
        departure_id = uuid4()
        slug = await self.slugs.slug_for_create(request.title, request.slug, departure_id)

        departure = FixedDeparture(id=departure_id, slug=slug)
        self.apply(departure, request.model_dump(exclude={"slug"}))
        return await self.save(departure, is_new=True)

    async def update_fixed_departure(
        self,
        departure_id: UUID,
        request: UpdateFixedDepartureRequest,
    ) -> FixedDeparture:
        """
        Apply a partial update to a fixed departure.

        The schedule and seat invariants are checked against the merged record.

        Raises:
            NotFoundError: If the departure does not exist
            SlugConflictError: If the explicit slug belongs to another departure
            ValidationError: If the merged dates or seat counts are inconsistent
        """
        departure = await self.get_by_id_or_raise(departure_id)
        values = request.model_dump(exclude_unset=True, exclude={"slug"})

        departure_date = values.get("departure_date") or departure.departure_date
        return_date = values.get("return_date") or departure.return_date
        available_seats = values.get("available_seats", departure.available_seats)
        total_seats = values.get("total_seats", departure.total_seats)

        violations = []
        if as_utc(return_date) < as_utc(departure_date):
            violations.append({"path": "return_date", "message": "return_date must not be before departure_date"})
        if available_seats is not None and total_seats is not None and available_seats > total_seats:
            violations.append({"path": "available_seats", "message": "available_seats cannot exceed total_seats"})
        if violations:
            raise ValidationError(violations=violations)

        new_slug = await self.slugs.slug_for_update(departure, values.get("title"), request.slug)

        self.apply(departure, values)
        if new_slug:
            departure.slug = new_slug
        return await self.save(departure)

    async def list_fixed_departures(self, query: ListFixedDeparturesQuery) -> tuple[list[FixedDeparture], int]:
        """List active departures, soonest first."""
        stmt = select(FixedDeparture).where(FixedDeparture.is_active.is_(True))

        if query.status:
            stmt = stmt.where(FixedDeparture.status == column_value(query.status))
        if query.featured:
            stmt = stmt.where(FixedDeparture.is_featured.is_(True))

        stmt = stmt.order_by(FixedDeparture.departure_date.asc(), FixedDeparture.id)
        return await self.paginate(stmt, query.page, query.limit)

    async def featured_fixed_departures(self, limit: int = FEATURED_LIMIT) -> list[FixedDeparture]:
        stmt = (
            select(FixedDeparture)
            .where(FixedDeparture.is_active.is_(True), FixedDeparture.is_featured.is_(True))
            .order_by(FixedDeparture.departure_date.asc(), FixedDeparture.id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def search_fixed_departures(self, query: SearchFixedDeparturesQuery) -> list[FixedDeparture]:
        stmt = select(FixedDeparture).where(FixedDeparture.is_active.is_(True))

        if query.q and query.q.strip():
            text = query.q.strip()
            stmt = stmt.where(or_(
                FixedDeparture.title.icontains(text, autoescape=True),
                FixedDeparture.destination.icontains(text, autoescape=True),
                FixedDeparture.description.icontains(text, autoescape=True),
            ))
        if query.destination:
            stmt = stmt.where(FixedDeparture.destination.icontains(query.destination, autoescape=True))
        if query.status:
            stmt = stmt.where(FixedDeparture.status == column_value(query.status))
        if query.min_price is not None:
            stmt = stmt.where(FixedDeparture.price >= query.min_price)
        if query.max_price is not None:
            stmt = stmt.where(FixedDeparture.price <= query.max_price)

        stmt = stmt.order_by(FixedDeparture.departure_date.asc(), FixedDeparture.id).limit(SEARCH_LIMIT)
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def toggle_featured(self, departure_id: UUID) -> FixedDeparture:
        return await self.toggle(departure_id, "is_featured")

    async def toggle_active(self, departure_id: UUID) -> FixedDeparture:
        return await self.toggle(departure_id, "is_active")
