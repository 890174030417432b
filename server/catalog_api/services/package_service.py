"""Package service for business logic operations."""

import logging
from uuid import UUID, uuid4

from sqlalchemy import func, or_, select

from ..core.catalog import PackageCategory
from ..models.package import Package
from ..schemas.package import (
    CreatePackageRequest,
    ListPackagesQuery,
    SearchPackagesQuery,
    UpdatePackageRequest,
)
from .base import CatalogService, column_value

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50


class PackageService(CatalogService):
    """Service for package-related operations."""

    model = Package
    collection = "package"

    async def create_package(self, request: CreatePackageRequest) -> Package:
        """
        Create a new package.

        Args:
            request: Package creation request

        Returns:
            Created package entity

        Raises:
            SlugConflictError: If the explicit slug is taken
            ValidationError: If the holiday type reference is invalid
        """
        package_id = uuid4()
        values = request.model_dump(exclude={"slug", "holiday_type_id"})
        holiday_type_id = await self.resolve_holiday_type_id(request.holiday_type_id)
        slug = await self.slugs.slug_for_create(request.title, request.slug, package_id)

        package = Package(id=package_id, slug=slug, holiday_type_id=holiday_type_id)
        self.apply(package, values)
        return await self.save(package, is_new=True)

    async def update_package(self, package_id: UUID, request: UpdatePackageRequest) -> Package:
        """
        Apply a partial update to a package.

        The slug only changes when one is sent explicitly or the title changes.

        Raises:
            NotFoundError: If the package does not exist
            SlugConflictError: If the explicit slug belongs to another package
        """
        package = await self.get_by_id_or_raise(package_id)
        values = request.model_dump(exclude_unset=True, exclude={"slug"})

        new_slug = await self.slugs.slug_for_update(package, values.get("title"), request.slug)
        if "holiday_type_id" in values:
            values["holiday_type_id"] = await self.resolve_holiday_type_id(values["holiday_type_id"])

        self.apply(package, values)
        if new_slug:
            package.slug = new_slug
        return await self.save(package)

    async def list_packages(self, query: ListPackagesQuery) -> tuple[list[Package], int]:
        """
        List active packages, newest first.

        Returns:
            Tuple of (packages on the page, total matching packages)
        """
        stmt = select(Package).where(Package.is_active.is_(True))

        if query.category:
            stmt = stmt.where(Package.category == column_value(query.category))
        if query.featured:
            stmt = stmt.where(Package.is_featured.is_(True))
        if query.tour_type:
            stmt = stmt.where(Package.tour_type == column_value(query.tour_type))
        if query.country:
            stmt = stmt.where(func.lower(Package.country) == query.country.lower())
        if query.state:
            stmt = stmt.where(func.lower(Package.state) == query.state.lower())
        if query.holiday_type_id:
            holiday_type_id = await self.resolve_holiday_type_id(query.holiday_type_id)
            stmt = stmt.where(Package.holiday_type_id == holiday_type_id)

        stmt = stmt.order_by(Package.created_at.desc(), Package.id)
        return await self.paginate(stmt, query.page, query.limit)

    async def search_packages(self, query: SearchPackagesQuery) -> list[Package]:
        """Full search over active packages by text, category and price range."""
        stmt = select(Package).where(Package.is_active.is_(True))

        if query.q and query.q.strip():
            text = query.q.strip()
            stmt = stmt.where(or_(
                Package.title.icontains(text, autoescape=True),
                Package.destination.icontains(text, autoescape=True),
                Package.description.icontains(text, autoescape=True),
            ))
        if query.category:
            stmt = stmt.where(Package.category == column_value(query.category))
        if query.min_price is not None:
            stmt = stmt.where(Package.price >= query.min_price)
        if query.max_price is not None:
            stmt = stmt.where(Package.price <= query.max_price)

        stmt = stmt.order_by(Package.created_at.desc(), Package.id).limit(SEARCH_LIMIT)
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def packages_by_category(self, category: PackageCategory, limit: int = 10) -> list[Package]:
        """Latest active packages in a category."""
        stmt = (
            select(Package)
            .where(Package.is_active.is_(True), Package.category == column_value(category))
            .order_by(Package.created_at.desc(), Package.id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars())

    async def countries(self) -> list[str]:
        return await self.distinct_values(Package.country)

    async def states(self, country: str | None = None) -> list[str]:
        if country:
            return await self.distinct_values(Package.state, func.lower(Package.country) == country.lower())
        return await self.distinct_values(Package.state)

    async def tour_types(self) -> list[str]:
        return await self.distinct_values(Package.tour_type)
