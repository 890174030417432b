"""Unit tests for package service."""

from uuid import uuid4

import pytest

from catalog_api.core.catalog import PackageCategory
from catalog_api.core.exceptions import NotFoundError, SlugConflictError, ValidationError
from catalog_api.schemas.holiday_type import CreateHolidayTypeRequest
from catalog_api.schemas.package import (
    CreatePackageRequest,
    ListPackagesQuery,
    SearchPackagesQuery,
    UpdatePackageRequest,
)
from catalog_api.services.holiday_type_service import HolidayTypeService
from catalog_api.services.package_service import PackageService


async def _create(service, sample_package_data, **overrides):
    return await service.create_package(CreatePackageRequest(**{**sample_package_data, **overrides}))


@pytest.mark.asyncio
async def test_create_package(test_session, sample_package_data):
    """Test creating a package derives the slug from the title."""
    service = PackageService(test_session)

    package = await _create(service, sample_package_data)

    assert package.id is not None
    assert package.slug == "manali-adventure"
    assert package.category == "Mountain Treks"
    assert package.tour_type == "india"
    assert package.images == ["manali-1.jpg", "/uploads/manali-2.jpg"]
    assert package.discounted_price == pytest.approx(22499.1)
    assert package.created_at is not None


@pytest.mark.asyncio
async def test_create_package_with_explicit_slug(test_session, sample_package_data):
    service = PackageService(test_session)

    package = await _create(service, sample_package_data, slug="manali-winter-special")
    assert package.slug == "manali-winter-special"


@pytest.mark.asyncio
async def test_create_package_duplicate_explicit_slug(test_session, sample_package_data):
    """Test an explicit slug that is already taken is rejected, not suffixed."""
    service = PackageService(test_session)
    await _create(service, sample_package_data, slug="manali")

    with pytest.raises(SlugConflictError):
        await _create(service, sample_package_data, title="Another Trip", slug="manali")


@pytest.mark.asyncio
async def test_create_package_unknown_holiday_type(test_session, sample_package_data):
    service = PackageService(test_session)

    with pytest.raises(ValidationError):
        await _create(service, sample_package_data, holiday_type_id=str(uuid4()))

    with pytest.raises(ValidationError):
        await _create(service, sample_package_data, holiday_type_id="not-a-uuid")


@pytest.mark.asyncio
async def test_create_package_with_holiday_type(test_session, sample_package_data, sample_holiday_type_data):
    holiday_type = await HolidayTypeService(test_session).create_holiday_type(
        CreateHolidayTypeRequest(**sample_holiday_type_data)
    )
    service = PackageService(test_session)

    package = await _create(service, sample_package_data, holiday_type_id=str(holiday_type.id))
    assert package.holiday_type_id == holiday_type.id

    packages, total = await service.list_packages(ListPackagesQuery(holiday_type_id=str(holiday_type.id)))
    assert total == 1
    assert packages[0].id == package.id


@pytest.mark.asyncio
async def test_update_package_rederives_slug_on_title_change(test_session, sample_package_data):
    service = PackageService(test_session)
    package = await _create(service, sample_package_data)

    updated = await service.update_package(package.id, UpdatePackageRequest(title="Manali Snow Trek"))
    assert updated.slug == "manali-snow-trek"
    assert updated.title == "Manali Snow Trek"


@pytest.mark.asyncio
async def test_update_package_keeps_slug_for_other_fields(test_session, sample_package_data):
    service = PackageService(test_session)
    package = await _create(service, sample_package_data)

    updated = await service.update_package(package.id, UpdatePackageRequest(price=19999, discount=0))
    assert updated.slug == "manali-adventure"
    assert updated.price == 19999
    assert updated.discounted_price == 19999


@pytest.mark.asyncio
async def test_update_package_to_same_title_keeps_slug(test_session, sample_package_data):
    service = PackageService(test_session)
    await _create(service, sample_package_data)
    second = await _create(service, sample_package_data)
    assert second.slug == "manali-adventure-1"

    updated = await service.update_package(second.id, UpdatePackageRequest(title="Manali Adventure"))
    assert updated.slug == "manali-adventure-1"


@pytest.mark.asyncio
async def test_update_package_explicit_slug_conflict(test_session, sample_package_data):
    service = PackageService(test_session)
    await _create(service, sample_package_data, slug="taken")
    package = await _create(service, sample_package_data, slug="mine")

    with pytest.raises(SlugConflictError):
        await service.update_package(package.id, UpdatePackageRequest(slug="taken"))

    updated = await service.update_package(package.id, UpdatePackageRequest(slug="mine"))
    assert updated.slug == "mine"


@pytest.mark.asyncio
async def test_update_missing_package(test_session):
    with pytest.raises(NotFoundError):
        await PackageService(test_session).update_package(uuid4(), UpdatePackageRequest(price=1))


@pytest.mark.asyncio
async def test_get_by_slug_only_returns_active(test_session, sample_package_data):
    service = PackageService(test_session)
    await _create(service, sample_package_data, is_active=False)

    assert await service.get_by_slug("manali-adventure") is None
    assert await service.get_by_slug("manali-adventure", active_only=False) is not None
    with pytest.raises(NotFoundError):
        await service.get_by_slug_or_raise("manali-adventure")


@pytest.mark.asyncio
async def test_list_packages_filters_and_paginates(test_session, sample_package_data):
    service = PackageService(test_session)
    for i in range(3):
        await _create(service, sample_package_data, title=f"Manali Trip {i}", is_featured=i == 0)
    await _create(service, sample_package_data, title="Bali Escape", country="Indonesia", state=None,
                  tour_type="international", category="Beach Holidays")
    await _create(service, sample_package_data, title="Hidden", is_active=False)

    packages, total = await service.list_packages(ListPackagesQuery(limit=2))
    assert total == 4
    assert len(packages) == 2

    packages, total = await service.list_packages(ListPackagesQuery(page=2, limit=2))
    assert total == 4
    assert len(packages) == 2

    _, total = await service.list_packages(ListPackagesQuery(tour_type="international"))
    assert total == 1

    _, total = await service.list_packages(ListPackagesQuery(country="india", state="himachal pradesh"))
    assert total == 3

    packages, total = await service.list_packages(ListPackagesQuery(featured=True))
    assert total == 1
    assert packages[0].title == "Manali Trip 0"

    _, total = await service.list_packages(ListPackagesQuery(category=PackageCategory.BEACH_HOLIDAYS))
    assert total == 1


@pytest.mark.asyncio
async def test_search_packages(test_session, sample_package_data):
    service = PackageService(test_session)
    await _create(service, sample_package_data, title="Manali Trip", price=20000)
    await _create(service, sample_package_data, title="Shimla Trip", destination="Shimla", price=30000,
                  description="Mall road and toy train")

    results = await service.search_packages(SearchPackagesQuery(q="shimla"))
    assert [p.title for p in results] == ["Shimla Trip"]

    results = await service.search_packages(SearchPackagesQuery(min_price=25000))
    assert [p.title for p in results] == ["Shimla Trip"]

    results = await service.search_packages(SearchPackagesQuery(max_price=25000))
    assert [p.title for p in results] == ["Manali Trip"]

    results = await service.search_packages(SearchPackagesQuery())
    assert len(results) == 2


@pytest.mark.asyncio
async def test_distinct_values(test_session, sample_package_data):
    service = PackageService(test_session)
    await _create(service, sample_package_data, state="Kerala")
    await _create(service, sample_package_data, state="Goa")
    await _create(service, sample_package_data, country="Thailand", state=None, tour_type="international")

    assert await service.countries() == ["India", "Thailand"]
    assert await service.states() == ["Goa", "Kerala"]
    assert await service.states("thailand") == []
    assert await service.tour_types() == ["india", "international"]


@pytest.mark.asyncio
async def test_packages_by_category(test_session, sample_package_data):
    service = PackageService(test_session)
    await _create(service, sample_package_data)
    await _create(service, sample_package_data, category="Luxury Tours")

    results = await service.packages_by_category(PackageCategory.LUXURY_TOURS)
    assert len(results) == 1
    assert results[0].category == "Luxury Tours"


@pytest.mark.asyncio
async def test_delete_package(test_session, sample_package_data):
    service = PackageService(test_session)
    package = await _create(service, sample_package_data)

    await service.delete(package.id)

    assert await service.get_by_id(package.id) is None
    with pytest.raises(NotFoundError):
        await service.delete(package.id)
