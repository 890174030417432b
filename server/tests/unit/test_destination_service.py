"""Unit tests for destination service."""

from uuid import uuid4

import pytest

from catalog_api.core.catalog import TourType
from catalog_api.core.exceptions import NotFoundError
from catalog_api.schemas.destination import (
    CreateDestinationRequest,
    ListDestinationsQuery,
    SearchDestinationsQuery,
    UpdateDestinationRequest,
)
from catalog_api.services.destination_service import DestinationService


async def _create(service, sample_destination_data, **overrides):
    return await service.create_destination(CreateDestinationRequest(**{**sample_destination_data, **overrides}))


@pytest.mark.asyncio
async def test_create_destination_derives_slug_from_name(test_session, sample_destination_data):
    service = DestinationService(test_session)

    first = await _create(service, sample_destination_data)
    second = await _create(service, sample_destination_data)

    assert first.slug == "goa"
    assert second.slug == "goa-1"
    assert first.visit_count == 0
    assert first.tour_type == "india"


@pytest.mark.asyncio
async def test_update_destination_rederives_slug_on_rename(test_session, sample_destination_data):
    service = DestinationService(test_session)
    destination = await _create(service, sample_destination_data)

    updated = await service.update_destination(destination.id, UpdateDestinationRequest(name="South Goa"))
    assert updated.slug == "south-goa"

    updated = await service.update_destination(destination.id, UpdateDestinationRequest(price=9999))
    assert updated.slug == "south-goa"
    assert updated.price == 9999


@pytest.mark.asyncio
async def test_visit_by_slug_and_id_counts(test_session, sample_destination_data):
    service = DestinationService(test_session)
    destination = await _create(service, sample_destination_data)

    visited = await service.visit("goa")
    assert visited.visit_count == 1

    visited = await service.visit(str(destination.id))
    assert visited.visit_count == 2


@pytest.mark.asyncio
async def test_visit_missing_destination(test_session):
    service = DestinationService(test_session)

    with pytest.raises(NotFoundError):
        await service.visit("atlantis")
    with pytest.raises(NotFoundError):
        await service.visit(str(uuid4()))


@pytest.mark.asyncio
async def test_list_destinations_international_state_matches_country(test_session, sample_destination_data):
    service = DestinationService(test_session)
    await _create(service, sample_destination_data)
    await _create(service, sample_destination_data, name="Phuket", location="Phuket Island",
                  country="Thailand", state=None, tour_type="international")

    _, total = await service.list_destinations(
        ListDestinationsQuery(tour_type=TourType.INTERNATIONAL, state="thailand")
    )
    assert total == 1

    _, total = await service.list_destinations(ListDestinationsQuery(tour_type=TourType.INDIA, state="thailand"))
    assert total == 0

    _, total = await service.list_destinations(ListDestinationsQuery(state="goa"))
    assert total == 1


@pytest.mark.asyncio
async def test_trending_destinations(test_session, sample_destination_data):
    service = DestinationService(test_session)
    await _create(service, sample_destination_data, name="Goa", is_trending=True)
    popular = await _create(service, sample_destination_data, name="Kerala", is_trending=True)
    await _create(service, sample_destination_data, name="Quiet Place")
    await service.visit(str(popular.id))

    trending = await service.trending_destinations()
    assert [d.name for d in trending] == ["Kerala", "Goa"]

    _, total = await service.list_destinations(ListDestinationsQuery(trending=True))
    assert total == 2


@pytest.mark.asyncio
async def test_search_destinations(test_session, sample_destination_data):
    service = DestinationService(test_session)
    await _create(service, sample_destination_data)
    await _create(service, sample_destination_data, name="Munnar", location="Idukki", state="Kerala",
                  description="Tea estates and misty hills")

    results = await service.search_destinations(SearchDestinationsQuery(q="kerala"))
    assert [d.name for d in results] == ["Munnar"]

    results = await service.search_destinations(SearchDestinationsQuery(location="north"))
    assert [d.name for d in results] == ["Goa"]


@pytest.mark.asyncio
async def test_destination_distinct_values(test_session, sample_destination_data):
    service = DestinationService(test_session)
    await _create(service, sample_destination_data)
    await _create(service, sample_destination_data, name="Phuket", country="Thailand", state=None,
                  tour_type="international")

    assert await service.countries() == ["India", "Thailand"]
    assert await service.countries(TourType.INTERNATIONAL) == ["Thailand"]
    assert await service.states() == ["Goa"]
    assert await service.tour_types() == ["india", "international"]
