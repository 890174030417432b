"""Unit tests for fixed departure service."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from catalog_api.core.catalog import DepartureStatus
from catalog_api.core.exceptions import SlugConflictError, ValidationError
from catalog_api.schemas.fixed_departure import (
    CreateFixedDepartureRequest,
    ListFixedDeparturesQuery,
    SearchFixedDeparturesQuery,
    UpdateFixedDepartureRequest,
)
from catalog_api.services.fixed_departure_service import FixedDepartureService


async def _create(service, data, **overrides):
    return await service.create_fixed_departure(CreateFixedDepartureRequest(**{**data, **overrides}))


@pytest.mark.asyncio
async def test_create_fixed_departure(test_session, sample_fixed_departure_data):
    service = FixedDepartureService(test_session)

    departure = await _create(service, sample_fixed_departure_data)

    assert departure.slug == "ladakh-bike-expedition"
    assert departure.status == "upcoming"
    assert departure.booking_percentage == pytest.approx(40.0)


def test_create_request_validates_schedule_and_seats(sample_fixed_departure_data):
    with pytest.raises(PydanticValidationError):
        CreateFixedDepartureRequest(**{**sample_fixed_departure_data, "return_date": "2030-05-01T00:00:00Z"})

    with pytest.raises(PydanticValidationError):
        CreateFixedDepartureRequest(**{**sample_fixed_departure_data, "available_seats": 21})


def test_request_dates_are_normalized_to_utc(sample_fixed_departure_data):
    request = CreateFixedDepartureRequest(
        **{**sample_fixed_departure_data, "departure_date": "2030-06-01T11:30:00+05:30", "return_date": "2030-06-01T06:00:00"}
    )
    assert request.departure_date == datetime(2030, 6, 1, 6, 0, tzinfo=timezone.utc)
    assert request.return_date.tzinfo == timezone.utc

    update = UpdateFixedDepartureRequest(return_date="2030-06-10T18:00:00")
    assert update.return_date == datetime(2030, 6, 10, 18, 0, tzinfo=timezone.utc)
    assert UpdateFixedDepartureRequest().departure_date is None


@pytest.mark.asyncio
async def test_duplicate_explicit_slug(test_session, sample_fixed_departure_data):
    service = FixedDepartureService(test_session)
    await _create(service, sample_fixed_departure_data, slug="ladakh-june")

    with pytest.raises(SlugConflictError):
        await _create(service, sample_fixed_departure_data, slug="ladakh-june")


@pytest.mark.asyncio
async def test_update_checks_merged_invariants(test_session, sample_fixed_departure_data):
    service = FixedDepartureService(test_session)
    departure = await _create(service, sample_fixed_departure_data)

    with pytest.raises(ValidationError):
        await service.update_fixed_departure(departure.id, UpdateFixedDepartureRequest(available_seats=25))

    with pytest.raises(ValidationError):
        await service.update_fixed_departure(
            departure.id, UpdateFixedDepartureRequest(return_date="2030-05-20T00:00:00Z")
        )

    updated = await service.update_fixed_departure(
        departure.id, UpdateFixedDepartureRequest(available_seats=5, status=DepartureStatus.ONGOING)
    )
    assert updated.available_seats == 5
    assert updated.status == "ongoing"


@pytest.mark.asyncio
async def test_list_orders_by_departure_date(test_session, sample_fixed_departure_data):
    service = FixedDepartureService(test_session)
    await _create(service, sample_fixed_departure_data, title="Late",
                  departure_date="2030-09-01T00:00:00Z", return_date="2030-09-10T00:00:00Z")
    await _create(service, sample_fixed_departure_data, title="Early", is_featured=True,
                  departure_date="2030-03-01T00:00:00Z", return_date="2030-03-10T00:00:00Z")
    await _create(service, sample_fixed_departure_data, title="Done", status="completed")

    departures, total = await service.list_fixed_departures(ListFixedDeparturesQuery())
    assert total == 3
    assert departures[0].title == "Early"
    assert departures[-1].title == "Late"

    _, total = await service.list_fixed_departures(ListFixedDeparturesQuery(status=DepartureStatus.COMPLETED))
    assert total == 1

    featured = await service.featured_fixed_departures()
    assert [d.title for d in featured] == ["Early"]


@pytest.mark.asyncio
async def test_search_fixed_departures(test_session, sample_fixed_departure_data):
    service = FixedDepartureService(test_session)
    await _create(service, sample_fixed_departure_data)
    await _create(service, sample_fixed_departure_data, title="Spiti Circuit", destination="Kaza",
                  description="Monasteries of Spiti", price=35999)

    results = await service.search_fixed_departures(SearchFixedDeparturesQuery(q="spiti"))
    assert [d.title for d in results] == ["Spiti Circuit"]

    results = await service.search_fixed_departures(SearchFixedDeparturesQuery(destination="leh"))
    assert [d.title for d in results] == ["Ladakh Bike Expedition"]

    results = await service.search_fixed_departures(SearchFixedDeparturesQuery(max_price=40000))
    assert [d.title for d in results] == ["Spiti Circuit"]


@pytest.mark.asyncio
async def test_toggles(test_session, sample_fixed_departure_data):
    service = FixedDepartureService(test_session)
    departure = await _create(service, sample_fixed_departure_data)

    toggled = await service.toggle_featured(departure.id)
    assert toggled.is_featured is True

    toggled = await service.toggle_active(departure.id)
    assert toggled.is_active is False
    assert await service.get_by_slug(departure.slug) is None
