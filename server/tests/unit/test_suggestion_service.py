"""Unit tests for the type-ahead suggestion service."""

import pytest
from sqlalchemy.exc import OperationalError

from catalog_api.core.config import settings
from catalog_api.schemas.destination import CreateDestinationRequest
from catalog_api.schemas.holiday_type import CreateHolidayTypeRequest
from catalog_api.schemas.package import CreatePackageRequest
from catalog_api.schemas.suggestion import SuggestionType
from catalog_api.services.destination_service import DestinationService
from catalog_api.services.holiday_type_service import HolidayTypeService
from catalog_api.services.package_service import PackageService
from catalog_api.services.search_service import SuggestionService


async def _create_package(session, sample_package_data, **overrides):
    return await PackageService(session).create_package(
        CreatePackageRequest(**{**sample_package_data, **overrides})
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "a", " g ", "   "])
async def test_short_query_never_touches_store(test_session, monkeypatch, query):
    """Queries under two characters return nothing without a database call."""
    async def fail(*args, **kwargs):
        raise AssertionError("store was queried")

    monkeypatch.setattr(test_session, "execute", fail)
    service = SuggestionService(test_session)

    for suggest in (
        service.suggest_packages,
        service.suggest_destinations,
        service.suggest_holiday_types,
        service.suggest_combined,
    ):
        response = await suggest(query)
        assert response.suggestions == []
        assert response.error is None


@pytest.mark.asyncio
async def test_suggest_packages_ranks_exact_title_first(test_session, sample_package_data):
    await _create_package(test_session, sample_package_data, title="Goa Tour", destination="Panaji")
    await _create_package(test_session, sample_package_data, title="Goa", destination="Panaji")

    response = await SuggestionService(test_session).suggest_packages("goa")

    assert [s.title for s in response.suggestions] == ["Goa", "Goa Tour"]
    assert all(s.type == SuggestionType.PACKAGE for s in response.suggestions)


@pytest.mark.asyncio
async def test_suggest_packages_sums_field_weights(test_session, sample_package_data):
    await _create_package(test_session, sample_package_data, title="Goa", destination="Panaji")
    await _create_package(test_session, sample_package_data, title="Goa Beach Tour", destination="Goa")

    response = await SuggestionService(test_session).suggest_packages("goa")

    # title 10 + destination 8 beats title 10 + exact bonus 5
    assert [s.title for s in response.suggestions] == ["Goa Beach Tour", "Goa"]


@pytest.mark.asyncio
async def test_suggest_packages_excludes_inactive_and_caps_results(test_session, sample_package_data):
    for i in range(7):
        await _create_package(test_session, sample_package_data, title=f"Manali Escape {i}")
    await _create_package(test_session, sample_package_data, title="Manali Hidden", is_active=False)

    response = await SuggestionService(test_session).suggest_packages("manali")

    assert len(response.suggestions) == settings.suggest_result_limit
    assert "Manali Hidden" not in [s.title for s in response.suggestions]


@pytest.mark.asyncio
async def test_suggestion_projection(test_session, sample_package_data):
    package = await _create_package(test_session, sample_package_data)

    response = await SuggestionService(test_session, "https://api.example.com").suggest_packages("Manali")
    suggestion = response.suggestions[0]

    assert suggestion.id == str(package.id)
    assert suggestion.slug == "manali-adventure"
    assert suggestion.destination == "Manali"
    assert suggestion.price == 24999
    assert suggestion.duration == "5 Days / 4 Nights"
    assert suggestion.image == "https://api.example.com/uploads/manali-1.jpg"


@pytest.mark.asyncio
async def test_query_wildcards_are_literal(test_session, sample_package_data):
    await _create_package(test_session, sample_package_data, title="Manali Adventure")

    response = await SuggestionService(test_session).suggest_packages("%%")
    assert response.suggestions == []


@pytest.mark.asyncio
async def test_store_failure_degrades_to_empty_list(test_session, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(test_session, "execute", broken)
    response = await SuggestionService(test_session).suggest_packages("goa")

    assert response.suggestions == []
    assert response.error
    assert "connection refused" in response.error


@pytest.mark.asyncio
async def test_store_failure_message_is_generic_outside_development(test_session, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("password=secret"))

    monkeypatch.setattr(test_session, "execute", broken)
    monkeypatch.setattr(settings, "environment", "production")

    response = await SuggestionService(test_session).suggest_combined("goa")

    assert response.suggestions == []
    assert response.error == "Search temporarily unavailable"


@pytest.mark.asyncio
async def test_suggest_destinations(test_session, sample_destination_data):
    service = DestinationService(test_session)
    await service.create_destination(CreateDestinationRequest(**sample_destination_data))
    await service.create_destination(CreateDestinationRequest(
        **{**sample_destination_data, "name": "Gokarna", "location": "Uttara Kannada", "state": "Karnataka"}
    ))

    response = await SuggestionService(test_session).suggest_destinations("goa")

    assert [s.title for s in response.suggestions] == ["Goa"]
    assert response.suggestions[0].type == SuggestionType.DESTINATION
    assert response.suggestions[0].image == "/uploads/goa.jpg"


@pytest.mark.asyncio
async def test_suggest_holiday_types(test_session, sample_holiday_type_data):
    service = HolidayTypeService(test_session)
    await service.create_holiday_type(CreateHolidayTypeRequest(**sample_holiday_type_data))
    await service.create_holiday_type(CreateHolidayTypeRequest(
        **{**sample_holiday_type_data, "title": "Family Tours", "description": "Trips for all ages",
           "short_description": "Kids welcome"}
    ))

    response = await SuggestionService(test_session).suggest_holiday_types("honey")

    assert len(response.suggestions) == 1
    suggestion = response.suggestions[0]
    assert suggestion.title == "Honeymoon Packages"
    assert suggestion.type == SuggestionType.HOLIDAY_TYPE
    assert suggestion.price == "From ₹39,999"


@pytest.mark.asyncio
async def test_combined_puts_locations_first(test_session, sample_package_data):
    await _create_package(test_session, sample_package_data, title="Backwater Cruise",
                          destination="Alleppey", state="Kerala")
    await _create_package(test_session, sample_package_data, title="Kerala Honeymoon",
                          destination="Munnar", state="Kerala")

    response = await SuggestionService(test_session).suggest_combined("kerala")
    suggestions = response.suggestions

    assert suggestions[0].type == SuggestionType.LOCATION
    assert suggestions[0].title == "Kerala"
    assert suggestions[0].destination == "Kerala, India"
    assert suggestions[0].slug == "kerala"
    assert suggestions[0].id is None
    # Exact state appears once even though two packages carry it
    assert [s.title for s in suggestions if s.type == SuggestionType.LOCATION] == ["Kerala"]
    # title 20 + state 10 beats state 10 alone
    assert [s.title for s in suggestions[1:]] == ["Kerala Honeymoon", "Backwater Cruise"]


@pytest.mark.asyncio
async def test_combined_orders_prefix_locations_first(test_session, sample_package_data):
    await _create_package(test_session, sample_package_data, title="Delhi Darshan", state="New Delhi")
    await _create_package(test_session, sample_package_data, title="Old Delhi Walk", state="Delhi")

    response = await SuggestionService(test_session).suggest_combined("delhi")
    locations = [s.title for s in response.suggestions if s.type == SuggestionType.LOCATION]

    assert locations == ["Delhi", "New Delhi"]


@pytest.mark.asyncio
async def test_combined_finds_exact_location_among_many_matches(test_session, sample_package_data):
    """More matching states than the location cap still surface the exact match first."""
    for state in ("North Goa", "South Goa", "East Goa", "West Goa", "Goa"):
        await _create_package(test_session, sample_package_data, title=f"{state} Escape", state=state)

    response = await SuggestionService(test_session).suggest_combined("goa")
    locations = [s for s in response.suggestions if s.type == SuggestionType.LOCATION]

    assert [s.title for s in locations] == ["Goa", "East Goa", "North Goa", "South Goa"]
    assert locations[0].destination == "Goa, India"
    assert len(locations) == settings.location_suggestion_limit


@pytest.mark.asyncio
async def test_combined_caps_total_results(test_session, sample_package_data):
    for i in range(15):
        await _create_package(test_session, sample_package_data, title=f"Kerala Trip {i}", state="Kerala")

    response = await SuggestionService(test_session).suggest_combined("kerala")

    assert len(response.suggestions) == settings.combined_result_limit
    assert response.suggestions[0].type == SuggestionType.LOCATION
