"""Test configuration and fixtures."""

import os

# Must be set before catalog_api reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog_api.core.database import Base, build_engine, build_session_factory, get_db
from catalog_api.models import *  # noqa: F403 - Import all models

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a fresh in-memory catalog database."""
    engine = build_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_engine):
    """Session factory bound to the test engine."""
    return build_session_factory(test_engine)


@pytest_asyncio.fixture(scope="function")
async def test_session(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session):
    """Create a test FastAPI application."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError

    from catalog_api.core.exceptions import (
        ProblemDetailsException,
        problem_details_handler,
        request_validation_handler,
    )
    from catalog_api.routers import destinations, fixed_departures, health, holiday_types, metrics, packages, search

    # Simplified app without lifespan or middleware
    app = FastAPI(title="Travel Catalog API (Test)", version="1.0.0-test")

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "travel-catalog-api", "version": "1.0.0"}

    @app.get("/ready")
    async def readiness_check():
        return {"status": "ready", "service": "travel-catalog-api", "checks": {"database": "ok"}}

    @app.get("/info")
    async def service_info():
        return {
            "service": "travel-catalog-api",
            "version": "1.0.0",
            "features": {"slug_allocation": True, "suggestions": True},
        }

    app.include_router(health.router)
    app.include_router(packages.router)
    app.include_router(destinations.router)
    app.include_router(fixed_departures.router)
    app.include_router(holiday_types.router)
    app.include_router(search.router)
    app.include_router(metrics.router)

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_package_data():
    """Sample package payload."""
    return {
        "title": "Manali Adventure",
        "description": "Snow peaks, river rafting and the Rohtang Pass",
        "short_description": "Five days in the Kullu valley",
        "price": 24999,
        "original_price": 29999,
        "discount": 10,
        "duration": "5 Days / 4 Nights",
        "destination": "Manali",
        "category": "Mountain Treks",
        "country": "India",
        "state": "Himachal Pradesh",
        "tour_type": "india",
        "images": ["manali-1.jpg", "/uploads/manali-2.jpg"],
        "highlights": ["Rohtang Pass", "Solang Valley"],
        "inclusions": ["Hotel", "Breakfast"],
        "exclusions": ["Flights"],
    }


@pytest.fixture
def sample_destination_data():
    """Sample destination payload."""
    return {
        "name": "Goa",
        "description": "Beaches, forts and Portuguese churches",
        "short_description": "Sun and sand on the Konkan coast",
        "image": "goa.jpg",
        "location": "North Goa",
        "country": "India",
        "state": "Goa",
        "tour_type": "india",
        "category": "Beach Holidays",
        "price": 15999,
        "duration": "4 Days / 3 Nights",
    }


@pytest.fixture
def sample_fixed_departure_data():
    """Sample fixed departure payload."""
    return {
        "title": "Ladakh Bike Expedition",
        "description": "Ride over the highest motorable passes",
        "short_description": "Group ride from Manali to Leh",
        "price": 45999,
        "duration": "10 Days / 9 Nights",
        "destination": "Leh",
        "departure_date": "2030-06-01T06:00:00Z",
        "return_date": "2030-06-10T18:00:00Z",
        "available_seats": 12,
        "total_seats": 20,
    }


@pytest.fixture
def sample_holiday_type_data():
    """Sample holiday type payload."""
    return {
        "title": "Honeymoon Packages",
        "description": "Romantic escapes for newly married couples",
        "short_description": "Beaches, hills and candlelight dinners",
        "image": "honeymoon.jpg",
        "duration": "5-7 Days",
        "travelers": "2 Adults",
        "badge": "Popular",
        "price": "From ₹39,999",
    }
