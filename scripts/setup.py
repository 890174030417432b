#!/usr/bin/env python3
"""Setup script for the travel catalog API."""

import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command
from alembic.config import Config
from sqlalchemy import func, select

from catalog_api.core.database import async_session_factory, close_db
from catalog_api.models import Package
from catalog_api.schemas.destination import CreateDestinationRequest
from catalog_api.schemas.fixed_departure import CreateFixedDepartureRequest
from catalog_api.schemas.holiday_type import CreateHolidayTypeRequest
from catalog_api.schemas.package import CreatePackageRequest
from catalog_api.services import (
    DestinationService,
    FixedDepartureService,
    HolidayTypeService,
    PackageService,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_migrations():
    """Upgrade the database schema to the latest revision."""
    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


async def create_sample_data():
    """Create a small sample catalog.

    Everything goes through the services so slugs are allocated the same way
    the API allocates them.
    """
    logger.info("Creating sample data...")

    async with async_session_factory() as db:
        existing = (await db.execute(select(func.count()).select_from(Package))).scalar_one()
        if existing > 0:
            logger.info("Sample data already exists, skipping...")
            return

        honeymoon = await HolidayTypeService(db).create_holiday_type(CreateHolidayTypeRequest(
            title="Honeymoon Packages",
            description="Romantic escapes for newly married couples",
            short_description="Beaches, hills and candlelight dinners",
            image="honeymoon.jpg",
            duration="5-7 Days",
            travelers="2 Adults",
            badge="Popular",
            price="From ₹39,999",
            category="Honeymoon Packages",
            is_featured=True,
        ))

        packages = PackageService(db)
        for title, destination, state, category in [
            ("Goa Beach Escape", "Goa", "Goa", "Beach Holidays"),
            ("Manali Snow Adventure", "Manali", "Himachal Pradesh", "Mountain Treks"),
            ("Kerala Backwaters Honeymoon", "Alleppey", "Kerala", "Honeymoon Packages"),
        ]:
            await packages.create_package(CreatePackageRequest(
                title=title,
                description=f"A curated holiday in {destination}",
                short_description=f"Explore {destination}",
                price=24999,
                original_price=29999,
                discount=15,
                duration="5 Days / 4 Nights",
                destination=destination,
                category=category,
                country="India",
                state=state,
                tour_type="india",
                holiday_type_id=str(honeymoon.id) if category == "Honeymoon Packages" else None,
                images=[f"{destination.lower()}.jpg"],
            ))

        await DestinationService(db).create_destination(CreateDestinationRequest(
            name="Bali",
            description="Temples, rice terraces and surf beaches",
            short_description="Island of the Gods",
            image="bali.jpg",
            location="Ubud",
            country="Indonesia",
            tour_type="international",
            category="Trending Destinations",
            is_trending=True,
        ))

        base_date = datetime.now(timezone.utc) + timedelta(days=30)
        departures = FixedDepartureService(db)
        for i in range(3):
            departure_date = base_date + timedelta(days=i * 14)
            await departures.create_fixed_departure(CreateFixedDepartureRequest(
                title="Ladakh Bike Expedition",
                description="Ride over the highest motorable passes",
                short_description="Group ride from Manali to Leh",
                price=45999,
                duration="10 Days / 9 Nights",
                destination="Leh",
                departure_date=departure_date,
                return_date=departure_date + timedelta(days=9),
                available_seats=20,
                total_seats=20,
                is_featured=i == 0,
            ))

        logger.info("Sample data created successfully!")


async def main():
    """Main setup function."""
    logger.info("Starting travel catalog API setup...")

    # env.py drives its own event loop, so migrations run off this one
    await asyncio.to_thread(run_migrations)

    try:
        await create_sample_data()
    finally:
        await close_db()

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn catalog_api.main:app --reload")


if __name__ == "__main__":
    asyncio.run(main())
