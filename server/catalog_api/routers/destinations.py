"""Destination router for catalog destination operations."""

import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.catalog import TourType
from ..core.database import get_db
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..core.images import process_single_image, resolve_base_url
from ..models.destination import Destination as DestinationModel
from ..schemas.common import DistinctValuesResponse, MessageResponse, PROBLEM_RESPONSES, Pagination
from ..schemas.destination import (
    CreateDestinationRequest,
    Destination,
    DestinationListResponse,
    ListDestinationsQuery,
    SearchDestinationsQuery,
    UpdateDestinationRequest,
)
from ..schemas.suggestion import SuggestionResponse
from ..services.destination_service import DestinationService
from ..services.search_service import SuggestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/destinations", tags=["destinations"])


def _convert_destination_to_schema(destination: DestinationModel, base_url: str) -> Destination:
    """Convert a destination row to its response schema with an absolute image URL."""
    return Destination(
        id=str(destination.id),
        name=destination.name,
        slug=destination.slug,
        description=destination.description,
        short_description=destination.short_description,
        image=process_single_image(destination.image, base_url),
        location=destination.location,
        country=destination.country,
        state=destination.state,
        tour_type=destination.tour_type,
        category=destination.category,
        holiday_type_id=str(destination.holiday_type_id) if destination.holiday_type_id else None,
        price=destination.price,
        duration=destination.duration,
        highlights=destination.highlights or [],
        rating=destination.rating,
        is_active=destination.is_active,
        is_trending=destination.is_trending,
        visit_count=destination.visit_count,
        created_at=destination.created_at,
        updated_at=destination.updated_at,
    )


def _destination_list(destinations: list[DestinationModel], request: Request) -> list[dict]:
    base_url = resolve_base_url(str(request.base_url))
    return [_convert_destination_to_schema(d, base_url).model_dump(mode="json") for d in destinations]


def _values(values: list[str]) -> JSONResponse:
    return JSONResponse(status_code=200, content=DistinctValuesResponse(values=values).model_dump())


@router.get("", response_model=DestinationListResponse)
async def list_destinations(
    request: Request,
    query: Annotated[ListDestinationsQuery, Query()],
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """List active destinations with filters and page-based pagination."""
    destinations, total = await DestinationService(db).list_destinations(query)

    pagination = Pagination.build(query.page, query.limit, total)
    return JSONResponse(
        status_code=200,
        content={
            "destinations": _destination_list(destinations, request),
            "pagination": pagination.model_dump(),
        }
    )


@router.get("/trending", response_model=list[Destination])
async def trending_destinations(
    request: Request,
    limit: int = Query(6, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    destinations = await DestinationService(db).trending_destinations(limit)
    return JSONResponse(status_code=200, content=_destination_list(destinations, request))


@router.get("/search", response_model=list[Destination])
async def search_destinations(
    request: Request,
    query: Annotated[SearchDestinationsQuery, Query()],
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Search active destinations by text, location, tour type and category."""
    destinations = await DestinationService(db).search_destinations(query)
    return JSONResponse(status_code=200, content=_destination_list(destinations, request))


@router.get("/suggest", response_model=SuggestionResponse)
async def suggest_destinations(
    request: Request,
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Type-ahead destination suggestions; always answers 200."""
    service = SuggestionService(db, resolve_base_url(str(request.base_url)))
    response_data = await service.suggest_destinations(q)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/countries", response_model=DistinctValuesResponse)
async def destination_countries(
    tour_type: Optional[TourType] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    return _values(await DestinationService(db).countries(tour_type))


@router.get("/states", response_model=DistinctValuesResponse)
async def destination_states(
    country: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    return _values(await DestinationService(db).states(country))


@router.get("/tour-types", response_model=DistinctValuesResponse)
async def destination_tour_types(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    return _values(await DestinationService(db).tour_types())


@router.get("/{identifier}", response_model=Destination)
async def get_destination(
    identifier: str,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """
    Get a destination by ID or slug.

    Every successful lookup counts as a visit.
    """
    destination = await DestinationService(db).visit(identifier)
    response_data = _convert_destination_to_schema(destination, resolve_base_url(str(request.base_url)))
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("", response_model=Destination, status_code=201, responses=PROBLEM_RESPONSES)
async def create_destination(
    payload: CreateDestinationRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Create a destination; its slug is derived from the name."""
    try:
        destination = await DestinationService(db).create_destination(payload)

        logger.info(
            "Destination created successfully",
            extra={"destination_id": str(destination.id), "slug": destination.slug}
        )

        response_data = _convert_destination_to_schema(destination, resolve_base_url(str(request.base_url)))
        return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in destination creation",
            extra={"name": payload.name, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.put("/{destination_id}", response_model=Destination, responses=PROBLEM_RESPONSES)
async def update_destination(
    destination_id: UUID,
    payload: UpdateDestinationRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Partially update a destination; a new name re-derives the slug."""
    try:
        destination = await DestinationService(db).update_destination(destination_id, payload)

        response_data = _convert_destination_to_schema(destination, resolve_base_url(str(request.base_url)))
        return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in destination update",
            extra={"destination_id": str(destination_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.delete("/{destination_id}", response_model=MessageResponse)
async def delete_destination(
    destination_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    try:
        await DestinationService(db).delete(destination_id)
        return JSONResponse(
            status_code=200,
            content=MessageResponse(message="Destination deleted successfully").model_dump()
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in destination deletion",
            extra={"destination_id": str(destination_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()
