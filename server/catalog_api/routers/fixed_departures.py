"""Fixed departure router for scheduled group tours."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..core.images import process_image_urls, resolve_base_url
from ..models.fixed_departure import FixedDeparture as FixedDepartureModel
from ..schemas.common import MessageResponse, PROBLEM_RESPONSES
from ..schemas.fixed_departure import (
    CreateFixedDepartureRequest,
    FixedDeparture,
    FixedDepartureListResponse,
    ListFixedDeparturesQuery,
    SearchFixedDeparturesQuery,
    UpdateFixedDepartureRequest,
)
from ..services.fixed_departure_service import FixedDepartureService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/fixed-departures", tags=["fixed-departures"])


def _convert_fixed_departure_to_schema(departure: FixedDepartureModel, base_url: str) -> FixedDeparture:
    """Convert a fixed departure row to its response schema."""
    return FixedDeparture(
        id=str(departure.id),
        title=departure.title,
        slug=departure.slug,
        description=departure.description,
        short_description=departure.short_description,
        price=departure.price,
        original_price=departure.original_price,
        discount=departure.discount,
        discounted_price=departure.discounted_price,
        duration=departure.duration,
        destination=departure.destination,
        departure_date=departure.departure_date,
        return_date=departure.return_date,
        available_seats=departure.available_seats,
        total_seats=departure.total_seats,
        booking_percentage=departure.booking_percentage,
        images=process_image_urls(departure.images, base_url),
        highlights=departure.highlights or [],
        inclusions=departure.inclusions or [],
        exclusions=departure.exclusions or [],
        status=departure.status,
        is_active=departure.is_active,
        is_featured=departure.is_featured,
        created_at=departure.created_at,
        updated_at=departure.updated_at,
    )


def _departure_response(departure: FixedDepartureModel, request: Request, status_code: int = 200) -> JSONResponse:
    response_data = _convert_fixed_departure_to_schema(departure, resolve_base_url(str(request.base_url)))
    return JSONResponse(status_code=status_code, content=response_data.model_dump(mode="json"))


def _departure_list(departures: list[FixedDepartureModel], request: Request) -> list[dict]:
    base_url = resolve_base_url(str(request.base_url))
    return [_convert_fixed_departure_to_schema(d, base_url).model_dump(mode="json") for d in departures]


@router.get("", response_model=FixedDepartureListResponse)
async def list_fixed_departures(
    request: Request,
    query: Annotated[ListFixedDeparturesQuery, Query()],
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """List active fixed departures ordered by departure date."""
    departures, total = await FixedDepartureService(db).list_fixed_departures(query)

    return JSONResponse(
        status_code=200,
        content={
            "fixed_departures": _departure_list(departures, request),
            "total": total,
            "total_pages": -(-total // query.limit),
            "current_page": query.page,
        }
    )


@router.get("/featured", response_model=list[FixedDeparture])
async def featured_fixed_departures(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    departures = await FixedDepartureService(db).featured_fixed_departures()
    return JSONResponse(status_code=200, content=_departure_list(departures, request))


@router.get("/search", response_model=list[FixedDeparture])
async def search_fixed_departures(
    request: Request,
    query: Annotated[SearchFixedDeparturesQuery, Query()],
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Search active departures by text, destination, status and price range."""
    departures = await FixedDepartureService(db).search_fixed_departures(query)
    return JSONResponse(status_code=200, content=_departure_list(departures, request))


@router.get("/slug/{slug}", response_model=FixedDeparture)
async def get_fixed_departure_by_slug(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    departure = await FixedDepartureService(db).get_by_slug_or_raise(slug)
    return _departure_response(departure, request)


@router.get("/{departure_id}", response_model=FixedDeparture)
async def get_fixed_departure(
    departure_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    departure = await FixedDepartureService(db).get_by_id_or_raise(departure_id)
    return _departure_response(departure, request)


@router.post("", response_model=FixedDeparture, status_code=201, responses=PROBLEM_RESPONSES)
async def create_fixed_departure(
    payload: CreateFixedDepartureRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Create a fixed departure."""
    try:
        departure = await FixedDepartureService(db).create_fixed_departure(payload)

        logger.info(
            "Fixed departure created successfully",
            extra={"departure_id": str(departure.id), "slug": departure.slug}
        )
        return _departure_response(departure, request, status_code=201)

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in fixed departure creation",
            extra={"title": payload.title, "slug": payload.slug, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.put("/{departure_id}", response_model=FixedDeparture, responses=PROBLEM_RESPONSES)
async def update_fixed_departure(
    departure_id: UUID,
    payload: UpdateFixedDepartureRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    try:
        departure = await FixedDepartureService(db).update_fixed_departure(departure_id, payload)
        return _departure_response(departure, request)

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in fixed departure update",
            extra={"departure_id": str(departure_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.patch("/{departure_id}/toggle-featured", response_model=FixedDeparture)
async def toggle_fixed_departure_featured(
    departure_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    departure = await FixedDepartureService(db).toggle_featured(departure_id)
    return _departure_response(departure, request)


@router.patch("/{departure_id}/toggle-active", response_model=FixedDeparture)
async def toggle_fixed_departure_active(
    departure_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    departure = await FixedDepartureService(db).toggle_active(departure_id)
    return _departure_response(departure, request)


@router.delete("/{departure_id}", response_model=MessageResponse)
async def delete_fixed_departure(
    departure_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    try:
        await FixedDepartureService(db).delete(departure_id)
        return JSONResponse(
            status_code=200,
            content=MessageResponse(message="Fixed departure deleted successfully").model_dump()
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in fixed departure deletion",
            extra={"departure_id": str(departure_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()
