"""Holiday type router."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..core.images import process_single_image, resolve_base_url
from ..models.holiday_type import HolidayType as HolidayTypeModel
from ..schemas.common import MessageResponse, PROBLEM_RESPONSES
from ..schemas.holiday_type import (
    CreateHolidayTypeRequest,
    HolidayType,
    UpdateHolidayTypeOrderRequest,
    UpdateHolidayTypeRequest,
)
from ..schemas.suggestion import SuggestionResponse
from ..services.holiday_type_service import HolidayTypeService
from ..services.search_service import SuggestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/holiday-types", tags=["holiday-types"])


def _convert_holiday_type_to_schema(holiday_type: HolidayTypeModel, base_url: str) -> HolidayType:
    return HolidayType(
        id=str(holiday_type.id),
        title=holiday_type.title,
        slug=holiday_type.slug,
        description=holiday_type.description,
        short_description=holiday_type.short_description,
        image=process_single_image(holiday_type.image, base_url),
        duration=holiday_type.duration,
        travelers=holiday_type.travelers,
        badge=holiday_type.badge,
        price=holiday_type.price,
        country=holiday_type.country,
        state=holiday_type.state,
        tour_type=holiday_type.tour_type,
        category=holiday_type.category,
        highlights=holiday_type.highlights or [],
        is_active=holiday_type.is_active,
        is_featured=holiday_type.is_featured,
        order=holiday_type.order,
        created_at=holiday_type.created_at,
        updated_at=holiday_type.updated_at,
    )


def _holiday_type_response(holiday_type: HolidayTypeModel, request: Request, status_code: int = 200) -> JSONResponse:
    response_data = _convert_holiday_type_to_schema(holiday_type, resolve_base_url(str(request.base_url)))
    return JSONResponse(status_code=status_code, content=response_data.model_dump(mode="json"))


def _holiday_type_list(holiday_types: list[HolidayTypeModel], request: Request) -> JSONResponse:
    base_url = resolve_base_url(str(request.base_url))
    return JSONResponse(
        status_code=200,
        content=[_convert_holiday_type_to_schema(h, base_url).model_dump(mode="json") for h in holiday_types]
    )


@router.get("", response_model=list[HolidayType])
async def list_holiday_types(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """Active holiday types in display order."""
    return _holiday_type_list(await HolidayTypeService(db).list_holiday_types(), request)


@router.get("/admin", response_model=list[HolidayType])
async def list_all_holiday_types(request: Request, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """All holiday types, including inactive ones."""
    holiday_types = await HolidayTypeService(db).list_holiday_types(include_inactive=True)
    return _holiday_type_list(holiday_types, request)


@router.get("/suggest", response_model=SuggestionResponse)
async def suggest_holiday_types(
    request: Request,
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Type-ahead holiday type suggestions; always answers 200."""
    service = SuggestionService(db, resolve_base_url(str(request.base_url)))
    response_data = await service.suggest_holiday_types(q)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/slug/{slug}", response_model=HolidayType)
async def get_holiday_type_by_slug(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    holiday_type = await HolidayTypeService(db).get_by_slug_or_raise(slug)
    return _holiday_type_response(holiday_type, request)


@router.get("/{holiday_type_id}", response_model=HolidayType)
async def get_holiday_type(
    holiday_type_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    holiday_type = await HolidayTypeService(db).get_by_id_or_raise(holiday_type_id)
    return _holiday_type_response(holiday_type, request)


@router.post("", response_model=HolidayType, status_code=201, responses=PROBLEM_RESPONSES)
async def create_holiday_type(
    payload: CreateHolidayTypeRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Create a holiday type."""
    try:
        holiday_type = await HolidayTypeService(db).create_holiday_type(payload)

        logger.info(
            "Holiday type created successfully",
            extra={"holiday_type_id": str(holiday_type.id), "slug": holiday_type.slug}
        )
        return _holiday_type_response(holiday_type, request, status_code=201)

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in holiday type creation",
            extra={"title": payload.title, "slug": payload.slug, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.put("/{holiday_type_id}", response_model=HolidayType, responses=PROBLEM_RESPONSES)
async def update_holiday_type(
    holiday_type_id: UUID,
    payload: UpdateHolidayTypeRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    try:
        holiday_type = await HolidayTypeService(db).update_holiday_type(holiday_type_id, payload)
        return _holiday_type_response(holiday_type, request)

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in holiday type update",
            extra={"holiday_type_id": str(holiday_type_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.patch("/{holiday_type_id}/toggle-status", response_model=HolidayType)
async def toggle_holiday_type_status(
    holiday_type_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    holiday_type = await HolidayTypeService(db).toggle_status(holiday_type_id)
    return _holiday_type_response(holiday_type, request)


@router.patch("/{holiday_type_id}/toggle-featured", response_model=HolidayType)
async def toggle_holiday_type_featured(
    holiday_type_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    holiday_type = await HolidayTypeService(db).toggle_featured(holiday_type_id)
    return _holiday_type_response(holiday_type, request)


@router.patch("/{holiday_type_id}/order", response_model=HolidayType)
async def set_holiday_type_order(
    holiday_type_id: UUID,
    payload: UpdateHolidayTypeOrderRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Move a holiday type in the display order."""
    holiday_type = await HolidayTypeService(db).set_order(holiday_type_id, payload.order)
    return _holiday_type_response(holiday_type, request)


@router.delete("/{holiday_type_id}", response_model=MessageResponse)
async def delete_holiday_type(
    holiday_type_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Delete a holiday type; linked packages and destinations keep existing without it."""
    try:
        await HolidayTypeService(db).delete(holiday_type_id)
        return JSONResponse(
            status_code=200,
            content=MessageResponse(message="Holiday type deleted successfully").model_dump()
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in holiday type deletion",
            extra={"holiday_type_id": str(holiday_type_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()
