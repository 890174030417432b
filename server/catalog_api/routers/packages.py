"""Package router for catalog package operations."""

import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.catalog import PackageCategory
from ..core.database import get_db
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..core.images import process_image_urls, resolve_base_url
from ..models.package import Package as PackageModel
from ..schemas.common import DistinctValuesResponse, MessageResponse, PROBLEM_RESPONSES, Pagination
from ..schemas.package import (
    CreatePackageRequest,
    ListPackagesQuery,
    Package,
    PackageListResponse,
    SearchPackagesQuery,
    UpdatePackageRequest,
)
from ..schemas.suggestion import SuggestionResponse
from ..services.package_service import PackageService
from ..services.search_service import SuggestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/packages", tags=["packages"])


def _convert_package_to_schema(package: PackageModel, base_url: str) -> Package:
    """Convert a package row to its response schema with absolute image URLs."""
    return Package(
        id=str(package.id),
        title=package.title,
        slug=package.slug,
        description=package.description,
        short_description=package.short_description,
        price=package.price,
        original_price=package.original_price,
        discount=package.discount,
        discounted_price=package.discounted_price,
        duration=package.duration,
        destination=package.destination,
        category=package.category,
        country=package.country,
        state=package.state,
        tour_type=package.tour_type,
        holiday_type_id=str(package.holiday_type_id) if package.holiday_type_id else None,
        images=process_image_urls(package.images, base_url),
        highlights=package.highlights or [],
        inclusions=package.inclusions or [],
        exclusions=package.exclusions or [],
        rating=package.rating,
        is_active=package.is_active,
        is_featured=package.is_featured,
        created_at=package.created_at,
        updated_at=package.updated_at,
    )


def _package_list(packages: list[PackageModel], request: Request) -> list[dict]:
    base_url = resolve_base_url(str(request.base_url))
    return [_convert_package_to_schema(p, base_url).model_dump(mode="json") for p in packages]


@router.get("", response_model=PackageListResponse)
async def list_packages(
    request: Request,
    query: Annotated[ListPackagesQuery, Query()],
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """List active packages with filters and page-based pagination."""
    packages, total = await PackageService(db).list_packages(query)

    pagination = Pagination.build(query.page, query.limit, total)
    return JSONResponse(
        status_code=200,
        content={
            "packages": _package_list(packages, request),
            "pagination": pagination.model_dump(),
        }
    )


@router.get("/search", response_model=list[Package])
async def search_packages(
    request: Request,
    query: Annotated[SearchPackagesQuery, Query()],
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Search active packages by text, category and price range."""
    packages = await PackageService(db).search_packages(query)
    return JSONResponse(status_code=200, content=_package_list(packages, request))


@router.get("/suggest", response_model=SuggestionResponse)
async def suggest_packages(
    request: Request,
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """
    Type-ahead package suggestions.

    Always answers 200; a failed lookup yields an empty list with an ``error``.
    """
    service = SuggestionService(db, resolve_base_url(str(request.base_url)))
    response_data = await service.suggest_packages(q)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/countries", response_model=DistinctValuesResponse)
async def package_countries(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    values = await PackageService(db).countries()
    return JSONResponse(status_code=200, content=DistinctValuesResponse(values=values).model_dump())


@router.get("/states", response_model=DistinctValuesResponse)
async def package_states(
    country: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    values = await PackageService(db).states(country)
    return JSONResponse(status_code=200, content=DistinctValuesResponse(values=values).model_dump())


@router.get("/tour-types", response_model=DistinctValuesResponse)
async def package_tour_types(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    values = await PackageService(db).tour_types()
    return JSONResponse(status_code=200, content=DistinctValuesResponse(values=values).model_dump())


@router.get("/category/{category}", response_model=list[Package])
async def packages_by_category(
    category: PackageCategory,
    request: Request,
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Latest active packages in one category."""
    packages = await PackageService(db).packages_by_category(category, limit)
    return JSONResponse(status_code=200, content=_package_list(packages, request))


@router.get("/slug/{slug}", response_model=Package)
async def get_package_by_slug(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Get an active package by slug."""
    package = await PackageService(db).get_by_slug_or_raise(slug)
    response_data = _convert_package_to_schema(package, resolve_base_url(str(request.base_url)))
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.get("/{package_id}", response_model=Package)
async def get_package(
    package_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Get a package by ID."""
    package = await PackageService(db).get_by_id_or_raise(package_id)
    response_data = _convert_package_to_schema(package, resolve_base_url(str(request.base_url)))
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))


@router.post("", response_model=Package, status_code=201, responses=PROBLEM_RESPONSES)
async def create_package(
    payload: CreatePackageRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """
    Create a new package.

    Without a slug one is derived from the title and made unique; an explicit
    slug that is already taken is rejected.
    """
    try:
        package = await PackageService(db).create_package(payload)

        logger.info(
            "Package created successfully",
            extra={"package_id": str(package.id), "slug": package.slug}
        )

        response_data = _convert_package_to_schema(package, resolve_base_url(str(request.base_url)))
        return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in package creation",
            extra={"title": payload.title, "slug": payload.slug, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.put("/{package_id}", response_model=Package, responses=PROBLEM_RESPONSES)
async def update_package(
    package_id: UUID,
    payload: UpdatePackageRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Partially update a package."""
    try:
        package = await PackageService(db).update_package(package_id, payload)

        response_data = _convert_package_to_schema(package, resolve_base_url(str(request.base_url)))
        return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in package update",
            extra={"package_id": str(package_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()


@router.delete("/{package_id}", response_model=MessageResponse)
async def delete_package(
    package_id: UUID,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """Delete a package."""
    try:
        await PackageService(db).delete(package_id)
        return JSONResponse(
            status_code=200,
            content=MessageResponse(message="Package deleted successfully").model_dump()
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in package deletion",
            extra={"package_id": str(package_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError()
