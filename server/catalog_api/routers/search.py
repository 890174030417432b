"""Cross-collection search router."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.images import resolve_base_url
from ..schemas.suggestion import SuggestionResponse
from ..services.search_service import SuggestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/search", tags=["search"])


@router.get("/suggest", response_model=SuggestionResponse)
async def suggest(
    request: Request,
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    """
    Combined type-ahead suggestions.

    Matching states and countries come first, followed by packages ranked
    with location-aware weights. Always answers 200.
    """
    service = SuggestionService(db, resolve_base_url(str(request.base_url)))
    response_data = await service.suggest_combined(q)
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
