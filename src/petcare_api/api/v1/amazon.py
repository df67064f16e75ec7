# src/petcare_api/api/v1/amazon.py
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Security, status
from fastapi.responses import JSONResponse

from petcare_api.api.dependencies import get_click_service, get_product_search_service
from petcare_api.core.config import get_settings
from petcare_api.core.rate_limit import limiter
from petcare_api.core.security import get_user_id
from petcare_api.domain.models import (
    ClickCreate,
    ClickListResponse,
    ClickResponse,
    ErrorResponse,
    SearchResponse,
)
from petcare_api.services.click_service import ClickService
from petcare_api.services.product_search_service import ProductSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/amazon", tags=["Amazon"])

UserDep = Annotated[str, Security(get_user_id)]
SearchServiceDep = Annotated[ProductSearchService, Depends(get_product_search_service)]
ClickServiceDep = Annotated[ClickService, Depends(get_click_service)]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(message=message).model_dump()
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@limiter.limit(get_settings().search_rate_limit)
async def search_amazon(
    request: Request,
    user_id: UserDep,
    service: SearchServiceDep,
    q: str | None = Query(default=None, max_length=200),
) -> SearchResponse | JSONResponse:
    """
    Sucht Affiliate-Produkte. Provider-Ausfälle führen zu Fallback-Daten,
    nie zu einem Fehler; 500 nur bei internen Fehlern.
    """
    if not q or not q.strip():
        return _error(status.HTTP_400_BAD_REQUEST, "Please provide a search keyword")

    try:
        products = await service.search(q)
    except Exception:
        logger.exception("Product search failed for '%s'", q)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch products from Amazon")

    return SearchResponse.of(products)


@router.post("/click", response_model=ClickResponse, status_code=status.HTTP_201_CREATED)
async def track_click(
    payload: ClickCreate,
    user_id: UserDep,
    service: ClickServiceDep,
) -> ClickResponse:
    """Speichert einen Klick auf einen Affiliate-Link."""
    click = await service.track(user_id=user_id, payload=payload)
    return ClickResponse(data=click)


@router.get("/clicks", response_model=ClickListResponse)
async def list_clicks(
    user_id: UserDep,
    service: ClickServiceDep,
    limit: int = Query(50, ge=1, le=200),
) -> ClickListResponse:
    clicks = await service.recent_clicks(user_id=user_id, limit=limit)
    return ClickListResponse(count=len(clicks), data=clicks)
