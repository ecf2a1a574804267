"""URL shortening, lookup and redirect endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import RedirectResponse

from app.api import schemas
from app.api.auth_gate import require_identity
from app.api.dependencies import get_shortener_service
from app.db.session import get_db, db_transaction
from app.services.exceptions import (
    CollisionExhaustedError,
    InvalidURLError,
    URLNotFoundError,
)
from app.services.shortener import ShortenedURLService

router = APIRouter(prefix="/v1/url", tags=["urls"])


def _to_response(url) -> schemas.URLResponse:
    return schemas.URLResponse(original_url=url.original_url, short_url=url.short_code)


@router.post(
    "",
    response_model=schemas.URLResponse,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid URL"},
        401: {"model": schemas.ErrorResponse, "description": "Not authenticated"},
        503: {"model": schemas.ErrorResponse, "description": "No free short code, retry later"},
    }
)
@db_transaction()
async def create_short_url(
    url_data: schemas.URLRequest,
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Shorten a URL. Calling it again for the same URL returns the same code."""
    try:
        url = await shortener_service.shorten(db, url_data.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CollisionExhaustedError as e:
        logger.error("Short code space exhausted", url=url_data.url, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not allocate a short code, please retry",
        )

    logger.info("URL shortened", short_code=url.short_code, user=identity)
    return _to_response(url)


@router.get(
    "",
    response_model=List[schemas.URLResponse],
    responses={401: {"model": schemas.ErrorResponse, "description": "Not authenticated"}},
)
async def list_urls(
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """List every mapping."""
    urls = await shortener_service.list_all(db)
    return [_to_response(url) for url in urls]


@router.get(
    "/original",
    response_model=schemas.URLResponse,
    responses={
        401: {"model": schemas.ErrorResponse, "description": "Not authenticated"},
        404: {"model": schemas.ErrorResponse, "description": "URL was never shortened"},
    }
)
async def get_by_original_url(
    url_data: schemas.URLRequest,
    identity: str = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Look up the existing mapping for a long URL."""
    try:
        url = await shortener_service.reverse_lookup(db, url_data.url)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(url)


@router.get(
    "/{short_url}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"model": schemas.ErrorResponse, "description": "Unknown short code"}},
)
async def redirect_to_original_url(
    short_url: str = Path(..., description="The short code"),
    db: AsyncSession = Depends(get_db),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Redirect to the original URL. Public."""
    try:
        original_url = await shortener_service.resolve(db, short_url)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Short URL resolved", short_code=short_url)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
