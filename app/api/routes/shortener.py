"""Short link endpoints: creation, alias suggestion and QR code rendering."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from loguru import logger

from app.api import schemas
from app.api.dependencies import (
    build_short_url,
    get_allocator,
    get_base_url,
    get_qr_renderer,
    get_resolver,
)
from app.services.allocator import CodeAllocator
from app.services.exceptions import (
    AliasTakenError,
    AllocationExhaustedError,
    InvalidAliasError,
    InvalidURLError,
    RenderingError,
    StoreUnavailableError,
    URLNotFoundError,
)
from app.services.qr import QRCodeRenderer
from app.services.resolver import RedirectResolver
from app.services.suggester import suggest_alias

router = APIRouter(tags=["shortener"])

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse, "description": "Invalid URL or alias"},
    409: {"model": schemas.ErrorResponse, "description": "Alias already in use"},
    500: {"model": schemas.ErrorResponse, "description": "Store or QR code failure"},
}


@router.post(
    "/shorten",
    response_model=schemas.ShortLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_short_url(
    url_data: schemas.ShortenRequest,
    allocator: CodeAllocator = Depends(get_allocator),
    qr_renderer: QRCodeRenderer = Depends(get_qr_renderer),
    base_url: str = Depends(get_base_url),
):
    try:
        mapping = await allocator.allocate(url_data.url, alias=url_data.alias)
    except (InvalidURLError, InvalidAliasError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AliasTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AllocationExhaustedError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))

    short_url = build_short_url(base_url, mapping.short_code)
    try:
        qr_code = await qr_renderer.render_data_uri_async(short_url)
    except RenderingError as e:
        # The mapping is committed and stays live; the QR can be fetched again later
        logger.error("QR rendering failed for a committed mapping", short_code=mapping.short_code)
        raise HTTPException(status_code=500, detail=str(e))

    return schemas.ShortLinkResponse(
        short_url=short_url,
        short_code=mapping.short_code,
        qr_code=qr_code,
    )


@router.get(
    "/suggest",
    response_model=schemas.SuggestionResponse,
    responses={400: {"model": schemas.ErrorResponse, "description": "Missing URL"}},
)
async def get_alias_suggestion(
    url: Optional[str] = Query(None, description="URL to derive an alias from"),
):
    if not url:
        raise HTTPException(status_code=400, detail="URL required")
    return schemas.SuggestionResponse(suggestion=suggest_alias(url))


@router.get(
    "/qr/{short_code}",
    response_model=schemas.ShortLinkResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
        500: {"model": schemas.ErrorResponse, "description": "Store or QR code failure"},
    },
)
async def get_qr_code(
    short_code: str = Path(..., description="The short code of the URL"),
    resolver: RedirectResolver = Depends(get_resolver),
    qr_renderer: QRCodeRenderer = Depends(get_qr_renderer),
    base_url: str = Depends(get_base_url),
):
    """Render the QR code of an existing short link again."""
    try:
        mapping = await resolver.get_mapping(short_code)
    except URLNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))

    short_url = build_short_url(base_url, mapping.short_code)
    try:
        qr_code = await qr_renderer.render_data_uri_async(short_url)
    except RenderingError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return schemas.ShortLinkResponse(
        short_url=short_url,
        short_code=mapping.short_code,
        qr_code=qr_code,
    )
