"""URL redirection endpoint and the not-found page."""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response

from app.api.dependencies import get_resolver
from app.core.config import settings
from app.services.exceptions import StoreUnavailableError, URLNotFoundError
from app.services.resolver import RedirectResolver

router = APIRouter(tags=["redirect"])

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Link not found</title></head>
<body>
<h1>Link not found</h1>
<p>This short link does not exist. <a href="/">Create a new one</a>.</p>
</body>
</html>
"""


def get_index_file() -> Optional[Path]:
    """Return the client's index.html when a static directory is configured."""
    if not settings.STATIC_DIR:
        return None
    index = Path(settings.STATIC_DIR) / "index.html"
    return index if index.is_file() else None


def not_found_response() -> Response:
    index = get_index_file()
    if index is not None:
        return FileResponse(index, status_code=404, media_type="text/html")
    return HTMLResponse(NOT_FOUND_PAGE, status_code=404)


@router.get("/{short_code}", response_class=RedirectResponse, responses={404: {"content": {"text/html": {}}}})
async def redirect_to_original_url(
    short_code: str,
    resolver: RedirectResolver = Depends(get_resolver),
):
    """Redirect to the original URL, or serve the not-found page."""
    try:
        original_url = await resolver.resolve(short_code)
    except URLNotFoundError:
        return not_found_response()
    except StoreUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return RedirectResponse(url=original_url, status_code=settings.REDIRECT_STATUS_CODE)
