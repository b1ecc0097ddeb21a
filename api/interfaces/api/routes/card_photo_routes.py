# api/interfaces/api/routes/card_photo_routes.py
import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from api.infrastructure.config import get_settings
from api.infrastructure.photo_resolver import PhotoProxyError, fetch_proxied_photo, validate_proxy_target
from api.interfaces.api.dependencies import get_http_client

router = APIRouter()


@router.get("/card-photo")
def card_photo(
    url: str | None = Query(None),
    http_client: httpx.Client = Depends(get_http_client),  # noqa: B008
) -> Response:
    settings = get_settings()
    try:
        target = validate_proxy_target(url, settings.card_photo_allowed_hosts)
        image = fetch_proxied_photo(http_client, target, timeout=settings.card_photo_timeout)
    except PhotoProxyError as err:
        return PlainTextResponse(err.detail, status_code=err.status_code)

    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={
            "Cache-Control": "public, max-age=3600",
            "Access-Control-Allow-Origin": "*",
        },
    )
