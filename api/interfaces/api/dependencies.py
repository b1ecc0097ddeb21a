# api/interfaces/api/dependencies.py
from collections.abc import Iterator

import httpx
from fastapi import Depends

from api.application.services.documento_service import DocumentoService
from api.infrastructure.config import get_settings


def get_http_client() -> Iterator[httpx.Client]:
    with httpx.Client() as client:
        yield client


def get_documento_service(
    http_client: httpx.Client = Depends(get_http_client),  # noqa: B008
) -> DocumentoService:
    settings = get_settings()
    return DocumentoService(
        http_client=http_client,
        public_base_url=settings.public_base_url,
        photo_proxy_url=settings.card_photo_proxy_url,
        photo_timeout=settings.card_photo_timeout,
        photo_allowed_hosts=settings.card_photo_allowed_hosts,
        qr_width=settings.qr_width,
        qr_error_correction=settings.qr_error_correction,
        census_title=settings.census_title,
    )
