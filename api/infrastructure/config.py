# api/infrastructure/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from api.domain.configuracao.entities import DEFAULT_BRAND_NAME, DEFAULT_BRAND_SUB, DEFAULT_LOGO_SRC

load_dotenv()

DEFAULT_ALLOWED_HOSTS = ("firebasestorage.googleapis.com", "storage.googleapis.com")


def _csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    rate_limit_per_minute: int
    card_photo_allowed_hosts: tuple[str, ...]
    card_photo_timeout: float
    card_photo_proxy_url: str
    public_base_url: str
    brand_name: str
    brand_sub: str
    logo_src: str
    census_title: str
    qr_width: int
    qr_error_correction: str
    cors_origins: tuple[str, ...]
    debug: bool


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    hosts = _csv(os.environ.get("CARD_PHOTO_ALLOWED_HOSTS", "")) or DEFAULT_ALLOWED_HOSTS
    return Settings(
        rate_limit_per_minute=int(os.environ.get("API_RATE_LIMIT_PER_MINUTE", "60")),
        card_photo_allowed_hosts=hosts,
        card_photo_timeout=float(os.environ.get("CARD_PHOTO_TIMEOUT", "10")),
        card_photo_proxy_url=os.environ.get("CARD_PHOTO_PROXY_URL", "/api/card-photo"),
        public_base_url=os.environ.get("PUBLIC_BASE_URL", "").rstrip("/"),
        brand_name=os.environ.get("BRAND_NAME", DEFAULT_BRAND_NAME),
        brand_sub=os.environ.get("BRAND_SUB", DEFAULT_BRAND_SUB),
        logo_src=os.environ.get("LOGO_SRC", DEFAULT_LOGO_SRC),
        census_title=os.environ.get("CENSUS_TITLE", ""),
        qr_width=int(os.environ.get("QR_WIDTH", "240")),
        qr_error_correction=os.environ.get("QR_ERROR_CORRECTION", "L").upper(),
        cors_origins=tuple(o.strip() for o in os.environ.get("CORS_ORIGINS", "").split(",") if o.strip()),
        debug=os.environ.get("API_DEBUG", "false").lower() == "true",
    )
