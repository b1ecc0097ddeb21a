# lote/main.py
#
# Batch generator: turns a JSON export of member records into one combined,
# ready-to-open HTML document (fichas or carteiras).
#
# Design decisions:
#   - run_batch is the single entry point. It accepts a BatchConfig and an
#     optional DocumentoService so tests can inject a service whose HTTP
#     client is backed by httpx.MockTransport.
#   - Carteiras need IO per member (photo download + QR rendering), so sheets
#     are built in a ThreadPoolExecutor. pool.map keeps the input order, which
#     is the print order.
#   - Fichas are pure markup; they are built sequentially.
#   - Records are parsed with the same MembroDTO as the HTTP API; an invalid
#     record aborts the batch (pydantic.ValidationError) before anything is
#     written.
#
# Invariant: the output file is only written after every page was generated.
from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

import httpx

from api.application.dtos.documento_dto import CardSettingsDTO
from api.application.dtos.membro_dto import MembroDTO
from api.application.services.documento_service import DocumentoService
from api.domain.configuracao.entities import CardSettings
from api.domain.membro.entities import Membro
from api.infrastructure.config import get_settings
from api.infrastructure.document_assembler import PrintMeta, build_carteira_document
from api.infrastructure.export_plan import DocumentOptions
from api.infrastructure.log import log
from lote.config import BatchConfig, load_config


def _log(message: str) -> None:
    log(message, component="lote")


def load_membros(path: Path) -> list[Membro]:
    """Le o export do censo: lista de registros ou {"membros": [...]}."""
    raw: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("membros")
    if not isinstance(raw, list):
        raise ValueError(f"{path}: esperado uma lista de membros")
    return [MembroDTO.model_validate(item).to_domain() for item in raw]


def load_card_settings(path: Path | None) -> CardSettings:
    config = get_settings()
    dto = CardSettingsDTO()
    if path is not None:
        dto = CardSettingsDTO.model_validate(json.loads(path.read_text(encoding="utf-8")))
    return dto.to_domain(brand_name=config.brand_name, brand_sub=config.brand_sub, logo_src=config.logo_src)


def _default_service(http_client: httpx.Client) -> DocumentoService:
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


def run_batch(config: BatchConfig, *, service: DocumentoService | None = None) -> Path:
    """Generate the combined document and write it to config.output_path.

    Returns:
        Path of the written HTML file.

    Raises:
        ValueError: if the input file is not a list of member records
            (pydantic.ValidationError for an invalid record).
    """
    _log(f"Reading {config.input_path}...")
    membros = load_membros(config.input_path)
    _log(f"  {len(membros):,} membros")

    card_settings = load_card_settings(config.settings_path)
    options = DocumentOptions(mode=config.modo)

    with httpx.Client() as http_client:
        svc = service or _default_service(http_client)

        if config.tipo == "carteira":
            _log(f"Building carteiras with {config.max_workers} workers...")
            with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
                sheets = list(pool.map(lambda m: svc.montar_folha_carteira(m, card_settings), membros))
            document = build_carteira_document(sheets, options)
        else:
            _log("Building fichas...")
            document = svc.gerar_fichas(
                membros,
                settings=card_settings,
                meta=PrintMeta(login_label=config.login),
                options=options,
            )

    output_path = config.output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document, encoding="utf-8")
    _log(f"Wrote {output_path} ({len(document) // 1024:,} KB)")
    return output_path


if __name__ == "__main__":
    cfg = load_config()
    run_batch(cfg)
