# api/interfaces/api/routes/ficha_routes.py
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, Response

from api.application.dtos.documento_dto import CardSettingsDTO, FichasRequestDTO
from api.application.services.documento_service import DocumentoService
from api.infrastructure.config import get_settings
from api.interfaces.api.dependencies import get_documento_service

router = APIRouter()


@router.post("/membros/fichas", response_class=HTMLResponse)
def gerar_fichas(
    body: FichasRequestDTO,
    formato: Literal["html", "pdf"] = Query("html"),
    service: DocumentoService = Depends(get_documento_service),  # noqa: B008
) -> Response:
    config = get_settings()
    card_settings = CardSettingsDTO().to_domain(
        brand_name=config.brand_name,
        brand_sub=config.brand_sub,
        logo_src=config.logo_src,
    )
    membros = [m.to_domain() for m in body.membros]
    meta = body.meta.to_domain() if body.meta else None

    if formato == "html":
        options = body.options.to_domain() if body.options else None
        html = service.gerar_fichas(membros, settings=card_settings, title=body.title, meta=meta, options=options)
        return HTMLResponse(content=html)

    # pdf
    try:
        pdf_bytes = service.gerar_fichas_pdf(membros, settings=card_settings, title=body.title, meta=meta)
    except RuntimeError as err:
        raise HTTPException(status_code=501, detail=str(err)) from err
    filename = (body.options.filename if body.options and body.options.filename else "fichas-cadastro").strip()
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}.pdf"},
    )
