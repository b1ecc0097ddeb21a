# api/interfaces/api/routes/carteira_routes.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from api.application.dtos.documento_dto import CardSettingsDTO, CarteiraRequestDTO
from api.application.services.documento_service import DocumentoService
from api.infrastructure.config import get_settings
from api.interfaces.api.dependencies import get_documento_service

router = APIRouter()


@router.post("/membros/carteira", response_class=HTMLResponse)
def gerar_carteira(
    body: CarteiraRequestDTO,
    service: DocumentoService = Depends(get_documento_service),  # noqa: B008
) -> HTMLResponse:
    config = get_settings()
    card_settings = (body.settings or CardSettingsDTO()).to_domain(
        brand_name=config.brand_name,
        brand_sub=config.brand_sub,
        logo_src=config.logo_src,
    )
    options = body.options.to_domain() if body.options else None
    html = service.gerar_carteira(body.membro.to_domain(), card_settings, options)
    return HTMLResponse(content=html)
