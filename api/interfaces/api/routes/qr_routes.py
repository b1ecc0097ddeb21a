# api/interfaces/api/routes/qr_routes.py
from fastapi import APIRouter, Depends

from api.application.dtos.documento_dto import (
    QrParseRequestDTO,
    QrParseResponseDTO,
    QrPayloadRequestDTO,
    QrPayloadResponseDTO,
)
from api.application.services.documento_service import DocumentoService
from api.application.services.qr_payload import parse_member_qr_payload
from api.interfaces.api.dependencies import get_documento_service

router = APIRouter()


@router.post("/membros/qr-payload", response_model=QrPayloadResponseDTO)
def gerar_qr_payload(
    body: QrPayloadRequestDTO,
    service: DocumentoService = Depends(get_documento_service),  # noqa: B008
) -> QrPayloadResponseDTO:
    return QrPayloadResponseDTO(payload=service.qr_payload(body.membro.to_domain()))


@router.post("/membros/qr-payload/parse", response_model=QrParseResponseDTO)
def ler_qr_payload(body: QrParseRequestDTO) -> QrParseResponseDTO:
    return QrParseResponseDTO(data=parse_member_qr_payload(body.raw or ""))
