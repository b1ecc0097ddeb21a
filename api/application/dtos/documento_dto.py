# api/application/dtos/documento_dto.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from api.domain.configuracao.entities import CardSettings
from api.infrastructure.document_assembler import PrintMeta
from api.infrastructure.export_plan import DocumentOptions, PrintMode

from .membro_dto import MembroDTO


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardSettingsDTO(_CamelModel):
    location_address1: str | None = None
    location_address2: str | None = None
    location_cep: str | None = None
    president_signature_name: str | None = None
    president_signature_role: str | None = None

    def to_domain(self, brand_name: str, brand_sub: str, logo_src: str) -> CardSettings:
        return CardSettings(
            location_address1=self.location_address1 or "",
            location_address2=self.location_address2 or "",
            location_cep=self.location_cep or "",
            president_signature_name=self.president_signature_name or "",
            president_signature_role=self.president_signature_role or "",
            brand_name=brand_name,
            brand_sub=brand_sub,
            logo_src=logo_src,
        )


class DocumentOptionsDTO(_CamelModel):
    mode: Literal["print", "download"] = "print"
    filename: str | None = None
    page_selector: str | None = None
    toolbar: bool = False
    title: str | None = None
    force_desktop: bool = False
    show_print_button: bool = True

    def to_domain(self) -> DocumentOptions:
        return DocumentOptions(
            mode=PrintMode(self.mode),
            filename=self.filename,
            page_selector=self.page_selector,
            toolbar=self.toolbar,
            title=self.title,
            force_desktop=self.force_desktop,
            show_print_button=self.show_print_button,
        )


class PrintMetaDTO(_CamelModel):
    login_label: str | None = None
    generated_at: str | None = None

    def to_domain(self) -> PrintMeta:
        return PrintMeta(login_label=self.login_label or "", generated_at=self.generated_at or "")


class CarteiraRequestDTO(BaseModel):
    membro: MembroDTO
    settings: CardSettingsDTO | None = None
    options: DocumentOptionsDTO | None = None


class FichasRequestDTO(BaseModel):
    membros: list[MembroDTO] = Field(min_length=1)
    title: str | None = None
    meta: PrintMetaDTO | None = None
    options: DocumentOptionsDTO | None = None


class QrPayloadRequestDTO(BaseModel):
    membro: MembroDTO


class QrPayloadResponseDTO(BaseModel):
    payload: str


class QrParseRequestDTO(BaseModel):
    raw: str | None = None


class QrParseResponseDTO(BaseModel):
    data: dict[str, str] | None
