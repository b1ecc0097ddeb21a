# api/application/services/documento_service.py
from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime

import httpx

from api.domain.configuracao.entities import CardSettings
from api.domain.membro.entities import Membro
from api.infrastructure.config import DEFAULT_ALLOWED_HOSTS
from api.infrastructure.document_assembler import PrintMeta, build_carteira_document, build_print_document
from api.infrastructure.export_plan import DocumentOptions
from api.infrastructure.log import log
from api.infrastructure.pdf_generator import gerar_pdf_fichas
from api.infrastructure.photo_resolver import resolve_photo_for_card
from api.infrastructure.qr_renderer import render_qr_data_url

from .carteira_markup import build_carteira_markup
from .ficha_markup import build_ficha_markup
from .qr_payload import build_member_qr_payload

# Mesmo formato de toLocaleString("pt-BR") usado no rodape das fichas.
GENERATED_AT_FORMAT = "%d/%m/%Y, %H:%M:%S"


class DocumentoService:
    """Imperative Shell: baixa foto e gera QR (IO), chama os builders puros.

    Falhas de colaboradores nunca derrubam o documento: foto vira a referencia
    crua (ou "sem foto") e QR com erro deixa a area vazia.
    """

    def __init__(
        self,
        *,
        http_client: httpx.Client | None = None,
        public_base_url: str = "",
        photo_proxy_url: str = "/api/card-photo",
        photo_timeout: float = 10.0,
        photo_allowed_hosts: tuple[str, ...] = DEFAULT_ALLOWED_HOSTS,
        qr_width: int = 240,
        qr_error_correction: str = "L",
        census_title: str = "",
        agora: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._http_client = http_client
        self._public_base_url = public_base_url
        self._photo_proxy_url = photo_proxy_url
        self._photo_timeout = photo_timeout
        self._photo_allowed_hosts = photo_allowed_hosts
        self._qr_width = qr_width
        self._qr_error_correction = qr_error_correction
        self._census_title = census_title
        self._agora = agora

    # -- Carteira ------------------------------------------------------------

    def montar_folha_carteira(self, membro: Membro, settings: CardSettings) -> str:
        """Uma `.card-page` com foto embutida e QR renderizado."""
        hoje = self._agora().date()

        # IO: imperative shell
        foto = resolve_photo_for_card(
            membro.photo,
            client=self._http_client,
            base_url=self._public_base_url,
            proxy_url=self._photo_proxy_url,
            timeout=self._photo_timeout,
            allowed_hosts=self._photo_allowed_hosts,
        )
        qr_data_url = self._render_qr(membro, hoje)

        # Pure core
        return build_carteira_markup(membro.com_foto(foto), qr_data_url, settings, hoje=hoje)

    def gerar_carteira(
        self,
        membro: Membro,
        settings: CardSettings,
        options: DocumentOptions | None = None,
    ) -> str:
        return build_carteira_document(self.montar_folha_carteira(membro, settings), options)

    def gerar_carteiras(
        self,
        membros: Iterable[Membro],
        settings: CardSettings,
        options: DocumentOptions | None = None,
    ) -> str:
        return build_carteira_document([self.montar_folha_carteira(m, settings) for m in membros], options)

    def _render_qr(self, membro: Membro, hoje: date) -> str:
        payload = build_member_qr_payload(membro, hoje=hoje)
        try:
            return render_qr_data_url(
                payload,
                width=self._qr_width,
                error_correction=self._qr_error_correction,
            )
        except ValueError as err:
            log(f"qr: falha ao gerar QR do membro {membro.id_label or '?'}: {err}")
            return ""

    # -- Ficha ---------------------------------------------------------------

    def gerar_fichas(
        self,
        membros: Iterable[Membro],
        *,
        settings: CardSettings | None = None,
        title: str | None = None,
        meta: PrintMeta | None = None,
        options: DocumentOptions | None = None,
    ) -> str:
        subtitle = title or self._census_title or None
        pages = [build_ficha_markup(m, subtitle, settings=settings) for m in membros]
        return build_print_document(pages, self._completar_meta(meta), options)

    def gerar_fichas_pdf(
        self,
        membros: Iterable[Membro],
        *,
        settings: CardSettings | None = None,
        title: str | None = None,
        meta: PrintMeta | None = None,
    ) -> bytes:
        """PDF renderizado no servidor. RuntimeError se weasyprint nao estiver instalado."""
        documento = self.gerar_fichas(membros, settings=settings, title=title, meta=meta)
        return gerar_pdf_fichas(documento, base_url=self._public_base_url or None)

    def _completar_meta(self, meta: PrintMeta | None) -> PrintMeta:
        meta = meta or PrintMeta()
        if meta.generated_at:
            return meta
        return PrintMeta(login_label=meta.login_label, generated_at=self._agora().strftime(GENERATED_AT_FORMAT))

    # -- QR ------------------------------------------------------------------

    def qr_payload(self, membro: Membro) -> str:
        return build_member_qr_payload(membro, hoje=self._agora().date())
