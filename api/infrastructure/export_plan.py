# api/infrastructure/export_plan.py
#
# Export state machine for the generated documents.
#
# Design decisions:
#   - The print/PDF flow runs inside the generated document, in the browser.
#     Instead of hand-writing one script per (document, mode, toolbar) combo,
#     the Python side builds an ExportPlan: the ordered preparation steps, the
#     terminal action and the timing constants. The plan is serialized as JSON
#     into the document and executed by templates/export_runtime.js.
#   - The plan is data only. Transitions happen in the runtime, which reports
#     the current ExportState on body[data-export-state]:
#       idle -> waiting -> ready -> printing | downloading -> closed
#     With the toolbar present the run is never automatic; each button click
#     starts a new idle -> ... cycle and returns to idle on cleanup.
#
# Invariants:
#   - The terminal action is always PRINT or EXPORT_PDF; its fallback is PRINT.
#   - LOOKUP_IP, when present, comes after WAIT_IMAGES and before the action,
#     and is bounded by ip_lookup_timeout_ms (sentinel value on timeout).
#   - Image/font waits have no timeout (see DESIGN.md, open questions).
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum


class PrintMode(StrEnum):
    PRINT = "print"
    DOWNLOAD = "download"


class ExportStep(StrEnum):
    WAIT_LAYOUT = "waitForLayout"
    WAIT_IMAGES = "waitForImages"
    WAIT_FONTS = "waitForFonts"
    WAIT_STABLE_RENDER = "waitForStableRender"
    LOOKUP_IP = "lookupIp"
    PRINT = "print"
    EXPORT_PDF = "exportPdf"


class ExportState(StrEnum):
    IDLE = "idle"
    WAITING = "waiting"
    READY = "ready"
    PRINTING = "printing"
    DOWNLOADING = "downloading"
    CLOSED = "closed"


IP_LOOKUP_URL = "https://api.ipify.org?format=json"
IP_LOOKUP_TIMEOUT_MS = 1500
IP_FALLBACK = "N/D"

# Paginas A4 em mm usadas pelo jsPDF.
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297


@dataclass(frozen=True)
class DocumentOptions:
    """Opcoes de saida. Campos None recebem o default do tipo de documento."""

    mode: PrintMode = PrintMode.PRINT
    filename: str | None = None
    page_selector: str | None = None
    toolbar: bool = False
    title: str | None = None
    force_desktop: bool = False
    show_print_button: bool = True


@dataclass(frozen=True)
class RenderScale:
    """Escala de rasterizacao aplicada pelo runtime: clamp(dpr * factor, minimo, maximo)."""

    minimum: float = 3
    maximum: float = 5
    factor: float = 2


@dataclass(frozen=True)
class ExportPlan:
    mode: PrintMode
    automatic: bool
    prepare: tuple[ExportStep, ...]
    page_selector: str
    filename: str
    close_after: bool
    ip_lookup: bool = False
    desktop_scale: bool = False
    render_scale: RenderScale = field(default_factory=RenderScale)
    ip_lookup_url: str = IP_LOOKUP_URL
    ip_lookup_timeout_ms: int = IP_LOOKUP_TIMEOUT_MS
    ip_fallback: str = IP_FALLBACK
    close_after_print_ms: int = 50
    close_after_download_ms: int = 100

    @property
    def action(self) -> ExportStep:
        return ExportStep.EXPORT_PDF if self.mode is PrintMode.DOWNLOAD else ExportStep.PRINT

    @property
    def fallback(self) -> ExportStep:
        return ExportStep.PRINT

    @property
    def needs_pdf_libraries(self) -> bool:
        # Toolbar oferece "Baixar PDF" mesmo em modo print.
        return self.mode is PrintMode.DOWNLOAD or not self.automatic

    def to_json(self) -> str:
        data = {
            "mode": self.mode.value,
            "automatic": self.automatic,
            "prepare": [s.value for s in self.prepare],
            "action": self.action.value,
            "fallback": self.fallback.value,
            "pageSelector": self.page_selector,
            "filename": self.filename,
            "closeAfter": self.close_after,
            "ipLookup": self.ip_lookup,
            "ipLookupUrl": self.ip_lookup_url,
            "ipLookupTimeoutMs": self.ip_lookup_timeout_ms,
            "ipFallback": self.ip_fallback,
            "desktopScale": self.desktop_scale,
            "renderScale": {
                "min": self.render_scale.minimum,
                "max": self.render_scale.maximum,
                "factor": self.render_scale.factor,
            },
            "page": {"width": A4_WIDTH_MM, "height": A4_HEIGHT_MM},
            "closeAfterPrintMs": self.close_after_print_ms,
            "closeAfterDownloadMs": self.close_after_download_ms,
        }
        # "<" escapado para o JSON nao fechar a tag <script> que o contem.
        return json.dumps(data, ensure_ascii=False).replace("<", "\\u003c")


def plan_export(
    options: DocumentOptions,
    *,
    page_selector: str,
    filename: str,
    ip_lookup: bool,
    stable_render: bool,
    desktop_scale: bool = False,
) -> ExportPlan:
    """Monta o plano para um documento.

    Args:
        options:        opcoes ja resolvidas pelo assembler.
        page_selector:  seletor CSS de cada pagina a rasterizar.
        filename:       nome do PDF sem extensao.
        ip_lookup:      consulta (limitada) de IP para o metadado do rodape.
        stable_render:  espera extra de dois frames antes da acao (ficha).
        desktop_scale:  escala a folha para caber na viewport (carteira com toolbar).
    """
    automatic = not options.toolbar

    prepare: list[ExportStep] = []
    if automatic:
        prepare += [ExportStep.WAIT_IMAGES, ExportStep.WAIT_FONTS]
        if ip_lookup:
            prepare.append(ExportStep.LOOKUP_IP)
        prepare.append(ExportStep.WAIT_LAYOUT)
    else:
        prepare += [ExportStep.WAIT_LAYOUT, ExportStep.WAIT_IMAGES, ExportStep.WAIT_FONTS]
    if stable_render:
        prepare.append(ExportStep.WAIT_STABLE_RENDER)

    return ExportPlan(
        mode=options.mode,
        automatic=automatic,
        prepare=tuple(prepare),
        page_selector=page_selector,
        filename=filename,
        close_after=automatic,
        ip_lookup=ip_lookup and automatic,
        desktop_scale=desktop_scale and not automatic,
    )
