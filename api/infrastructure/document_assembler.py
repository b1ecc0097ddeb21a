# api/infrastructure/document_assembler.py
#
# Wraps card sheets / ficha pages into a standalone HTML document.
#
# Design decisions:
#   - Fragments come from the pure builders in api/application/services; this
#     module only adds the document shell: embedded CSS, toolbar, export plan
#     JSON and the runtime script.
#   - CSS and runtime live as files under templates/ and are read once per
#     process (lru_cache). Nothing else in the document depends on the server.
#   - CDN includes (html2canvas-pro, jsPDF) are emitted only when the plan can
#     reach EXPORT_PDF: download mode or any toolbar document.
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path

from api.application.services.formatters import escape_html

from .export_plan import DocumentOptions, ExportPlan, plan_export

_TEMPLATES_DIR = Path(__file__).parent / "templates"

HTML2CANVAS_SRC = "https://cdn.jsdelivr.net/npm/html2canvas-pro@1.6.6/dist/html2canvas-pro.min.js"
JSPDF_SRC = "https://cdnjs.cloudflare.com/ajax/libs/jspdf/2.5.1/jspdf.umd.min.js"

CARTEIRA_DEFAULTS = DocumentOptions(
    filename="carteira-membro",
    page_selector=".card-page",
    title="Carteira de Membro",
)
FICHA_DEFAULTS = DocumentOptions(
    filename="fichas-cadastro",
    page_selector=".page",
    title="Ficha do membro",
)


@dataclass(frozen=True)
class PrintMeta:
    """Metadados de rodape gravados na ficha (quem gerou e quando)."""

    login_label: str = ""
    generated_at: str = ""


@lru_cache(maxsize=8)
def _template(name: str) -> str:
    return (_TEMPLATES_DIR / name).read_text(encoding="utf-8")


def _join_fragments(fragments: str | Iterable[str]) -> str:
    if isinstance(fragments, str):
        return fragments
    return "\n".join(fragments)


def _resolve_options(options: DocumentOptions | None, defaults: DocumentOptions) -> DocumentOptions:
    options = options or DocumentOptions()
    return replace(
        options,
        filename=(options.filename or "").strip() or defaults.filename,
        page_selector=(options.page_selector or "").strip() or defaults.page_selector,
        title=(options.title or "").strip() or defaults.title,
    )


def _toolbar(options: DocumentOptions) -> str:
    if not options.toolbar:
        return ""
    print_button = (
        '<button type="button" id="toolbar-print">Imprimir</button>' if options.show_print_button else ""
    )
    return f"""
    <div class="toolbar">
      <span>{escape_html(options.title or "")}</span>
      <div class="toolbar-actions">
        {print_button}
        <button type="button" id="toolbar-download">Baixar PDF</button>
        <button type="button" id="toolbar-close">Fechar</button>
      </div>
    </div>"""


def _body_class(options: DocumentOptions) -> str:
    classes = []
    if options.toolbar:
        classes.append("has-toolbar")
    if options.force_desktop:
        classes.append("force-desktop")
    return f' class="{" ".join(classes)}"' if classes else ""


def _scripts(plan: ExportPlan) -> str:
    includes = ""
    if plan.needs_pdf_libraries:
        includes = (
            f'\n    <script src="{HTML2CANVAS_SRC}"></script>'
            f'\n    <script src="{JSPDF_SRC}"></script>'
        )
    return (
        f"{includes}"
        f'\n    <script type="application/json" id="export-plan">{plan.to_json()}</script>'
        f"\n    <script>\n{_template('export_runtime.js')}\n    </script>"
    )


def _document(
    *,
    title: str,
    css: str,
    head_extra: str,
    body_class: str,
    toolbar: str,
    content: str,
    plan: ExportPlan,
) -> str:
    return f"""<!doctype html>
<html lang="pt-BR">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape_html(title)}</title>{head_extra}
    <style>
{css}
    </style>
  </head>
  <body{body_class}>{toolbar}
    <main class="document-pages">
    {content}
    </main>{_scripts(plan)}
  </body>
</html>
"""


def build_carteira_document(
    sheets: str | Iterable[str],
    options: DocumentOptions | None = None,
) -> str:
    """Documento das carteiras: uma `.card-page` por membro.

    Com toolbar a folha e escalada para caber na viewport ("force desktop").
    """
    opts = _resolve_options(options, CARTEIRA_DEFAULTS)
    plan = plan_export(
        opts,
        page_selector=opts.page_selector or "",
        filename=opts.filename or "",
        ip_lookup=False,
        stable_render=False,
        desktop_scale=True,
    )
    return _document(
        title=opts.title or "",
        css=_template("carteira.css"),
        head_extra="",
        body_class=_body_class(opts),
        toolbar=_toolbar(opts),
        content=_join_fragments(sheets),
        plan=plan,
    )


def build_print_document(
    pages: str | Iterable[str],
    meta: PrintMeta,
    options: DocumentOptions | None = None,
) -> str:
    """Documento das fichas: uma `.page` A4 por membro, com metadados de emissao.

    O IP e preenchido no cliente (consulta limitada a 1,5s; "N/D" se falhar).
    """
    opts = _resolve_options(options, FICHA_DEFAULTS)
    plan = plan_export(
        opts,
        page_selector=opts.page_selector or "",
        filename=opts.filename or "",
        ip_lookup=True,
        stable_render=True,
    )
    login = escape_html(meta.login_label)
    generated_at = escape_html(meta.generated_at)
    head_extra = f"""
    <meta name="pdf-login" content="{login}" />
    <meta name="pdf-generated-at" content="{generated_at}" />
    <meta name="pdf-ip" content="" />
    <meta name="pdf-generated" content="true" />"""
    hidden_meta = (
        f'<div id="pdf-meta" data-login="{login}" data-generated-at="{generated_at}" '
        f'data-ip="" data-pdf-generated="true" style="display:none"></div>'
    )
    return _document(
        title=opts.title or "",
        css=_template("ficha.css"),
        head_extra=head_extra,
        body_class=_body_class(opts),
        toolbar=f"{_toolbar(opts)}\n    {hidden_meta}",
        content=_join_fragments(pages),
        plan=plan,
    )
