# api/infrastructure/pdf_generator.py
from __future__ import annotations


def gerar_pdf_fichas(documento_html: str, *, base_url: str | None = None) -> bytes:
    """Render an assembled ficha document to PDF on the server.

    Scripts are ignored by WeasyPrint, so the export plan never runs; the
    print-media CSS alone paginates one `.page` per A4 sheet.

    Raises RuntimeError if weasyprint is not installed.
    """
    try:
        from weasyprint import HTML  # type: ignore[import-untyped,import-not-found]
    except ImportError as err:
        msg = "PDF export requires weasyprint. Install with: pip install carteira-membro[pdf]"
        raise RuntimeError(msg) from err

    return HTML(string=documento_html, base_url=base_url).write_pdf(presentational_hints=True)  # type: ignore[no-any-return]
