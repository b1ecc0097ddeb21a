"""Formatacao e escape de valores para os documentos impressos. Funcoes puras.

Toda funcao aqui e total (nunca levanta) e idempotente sobre a propria saida:
format_x(format_x(v)) == format_x(v). Carteira e ficha usam SOMENTE este
modulo para transformar dado em texto HTML, para que exista um unico ponto
de escape.
"""
from __future__ import annotations

import html
import re

from api.domain.membro.enums import Cargo

NBSP = "&nbsp;"

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_ISO_TIMESTAMP = re.compile(r"^(\d{4})-(\d{2})-(\d{2})[T ]\d{2}:\d{2}")


def escape_html(value: str) -> str:
    return html.escape(value or "", quote=True)


def normalize_digits(value: str) -> str:
    return "".join(c for c in (value or "") if c.isdigit())


def format_cpf(value: str) -> str:
    """Agrupa progressivamente em ###.###.###-## (parcial se < 11 digitos)."""
    d = normalize_digits(value)[:11]
    if len(d) <= 3:
        return d
    if len(d) <= 6:
        return f"{d[:3]}.{d[3:]}"
    if len(d) <= 9:
        return f"{d[:3]}.{d[3:6]}.{d[6:]}"
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def format_phone(value: str) -> str:
    """(DD) DDDD-DDDD ou (DD) DDDDD-DDDD. Remove DDI 55 quando presente."""
    d = normalize_digits(value)
    if d.startswith("55") and len(d) >= 12:
        d = d[2:]
    if len(d) <= 4:
        return d
    if len(d) <= 8:
        return f"{d[:4]}-{d[4:]}"
    if len(d) == 9:
        return f"{d[:5]}-{d[5:]}"
    if len(d) == 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return f"({d[:2]}) {d[2:7]}-{d[7:11]}"


def format_date(value: str) -> str:
    """ISO (data ou timestamp) -> DD/MM/YYYY. Texto livre passa inalterado."""
    texto = (value or "").strip()
    match = _ISO_DATE.match(texto) or _ISO_TIMESTAMP.match(texto)
    if match is None:
        return texto
    ano, mes, dia = match.groups()
    return f"{dia}/{mes}/{ano}"


def format_date_short(value: str) -> str:
    """Como format_date, para campos que so guardam a data (YYYY-MM-DD)."""
    texto = (value or "").strip()
    match = _ISO_DATE.match(texto)
    if match is None:
        return texto
    ano, mes, dia = match.groups()
    return f"{dia}/{mes}/{ano}"


def format_cargo(value: str) -> str:
    return Cargo.resolver(value).label


def resolve_carteira_title(cargo: str) -> str:
    return f"Carteira de {format_cargo(cargo)}"


# ---------------------------------------------------------------------------
# display_*: formatam, escapam e trocam vazio por &nbsp; para a celula do
# grid/tabela nao colapsar na impressao.
# ---------------------------------------------------------------------------


def display_value(value: str) -> str:
    cleaned = (value or "").strip()
    return escape_html(cleaned) if cleaned else NBSP


def display_date_value(value: str) -> str:
    return display_value(format_date(value))


def display_cpf_value(value: str) -> str:
    return display_value(format_cpf(value))


def display_phone_value(value: str) -> str:
    return display_value(format_phone(value))


def display_multiline(value: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        return NBSP
    normalized = cleaned.replace("\r\n", "\n")
    return escape_html(normalized).replace("\n", "<br />")


def checkbox(marcado: bool, rotulo: str) -> str:
    return f'<span><span class="check">{"X" if marcado else ""}</span>{escape_html(rotulo)}</span>'
