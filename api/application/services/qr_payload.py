"""Payload de identidade embutido no QR da carteira. Funcoes puras.

Formato (v1):
    {"v": 1, "data": {"id": ..., "nome": ..., "cargo": ..., ...}}

Produtor estrito, consumidor permissivo: build_member_qr_payload nunca emite
chave com valor vazio; parse_member_qr_payload aceita chaves a mais ou a menos
porque o QR impresso pode ser lido por versoes antigas ou novas do leitor.
"""
from __future__ import annotations

import json
from datetime import date
from typing import Any

from api.domain.membro.entities import Membro

from .formatters import format_cpf, format_date, format_date_short

QR_PAYLOAD_VERSION = 1


def build_member_qr_payload(membro: Membro, *, hoje: date | None = None) -> str:
    """Serializa o payload do QR. Mesma entrada + mesmo `hoje` = mesma saida."""
    emitida_em = (hoje or date.today()).strftime("%d/%m/%Y")
    data = {
        "id": membro.id_label,
        "nome": membro.name.strip(),
        "cargo": membro.cargo.strip(),
        "expedidaEm": emitida_em,
        "membroDesde": format_date(membro.created_at),
        "filiacaoPai": membro.pai.strip(),
        "filiacaoMae": membro.mae.strip(),
        "nascimento": format_date_short(membro.data_nascimento),
        "estadoCivil": membro.estado_civil.strip(),
        "cpf": format_cpf(membro.cpf),
        "rg": membro.rg.strip(),
    }
    payload = {
        "v": QR_PAYLOAD_VERSION,
        "data": {k: v for k, v in data.items() if v},
    }
    # ensure_ascii=False mantem o QR menor para nomes acentuados
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def parse_member_qr_payload(raw: str) -> dict[str, str] | None:
    """Le um payload escaneado. Retorna None se nao tiver o formato {data: {...}}.

    Nunca levanta: entrada invalida de qualquer tipo vira None.
    """
    if not raw or not isinstance(raw, str):
        return None
    try:
        parsed: Any = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(parsed, dict):
        return None
    data = parsed.get("data")
    if not isinstance(data, dict):
        return None
    return {str(k): v if isinstance(v, str) else str(v) for k, v in data.items() if v is not None}
