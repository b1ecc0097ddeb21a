# lote/config.py
#
# Batch generator configuration loaded from environment variables.
#
# Design decisions:
#   - Frozen dataclass (not pydantic Settings): the batch is a standalone
#     offline process; pydantic stays in the DTO layer for record parsing.
#   - LOTE_INPUT_PATH has no default: running without an input is always a
#     mistake, so load_config refuses instead of producing an empty document.
#   - Output defaults to lote/output relative to this file so a fresh checkout
#     works without extra setup.
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from api.infrastructure.export_plan import PrintMode

load_dotenv()

_LOTE_DIR = Path(__file__).parent

TIPOS = ("ficha", "carteira")


@dataclass(frozen=True)
class BatchConfig:
    """Immutable batch configuration.

    Invariants:
      - input_path points to a JSON list of member records (or {"membros": [...]}).
      - tipo is one of TIPOS.
      - max_workers is a positive integer.
    """

    input_path: Path
    output_dir: Path
    tipo: str = "ficha"
    modo: PrintMode = PrintMode.PRINT
    login: str = ""
    settings_path: Path | None = None
    max_workers: int = 8

    @property
    def output_path(self) -> Path:
        nome = "carteira-membro" if self.tipo == "carteira" else "fichas-cadastro"
        return self.output_dir / f"{nome}.html"


def load_config() -> BatchConfig:
    """Build BatchConfig from environment variables.

    Raises:
        ValueError: if LOTE_INPUT_PATH is not set, or LOTE_TIPO / LOTE_MODO /
            LOTE_MAX_WORKERS hold unsupported values.
    """
    input_raw = os.environ.get("LOTE_INPUT_PATH")
    if not input_raw:
        raise ValueError(
            "LOTE_INPUT_PATH environment variable is required. "
            "Point it to a JSON export of member records."
        )

    tipo = os.environ.get("LOTE_TIPO", "ficha").strip().lower()
    if tipo not in TIPOS:
        raise ValueError(f"LOTE_TIPO invalido: {tipo!r} (use 'ficha' ou 'carteira')")

    modo = PrintMode(os.environ.get("LOTE_MODO", "print").strip().lower())

    max_workers = int(os.environ.get("LOTE_MAX_WORKERS", "8"))
    if max_workers <= 0:
        raise ValueError("LOTE_MAX_WORKERS deve ser positivo")

    settings_raw = os.environ.get("LOTE_SETTINGS_PATH")

    return BatchConfig(
        input_path=Path(input_raw),
        output_dir=Path(os.environ.get("LOTE_OUTPUT_DIR", str(_LOTE_DIR / "output"))),
        tipo=tipo,
        modo=modo,
        login=os.environ.get("LOTE_LOGIN", ""),
        settings_path=Path(settings_raw) if settings_raw else None,
        max_workers=max_workers,
    )
