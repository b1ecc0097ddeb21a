from __future__ import annotations

import re
import unicodedata
from enum import StrEnum


class Cargo(StrEnum):
    MEMBRO = "membro"
    AUXILIAR = "auxiliar"
    DIACONO = "diacono"
    PRESBITERO = "presbitero"
    EVANGELISTA = "evangelista"
    PASTOR = "pastor"
    PASTOR_PRESIDENTE = "pastor-presidente"

    @property
    def label(self) -> str:
        return _CARGO_LABELS[self]

    @classmethod
    def resolver(cls, raw: str) -> Cargo:
        """Texto livre do cadastro -> cargo canonico. Desconhecido vira MEMBRO."""
        valor = _sem_acentos(raw).strip().lower()
        if not valor:
            return cls.MEMBRO
        if "pastor" in valor and "presidente" in valor:
            return cls.PASTOR_PRESIDENTE
        prefixos = (
            ("pastor", cls.PASTOR),
            ("evangel", cls.EVANGELISTA),
            ("presb", cls.PRESBITERO),
            ("diac", cls.DIACONO),
            ("aux", cls.AUXILIAR),
        )
        for prefixo, cargo in prefixos:
            if valor.startswith(prefixo):
                return cargo
        slug = re.sub(r"\s+", "-", valor)
        try:
            return cls(slug)
        except ValueError:
            return cls.MEMBRO


_CARGO_LABELS: dict[Cargo, str] = {
    Cargo.MEMBRO: "Membro",
    Cargo.AUXILIAR: "Auxiliar",
    Cargo.DIACONO: "Diácono",
    Cargo.PRESBITERO: "Presbítero",
    Cargo.EVANGELISTA: "Evangelista",
    Cargo.PASTOR: "Pastor",
    Cargo.PASTOR_PRESIDENTE: "Pastor Presidente",
}


class EstadoCivil(StrEnum):
    SOLTEIRO = "Solteiro(a)"
    CASADO = "Casado(a)"
    UNIAO_ESTAVEL = "União Estável"
    DIVORCIADO = "Divorciado(a)"
    VIUVO = "Viúvo(a)"


def indica_casamento(estado_civil: str) -> bool:
    """Dados do conjuge so fazem sentido para casados ou uniao estavel."""
    valor = _sem_acentos(estado_civil).strip().lower()
    return valor.startswith("casad") or valor.startswith("uniao estavel")


def _sem_acentos(texto: str) -> str:
    decomposto = unicodedata.normalize("NFKD", texto)
    return "".join(c for c in decomposto if not unicodedata.combining(c))
