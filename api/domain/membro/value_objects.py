from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

# Caracteres que encodeURI preserva: reservados + nao reservados + '%'.
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#%[]"


@dataclass(frozen=True)
class FotoRef:
    """Referencia de foto segura para usar como src de <img>.

    Apenas URLs http(s) absolutas, data: URIs e caminhos relativos a raiz
    ("/fotos/x.jpg") sao aceitos. Qualquer outra coisa (javascript:, ftp://,
    caminhos relativos, "//host/x") vira referencia vazia = "sem foto".
    """

    valor: str

    def __init__(self, raw: str) -> None:
        object.__setattr__(self, "valor", _sanitizar(raw))

    @property
    def vazia(self) -> bool:
        return not self.valor

    @property
    def is_data_uri(self) -> bool:
        return self.valor.startswith("data:")

    @property
    def is_remota(self) -> bool:
        return self.valor.startswith(("http://", "https://"))

    def __bool__(self) -> bool:
        return bool(self.valor)

    def __str__(self) -> str:
        return self.valor


def _sanitizar(raw: str) -> str:
    foto = (raw or "").strip()
    if not foto:
        return ""
    if foto.startswith("data:"):
        return foto
    if foto.startswith(("http://", "https://")):
        return foto
    if foto.startswith("/") and not foto.startswith("//"):
        return quote(foto, safe=_URI_SAFE)
    return ""
