from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BRAND_NAME = "Igreja Evangelica Assembleia de Deus"
DEFAULT_BRAND_SUB = "SANTA MARIA"
DEFAULT_LOGO_SRC = "/logo.png"


@dataclass(frozen=True)
class CardSettings:
    """Configuracoes do site usadas no verso da carteira e no cabecalho da ficha.

    Enderecos e assinatura sao opcionais; o verso da carteira omite a linha
    de endereco quando nenhum dos tres campos esta preenchido.
    """

    location_address1: str = ""
    location_address2: str = ""
    location_cep: str = ""
    president_signature_name: str = ""
    president_signature_role: str = ""
    brand_name: str = DEFAULT_BRAND_NAME
    brand_sub: str = DEFAULT_BRAND_SUB
    logo_src: str = DEFAULT_LOGO_SRC

    @property
    def address_line(self) -> str:
        partes = (self.location_address1, self.location_address2, self.location_cep)
        return " - ".join(p.strip() for p in partes if p and p.strip())
