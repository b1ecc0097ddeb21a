"""Markup da carteira de membro (frente + verso). Funcao pura, zero IO.

A foto e o QR chegam prontos (data URI) do chamador; este modulo so monta
HTML. Dimensoes fisicas ficam no CSS do documento (160mm x 100mm por cartao).
"""
from __future__ import annotations

from datetime import date

from api.domain.configuracao.entities import CardSettings
from api.domain.membro.entities import Membro
from api.domain.membro.value_objects import FotoRef

from .formatters import (
    display_value,
    escape_html,
    format_cargo,
    format_cpf,
    format_date,
    format_date_short,
    resolve_carteira_title,
)


def build_carteira_markup(
    membro: Membro,
    qr_data_url: str,
    settings: CardSettings,
    *,
    hoje: date | None = None,
) -> str:
    """Uma folha (.card-page) com os dois lados da carteira."""
    front = _build_front(membro, settings, hoje or date.today())
    back = _build_back(membro, qr_data_url, settings)
    return f"""
      <div class="card-page">
        <div class="card-sheet">
          {front}
          {back}
        </div>
      </div>
    """


def _build_front(membro: Membro, settings: CardSettings, hoje: date) -> str:
    id_label = membro.id_label or "N/D"
    cargo_label = format_cargo(membro.cargo).upper()
    issued_at = hoje.strftime("%d/%m/%Y")
    member_since = format_date(membro.created_at) or "-"

    foto = membro.foto
    if foto:
        photo_markup = f'<img src="{escape_html(foto.valor)}" alt="Foto" />'
    else:
        photo_markup = '<div class="photo-placeholder">SEM FOTO</div>'

    logo = FotoRef(settings.logo_src)
    logo_markup = f'<img src="{escape_html(logo.valor)}" alt="Logo" />' if logo else ""

    return f"""
          <div class="card front">
            <div class="front-header">
              <div class="brand">
                <div class="brand-logo">{logo_markup}</div>
                <div class="brand-text">
                  <span class="brand-name">{escape_html(settings.brand_name)}</span>
                  <span class="brand-sub">{escape_html(settings.brand_sub)}</span>
                </div>
              </div>
              <div class="header-right">
                <div class="card-title">{escape_html(resolve_carteira_title(membro.cargo))}</div>
                <div class="card-chip"><span></span><span></span><span></span></div>
              </div>
            </div>

            <div class="front-body">
              <div class="photo-box">{photo_markup}</div>
              <div class="front-info">
                <div class="name-block">
                  <span class="label">Nome</span>
                  <span class="value name">{display_value(membro.name)}</span>
                </div>
                <div class="meta-grid">
                  <div>
                    <span class="label">Cargo</span>
                    <div class="value">{display_value(cargo_label)}</div>
                  </div>
                  <div>
                    <span class="label">ID</span>
                    <div class="value">{display_value(id_label)}</div>
                  </div>
                  <div>
                    <span class="label">Expedição</span>
                    <div class="value">{display_value(issued_at)}</div>
                  </div>
                  <div>
                    <span class="label">Membro Desde</span>
                    <div class="value">{display_value(member_since)}</div>
                  </div>
                </div>
              </div>
            </div>

            <div class="front-footer">Documento Intransferível</div>
          </div>
    """


def _build_back(membro: Membro, qr_data_url: str, settings: CardSettings) -> str:
    id_label = membro.id_label or "N/D"

    # QR so entra como data URI / http(s); falha na geracao deixa a area vazia.
    qr = FotoRef(qr_data_url)
    qr_markup = f'<img src="{escape_html(qr.valor)}" class="qr-img" alt="QR" />' if qr else ""

    address_line = settings.address_line
    address_markup = f'<div class="address">{display_value(address_line)}</div>' if address_line else ""

    return f"""
          <div class="card back">
            <div class="back-header">
              <div class="back-title">Dados Pessoais</div>
              <div class="back-id">ID <span>{display_value(id_label)}</span></div>
            </div>

            <div class="back-body">
              <div class="back-grid">
                <div class="info-block grid-full">
                  <span class="label">Filiação</span>
                  <span class="value">{display_value(membro.pai or "-")}</span>
                  <span class="value">{display_value(membro.mae or "-")}</span>
                </div>

                <div class="info-block grid-col-1">
                  <span class="label">Nascimento</span>
                  <span class="value">{display_value(format_date_short(membro.data_nascimento) or "-")}</span>
                </div>

                <div class="info-block grid-col-1">
                  <span class="label">Estado Civil</span>
                  <span class="value">{display_value(membro.estado_civil.strip() or "-")}</span>
                </div>

                <div class="grid-qr-area">{qr_markup}</div>

                <div class="info-block grid-col-1">
                  <span class="label">CPF</span>
                  <span class="value">{display_value(format_cpf(membro.cpf) or "-")}</span>
                </div>

                <div class="info-block grid-col-1">
                  <span class="label">RG</span>
                  <span class="value">{display_value(membro.rg.strip() or "-")}</span>
                </div>
              </div>

              <div class="back-bottom">
                <div class="signature-block">
                  <div class="signature-line"></div>
                  <div class="pastor-info">{display_value(settings.president_signature_name)}</div>
                  <div class="pastor-role">{display_value(settings.president_signature_role)}</div>
                </div>
                {address_markup}
              </div>
            </div>
          </div>
    """
