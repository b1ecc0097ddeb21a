"""Markup da ficha de cadastro (uma pagina A4 por membro). Funcao pura, zero IO.

Cada secao monta a propria fronteira (titulo + grid); secoes opcionais
(matrimonio, filhos, observacoes) simplesmente nao sao emitidas, sem afetar
as vizinhas.
"""
from __future__ import annotations

from api.domain.configuracao.entities import CardSettings
from api.domain.membro.entities import Membro
from api.domain.membro.value_objects import FotoRef

from .formatters import (
    NBSP,
    checkbox,
    display_cpf_value,
    display_date_value,
    display_multiline,
    display_phone_value,
    display_value,
    escape_html,
)

DEFAULT_SUBTITLE = "Sistema de Gestão Eclesiástica"
MIN_CHILD_ROWS = 3


def build_ficha_markup(
    membro: Membro,
    title: str | None = None,
    *,
    settings: CardSettings | None = None,
) -> str:
    settings = settings or CardSettings()
    sections: list[str] = [
        _header(membro, title, settings),
        _secao_registro(membro),
        _secao_dados_pessoais(membro),
        _secao_documentos(membro),
        _secao_endereco(membro),
        _secao_filiacao(membro),
        _secao_eclesiastica(membro),
    ]

    if membro.casado:
        sections.append(_secao_matrimonial(membro))

    if membro.filhos_preenchidos or membro.qtde_filhos.strip():
        sections.append(_secao_filhos(membro))

    if membro.informacoes.strip():
        sections.append(_secao_observacoes(membro))

    sections.append(_secao_declaracao(membro))
    sections.append(f'<div class="footer">{NBSP}</div>')

    body = "\n".join(sections)
    return f"""
      <div class="page">
        {body}
      </div>
    """


def child_row_count(membro: Membro) -> int:
    """Linhas da tabela de filhos: max(registrados, declarados, 3)."""
    return max(len(membro.filhos_preenchidos), membro.qtde_filhos_declarada, MIN_CHILD_ROWS)


# ---------------------------------------------------------------------------
# Blocos de layout
# ---------------------------------------------------------------------------


def _field(col: int, label: str, value_html: str, extra_class: str = "") -> str:
    classes = f"value {extra_class}".strip()
    return f"""
          <div class="field col-{col}">
            <span class="label">{escape_html(label)}</span>
            <div class="{classes}">{value_html}</div>
          </div>"""


def _row(*fields: str) -> str:
    return f'<div class="row">{"".join(fields)}\n        </div>'


def _section(title_html: str, *rows: str) -> str:
    return f'<div class="section-title">{title_html}</div>\n' + "\n".join(rows)


def _sim_nao(marcado: bool) -> str:
    return f'<div class="checkbox-group">{checkbox(marcado, "Sim")}{checkbox(not marcado, "Não")}</div>'


# ---------------------------------------------------------------------------
# Secoes
# ---------------------------------------------------------------------------


def _header(membro: Membro, title: str | None, settings: CardSettings) -> str:
    foto = membro.foto
    if foto:
        photo_markup = f'<img src="{escape_html(foto.valor)}" alt="Foto do membro" />'
    else:
        photo_markup = '<div class="photo-placeholder">Sem foto</div>'

    logo = FotoRef(settings.logo_src)
    logo_markup = f'<img class="logo" src="{escape_html(logo.valor)}" alt="Logo" />' if logo else ""

    return f"""
        <header>
          <div class="header-left">
            {logo_markup}
            <div class="titles">
              <div class="title">Ficha de Cadastro de Membro</div>
              <div class="subtitle">{escape_html(title or DEFAULT_SUBTITLE)}</div>
            </div>
          </div>
          <div class="photo">{photo_markup}</div>
        </header>"""


def _registro_tipo_label(membro: Membro) -> str:
    if membro.registro_tipo == "Outros":
        outro = membro.registro_tipo_outro.strip()
        return f"Outros: {outro}" if outro else "Outros"
    return membro.registro_tipo or "Registro"


def _secao_registro(membro: Membro) -> str:
    return _section(
        "Dados de Registro",
        _row(
            _field(3, "ID Interno", display_value(membro.id_interno)),
            _field(3, "Tipo de Registro", display_value(_registro_tipo_label(membro))),
            _field(3, "Congregação", display_value(membro.congregacao)),
            _field(3, "Setor", display_value(membro.setor)),
        ),
    )


def _secao_dados_pessoais(membro: Membro) -> str:
    return _section(
        "Dados Pessoais",
        _row(
            _field(8, "Nome Completo", display_value(membro.name)),
            _field(2, "Sexo", display_value(membro.sexo)),
            _field(2, "Data Nasc.", display_date_value(membro.data_nascimento)),
        ),
        _row(
            _field(3, "Nacionalidade", display_value(membro.nacionalidade)),
            _field(3, "Naturalidade", display_value(membro.naturalidade)),
            _field(3, "Profissão", display_value(membro.profissao)),
            _field(3, "Grau de Instrução", display_value(membro.grau_instrucao)),
        ),
    )


def _secao_documentos(membro: Membro) -> str:
    return _section(
        "Documentos e Contatos",
        _row(
            _field(3, "CPF", display_cpf_value(membro.cpf)),
            _field(3, "RG", display_value(membro.rg)),
            _field(3, "Título Eleitor", display_value(membro.titulo_eleitor)),
            _field(3, "Celular", display_phone_value(membro.celular)),
        ),
        _row(
            _field(6, "E-mail", display_value(membro.email)),
            _field(6, "Telefone", display_phone_value(membro.telefone)),
        ),
    )


def _secao_endereco(membro: Membro) -> str:
    return _section(
        "Endereço Residencial",
        _row(
            _field(2, "CEP", display_value(membro.cep)),
            _field(8, "Logradouro", display_value(membro.endereco)),
            _field(2, "Número", display_value(membro.numero)),
        ),
        _row(
            _field(4, "Complemento", display_value(membro.complemento)),
            _field(4, "Bairro", display_value(membro.bairro)),
            _field(3, "Cidade", display_value(membro.cidade)),
            _field(1, "UF", display_value(membro.uf)),
        ),
    )


def _secao_filiacao(membro: Membro) -> str:
    return _section(
        "Filiação",
        _row(
            _field(5, "Nome do Pai", display_value(membro.pai)),
            _field(3, "CPF Pai", display_cpf_value(membro.cpf_pai)),
            _field(4, "Órfão de Pai", _sim_nao(membro.is_orphan_father)),
        ),
        _row(
            _field(5, "Nome da Mãe", display_value(membro.mae)),
            _field(3, "CPF Mãe", display_cpf_value(membro.cpf_mae)),
            _field(4, "Órfão de Mãe", _sim_nao(membro.is_orphan)),
        ),
    )


def _secao_eclesiastica(membro: Membro) -> str:
    return _section(
        "Dados Eclesiásticos",
        _row(
            _field(3, "Data Conversão", display_date_value(membro.data_conversao)),
            _field(3, "Data Batismo (Águas)", display_date_value(membro.data_batismo)),
            _field(6, "Local Batismo", display_value(membro.local_batismo)),
        ),
        _row(
            _field(3, "Recebimento", display_value(membro.recebimento)),
            _field(3, "Data Recebimento", display_date_value(membro.data_recebimento)),
            _field(3, "Batismo Espírito Santo", _sim_nao(membro.batizado_espirito_santo)),
            _field(3, "Data Batismo Espírito Santo", display_date_value(membro.data_batismo_espirito_santo)),
        ),
        _row(
            _field(12, "Origem (Igreja anterior)", display_value(membro.origem)),
        ),
    )


def _secao_matrimonial(membro: Membro) -> str:
    return _section(
        "Dados Matrimoniais",
        _row(
            _field(3, "Estado Civil", display_value(membro.estado_civil)),
            _field(3, "Data Casamento", display_date_value(membro.dt_casamento)),
            _field(6, "Cônjuge", display_value(membro.nome_conjuge)),
        ),
        _row(
            _field(3, "CPF Cônjuge", display_cpf_value(membro.cpf_conjuge)),
            _field(3, "Data Nasc. Cônjuge", display_date_value(membro.data_nascimento_conjuge)),
            _field(3, "Profissão Cônjuge", display_value(membro.profissao_conjuge)),
            _field(3, "Grau Instrução Cônjuge", display_value(membro.grau_instrucao_conjuge)),
        ),
        _row(
            # certidao e um anexo no storage; a ficha so registra se existe
            _field(12, "Certidão de Casamento", display_value("Anexada" if membro.certidao_casamento.strip() else "")),
        ),
    )


def _secao_filhos(membro: Membro) -> str:
    filhos = membro.filhos_preenchidos
    quantidade = membro.qtde_filhos.strip() or (str(len(filhos)) if filhos else "-")

    rows: list[str] = []
    for index in range(child_row_count(membro)):
        if index < len(filhos):
            filho = filhos[index]
            cells = (display_value(filho.name), display_cpf_value(filho.cpf), display_value(filho.observacao))
        else:
            cells = (NBSP, NBSP, NBSP)
        rows.append(
            f'<tr><td>{cells[0]}</td><td class="text-center">{cells[1]}</td>'
            f'<td class="text-center">{cells[2]}</td></tr>'
        )

    table = f"""
        <table>
          <thead>
            <tr>
              <th>Nome do Filho(a)</th>
              <th class="text-center">CPF</th>
              <th class="text-center">Observação</th>
            </tr>
          </thead>
          <tbody>
            {"".join(rows)}
          </tbody>
        </table>"""
    return _section(f"Filhos (Quantidade: {escape_html(quantidade)})", table)


def _secao_observacoes(membro: Membro) -> str:
    return _section(
        "Outras Informações",
        _row(_field(12, "Observações", display_multiline(membro.informacoes), "multiline")),
    )


def _secao_declaracao(membro: Membro) -> str:
    consentimentos = (
        f'<div class="checkbox-group">'
        f"{checkbox(membro.autorizacao, 'Declaro que li e concordo com o uso dos meus dados')}"
        f"{checkbox(membro.autorizacao_imagem, 'Autorizo o uso da minha imagem')}"
        f"</div>"
    )
    return _section(
        "Declaração",
        _row(_field(12, "Concordância", consentimentos)),
    )
