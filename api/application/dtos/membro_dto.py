# api/application/dtos/membro_dto.py
#
# Input shape of a member record as exported by the census form (camelCase
# JSON, every field optional and nullable).
#
# Design decisions:
#   - null and missing are the same thing; to_domain() turns both into the
#     Membro defaults so the builders never see None.
#   - Numbers are accepted for text fields (qtdeFilhos: 2, cpf: 123...) and
#     converted to str; the census export is not consistent about it.
from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from api.domain.membro.entities import Filho, Membro


def _texto(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


Texto = Annotated[str | None, BeforeValidator(_texto)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FilhoDTO(_CamelModel):
    name: Texto = None
    cpf: Texto = None
    observacao: Texto = None

    def to_domain(self) -> Filho:
        return Filho(name=self.name or "", cpf=self.cpf or "", observacao=self.observacao or "")


_TEXT_FIELDS = (
    "id",
    "id_interno",
    "cargo",
    "name",
    "cpf",
    "rg",
    "titulo_eleitor",
    "registro_tipo",
    "registro_tipo_outro",
    "congregacao",
    "setor",
    "created_at",
    "email",
    "telefone",
    "celular",
    "cep",
    "endereco",
    "numero",
    "complemento",
    "bairro",
    "cidade",
    "uf",
    "data_nascimento",
    "nacionalidade",
    "naturalidade",
    "profissao",
    "grau_instrucao",
    "sexo",
    "pai",
    "mae",
    "cpf_pai",
    "cpf_mae",
    "estado_civil",
    "dt_casamento",
    "nome_conjuge",
    "cpf_conjuge",
    "profissao_conjuge",
    "grau_instrucao_conjuge",
    "data_nascimento_conjuge",
    "certidao_casamento",
    "qtde_filhos",
    "data_conversao",
    "data_batismo",
    "local_batismo",
    "recebimento",
    "data_recebimento",
    "data_batismo_espirito_santo",
    "origem",
    "informacoes",
    "photo",
)

_FLAG_FIELDS = (
    "is_orphan_father",
    "is_orphan",
    "batizado_espirito_santo",
    "autorizacao",
    "autorizacao_imagem",
)


class MembroDTO(_CamelModel):
    id: Texto = None
    id_interno: Texto = None
    cargo: Texto = None
    name: Texto = None
    cpf: Texto = None
    rg: Texto = None
    titulo_eleitor: Texto = None
    registro_tipo: Texto = None
    registro_tipo_outro: Texto = None
    congregacao: Texto = None
    setor: Texto = None
    created_at: Texto = None
    email: Texto = None
    telefone: Texto = None
    celular: Texto = None
    cep: Texto = None
    endereco: Texto = None
    numero: Texto = None
    complemento: Texto = None
    bairro: Texto = None
    cidade: Texto = None
    uf: Texto = None
    data_nascimento: Texto = None
    nacionalidade: Texto = None
    naturalidade: Texto = None
    profissao: Texto = None
    grau_instrucao: Texto = None
    sexo: Texto = None
    pai: Texto = None
    mae: Texto = None
    cpf_pai: Texto = None
    cpf_mae: Texto = None
    is_orphan_father: bool | None = None
    is_orphan: bool | None = None
    estado_civil: Texto = None
    dt_casamento: Texto = None
    nome_conjuge: Texto = None
    cpf_conjuge: Texto = None
    profissao_conjuge: Texto = None
    grau_instrucao_conjuge: Texto = None
    data_nascimento_conjuge: Texto = None
    certidao_casamento: Texto = None
    qtde_filhos: Texto = None
    filhos: list[FilhoDTO] | None = None
    data_conversao: Texto = None
    data_batismo: Texto = None
    local_batismo: Texto = None
    recebimento: Texto = None
    data_recebimento: Texto = None
    batizado_espirito_santo: bool | None = None
    data_batismo_espirito_santo: Texto = None
    origem: Texto = None
    informacoes: Texto = None
    autorizacao: bool | None = None
    autorizacao_imagem: bool | None = None
    photo: Texto = None

    def to_domain(self) -> Membro:
        values: dict[str, Any] = {name: getattr(self, name) or "" for name in _TEXT_FIELDS}
        values.update({name: bool(getattr(self, name)) for name in _FLAG_FIELDS})
        values["filhos"] = tuple(f.to_domain() for f in self.filhos or [])
        return Membro(**values)
