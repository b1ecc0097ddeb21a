from __future__ import annotations

from dataclasses import dataclass, replace

from .enums import Cargo, indica_casamento
from .value_objects import FotoRef


@dataclass(frozen=True)
class Filho:
    name: str = ""
    cpf: str = ""
    observacao: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip())
        object.__setattr__(self, "cpf", self.cpf.strip())
        object.__setattr__(self, "observacao", self.observacao.strip())

    @property
    def preenchido(self) -> bool:
        return bool(self.name or self.cpf or self.observacao)


@dataclass(frozen=True)
class Membro:
    """Registro de membro vindo do censo. Imutavel.

    Todos os campos sao opcionais e ja nascem com default ("" / False / ()),
    entao os builders nunca precisam testar None. Campo ausente e renderizado
    como espaco em branco, nunca como erro.
    """

    # Identificacao
    id: str = ""
    id_interno: str = ""
    cargo: str = ""
    name: str = ""
    cpf: str = ""
    rg: str = ""
    titulo_eleitor: str = ""

    # Registro
    registro_tipo: str = ""
    registro_tipo_outro: str = ""
    congregacao: str = ""
    setor: str = ""
    created_at: str = ""

    # Contatos
    email: str = ""
    telefone: str = ""
    celular: str = ""

    # Endereco
    cep: str = ""
    endereco: str = ""
    numero: str = ""
    complemento: str = ""
    bairro: str = ""
    cidade: str = ""
    uf: str = ""

    # Dados pessoais
    data_nascimento: str = ""
    nacionalidade: str = ""
    naturalidade: str = ""
    profissao: str = ""
    grau_instrucao: str = ""
    sexo: str = ""

    # Filiacao
    pai: str = ""
    mae: str = ""
    cpf_pai: str = ""
    cpf_mae: str = ""
    is_orphan_father: bool = False
    is_orphan: bool = False  # orfao de mae

    # Dados matrimoniais
    estado_civil: str = ""
    dt_casamento: str = ""
    nome_conjuge: str = ""
    cpf_conjuge: str = ""
    profissao_conjuge: str = ""
    grau_instrucao_conjuge: str = ""
    data_nascimento_conjuge: str = ""
    certidao_casamento: str = ""

    # Filhos
    qtde_filhos: str = ""
    filhos: tuple[Filho, ...] = ()

    # Dados eclesiasticos
    data_conversao: str = ""
    data_batismo: str = ""
    local_batismo: str = ""
    recebimento: str = ""
    data_recebimento: str = ""
    batizado_espirito_santo: bool = False
    data_batismo_espirito_santo: str = ""
    origem: str = ""

    # Observacoes e consentimentos (LGPD)
    informacoes: str = ""
    autorizacao: bool = False
    autorizacao_imagem: bool = False

    photo: str = ""

    @property
    def id_label(self) -> str:
        """ID exibido: idInterno tem precedencia sobre o id do documento."""
        return self.id_interno.strip() or self.id.strip()

    @property
    def cargo_canonico(self) -> Cargo:
        return Cargo.resolver(self.cargo)

    @property
    def foto(self) -> FotoRef:
        return FotoRef(self.photo)

    @property
    def casado(self) -> bool:
        return indica_casamento(self.estado_civil)

    @property
    def filhos_preenchidos(self) -> tuple[Filho, ...]:
        return tuple(f for f in self.filhos if f.preenchido)

    @property
    def qtde_filhos_declarada(self) -> int:
        """Quantidade informada no campo livre; 0 se nao numerica."""
        digitos = "".join(c for c in self.qtde_filhos if c.isdigit())
        return int(digitos) if digitos else 0

    def com_foto(self, photo: str) -> Membro:
        """Copia com a foto ja resolvida (ex: data URI baixada)."""
        return replace(self, photo=photo)
