"""
Pessoa schemas - identity record shared by students, professors and users.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from academico.schemas.common import CPF, Email, PositiveId, SchemaModel
from academico.utils.endereco import decode_endereco


class Sexo(str, Enum):
    M = "M"
    F = "F"
    O = "O"


class Endereco(SchemaModel):
    logradouro: Optional[str] = None
    numero: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    cep: Optional[str] = None


def _endereco_before(value):
    # structured objects pass through; stored text goes through the codec
    if isinstance(value, str):
        return decode_endereco(value)
    return value


class Pessoa(SchemaModel):
    id: PositiveId
    nome_completo: str = Field(..., min_length=2, max_length=120)
    sexo: Sexo
    email: Optional[Email] = None
    cpf: Optional[CPF] = None
    data_nasc: Optional[date] = None
    telefone: Optional[str] = Field(None, max_length=20)
    endereco: Optional[Endereco] = None
    created_at: datetime
    updated_at: datetime

    parse_endereco = field_validator("endereco", mode="before")(_endereco_before)


class PessoaCreate(SchemaModel):
    nome_completo: str = Field(..., min_length=2, max_length=120)
    sexo: Sexo
    email: Optional[Email] = None
    cpf: Optional[CPF] = None
    data_nasc: Optional[date] = None
    telefone: Optional[str] = Field(None, max_length=20)
    endereco: Optional[Endereco] = None

    parse_endereco = field_validator("endereco", mode="before")(_endereco_before)


class PessoaUpdate(SchemaModel):
    nome_completo: Optional[str] = Field(None, min_length=2, max_length=120)
    sexo: Optional[Sexo] = None
    email: Optional[Email] = None
    cpf: Optional[CPF] = None
    data_nasc: Optional[date] = None
    telefone: Optional[str] = Field(None, max_length=20)
    endereco: Optional[Endereco] = None

    parse_endereco = field_validator("endereco", mode="before")(_endereco_before)


class PessoaResumo(SchemaModel):
    """Embedded summary used by the relation shapes."""
    id: int
    nome_completo: str
    email: Optional[str] = None
    telefone: Optional[str] = None


class PessoaNome(SchemaModel):
    nome_completo: str


class ComPessoaInline(SchemaModel):
    """
    Creation payloads that reference a person either by id or inline.

    Exactly one of ``pessoaId`` / ``pessoa`` must be supplied.
    """
    pessoa_id: Optional[PositiveId] = None
    pessoa: Optional[PessoaCreate] = None

    @model_validator(mode="after")
    def check_pessoa_reference(self):
        if self.pessoa_id is not None and self.pessoa is not None:
            raise ValueError("Informe pessoaId ou pessoa, não ambos")
        if self.pessoa_id is None and self.pessoa is None:
            raise ValueError("Informe pessoaId ou os dados da pessoa")
        return self
