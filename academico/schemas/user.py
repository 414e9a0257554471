"""
User schemas - login identity linked 1:1 to a person.

``isActive`` is the legacy S/N flag, not a boolean.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator

from academico.schemas.common import PositiveId, SchemaModel


class Role(str, Enum):
    ADMIN = "ADMIN"
    SECRETARIA = "SECRETARIA"
    PROFESSOR = "PROFESSOR"
    ALUNO = "ALUNO"


class FlagAtivo(str, Enum):
    S = "S"
    N = "N"


class User(SchemaModel):
    id: PositiveId
    pessoa_id: PositiveId
    username: str = Field(..., min_length=3, max_length=50)
    password_hash: str = Field(..., max_length=255)
    role: Role
    is_active: FlagAtivo = FlagAtivo.S
    last_login: Optional[datetime] = None
    password_reset_token: Optional[str] = Field(None, max_length=255)
    password_reset_expires: Optional[datetime] = None
    refresh_token: Optional[str] = Field(None, max_length=500)
    refresh_token_expires: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserCreate(SchemaModel):
    pessoa_id: PositiveId
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=100)
    role: Role
    is_active: FlagAtivo = FlagAtivo.S


class UserUpdate(SchemaModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    password: Optional[str] = Field(None, min_length=6, max_length=100)
    role: Optional[Role] = None
    is_active: Optional[FlagAtivo] = None


class ChangePassword(SchemaModel):
    current_password: Optional[str] = Field(None, min_length=6)
    new_password: str = Field(..., min_length=6, max_length=100)
    confirm_password: str = Field(..., min_length=6, max_length=100)

    @field_validator("confirm_password")
    @classmethod
    def check_confirmacao(cls, value, info: ValidationInfo):
        nova = info.data.get("new_password")
        if nova is not None and value != nova:
            raise ValueError("Senhas não conferem")
        return value


class PessoaDoUsuario(SchemaModel):
    id: int
    nome_completo: str
    email: Optional[str] = None
    cpf: Optional[str] = None
    telefone: Optional[str] = None


class UserWithPessoa(User):
    pessoa: PessoaDoUsuario


class UserResumo(SchemaModel):
    id: int
    username: str
