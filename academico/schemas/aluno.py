"""
Aluno schemas - a student is keyed by an 8-character RA, not by the
person id.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, ValidationInfo, field_validator

from academico.schemas.common import AnoLetivo, CodigoRA, Nota, PositiveId, SchemaModel
from academico.schemas.curso import CursoResumo
from academico.schemas.pessoa import ComPessoaInline, PessoaNome, PessoaResumo


class SituacaoAluno(str, Enum):
    ATIVO = "ATIVO"
    TRANCADO = "TRANCADO"
    CONCLUIDO = "CONCLUIDO"
    CANCELADO = "CANCELADO"


class Aluno(SchemaModel):
    ra: CodigoRA
    pessoa_id: PositiveId
    curso_id: PositiveId
    turno_id: Optional[PositiveId] = None
    coorte_id: Optional[PositiveId] = None
    periodo_id: Optional[PositiveId] = None
    ano_ingresso: AnoLetivo
    igreja: Optional[str] = Field(None, max_length=120)
    situacao: SituacaoAluno
    coeficiente_acad: Optional[Nota] = None
    created_at: datetime
    updated_at: datetime


class AlunoCreate(ComPessoaInline):
    """RA may be omitted: the server generates one from the entry year."""
    ra: Optional[CodigoRA] = None
    curso_id: PositiveId
    turno_id: Optional[PositiveId] = None
    coorte_id: Optional[PositiveId] = None
    periodo_id: Optional[PositiveId] = None
    ano_ingresso: AnoLetivo
    igreja: Optional[str] = Field(None, max_length=120)
    situacao: SituacaoAluno = SituacaoAluno.ATIVO
    coeficiente_acad: Optional[Nota] = None


class UserBundle(SchemaModel):
    """Optional login created together with a student or professor."""
    create_user: bool = False
    username: Optional[str] = Field(None, min_length=3, max_length=50, validate_default=True)
    password: Optional[str] = Field(None, min_length=6, max_length=100, validate_default=True)

    @field_validator("username")
    @classmethod
    def username_required_for_user(cls, value, info: ValidationInfo):
        if value is None and info.data.get("create_user"):
            raise ValueError("Usuário é obrigatório para criar o acesso")
        return value

    @field_validator("password")
    @classmethod
    def password_required_for_user(cls, value, info: ValidationInfo):
        if value is None and info.data.get("create_user"):
            raise ValueError("Senha é obrigatória para criar o acesso")
        return value


class AlunoCreateWithUser(AlunoCreate, UserBundle):
    pass


class AlunoUpdate(SchemaModel):
    pessoa_id: Optional[PositiveId] = None
    curso_id: Optional[PositiveId] = None
    turno_id: Optional[PositiveId] = None
    coorte_id: Optional[PositiveId] = None
    periodo_id: Optional[PositiveId] = None
    ano_ingresso: Optional[AnoLetivo] = None
    igreja: Optional[str] = Field(None, max_length=120)
    situacao: Optional[SituacaoAluno] = None
    coeficiente_acad: Optional[Nota] = None


class AlunoComPessoa(Aluno):
    pessoa: PessoaResumo
    curso: CursoResumo


class AlunoResumo(SchemaModel):
    ra: str
    pessoa_id: Optional[int] = None
    pessoa: Optional[PessoaResumo] = None


class AlunoIdentificacao(SchemaModel):
    """RA + name, embedded in attendance and grade sheets."""
    ra: str
    pessoa: PessoaNome
