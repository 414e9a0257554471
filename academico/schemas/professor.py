"""
Professor schemas - keyed by an 8-character matrícula.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from academico.schemas.aluno import UserBundle
from academico.schemas.common import Matricula, PositiveId, SchemaModel
from academico.schemas.pessoa import ComPessoaInline, PessoaResumo


class SituacaoProfessor(str, Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"


class Professor(SchemaModel):
    matricula: Matricula
    pessoa_id: PositiveId
    data_inicio: date
    formacao_acad: Optional[str] = Field(None, max_length=120)
    situacao: SituacaoProfessor


class ProfessorCreate(ComPessoaInline):
    matricula: Matricula
    data_inicio: date
    formacao_acad: Optional[str] = Field(None, max_length=120)
    situacao: SituacaoProfessor = SituacaoProfessor.ATIVO


class ProfessorCreateWithUser(ProfessorCreate, UserBundle):
    pass


class ProfessorUpdate(SchemaModel):
    pessoa_id: Optional[PositiveId] = None
    data_inicio: Optional[date] = None
    formacao_acad: Optional[str] = Field(None, max_length=120)
    situacao: Optional[SituacaoProfessor] = None


class ProfessorComPessoa(Professor):
    pessoa: PessoaResumo


class ProfessorResumo(SchemaModel):
    matricula: str
    pessoa_id: int
    formacao_acad: Optional[str] = None
    situacao: Optional[SituacaoProfessor] = None
    pessoa: Optional[PessoaResumo] = None
