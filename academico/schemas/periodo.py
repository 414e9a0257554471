"""
Periodo schemas - a numbered stage (semester/term) of a curriculum.

Read shapes carry derived counts (totalDisciplinas, totalAlunos) that are
never accepted on create.
"""

from typing import List, Optional

from pydantic import Field

from academico.schemas.common import PositiveId, SchemaModel
from academico.schemas.curso import Curso


class Periodo(SchemaModel):
    id: PositiveId
    curso_id: PositiveId
    curriculo_id: Optional[PositiveId] = None
    numero: int = Field(..., ge=1, le=255)
    nome: Optional[str] = Field(None, max_length=80)
    descricao: Optional[str] = None
    total_disciplinas: Optional[int] = Field(None, ge=0)
    total_alunos: Optional[int] = Field(None, ge=0)
    curso: Optional[Curso] = None


class PeriodoCreate(SchemaModel):
    curso_id: PositiveId
    curriculo_id: Optional[PositiveId] = None
    numero: int = Field(..., ge=1, le=255)
    nome: Optional[str] = Field(None, max_length=80)
    descricao: Optional[str] = None


class PeriodoUpdate(SchemaModel):
    curso_id: Optional[PositiveId] = None
    curriculo_id: Optional[PositiveId] = None
    numero: Optional[int] = Field(None, ge=1, le=255)
    nome: Optional[str] = Field(None, max_length=80)
    descricao: Optional[str] = None


class DisciplinaVinculada(SchemaModel):
    """A subject as seen from one of its periods."""
    id: int
    codigo: str
    nome: str
    creditos: int
    carga_horaria: int
    ordem: Optional[int] = None
    obrigatoria: bool = True


class PeriodoComDisciplinas(Periodo):
    disciplinas: List[DisciplinaVinculada] = []


class PeriodoResumo(SchemaModel):
    id: int
    numero: Optional[int] = None
    nome: Optional[str] = None
