"""
Curso schemas - a course owns subjects, curricula and periods.
"""

from typing import List, Optional

from pydantic import Field

from academico.schemas.common import PositiveId, SchemaModel


class Curso(SchemaModel):
    id: PositiveId
    nome: str = Field(..., min_length=2, max_length=80)
    grau: str = Field(..., max_length=30)


class CursoCreate(SchemaModel):
    nome: str = Field(..., min_length=2, max_length=80)
    grau: str = Field(..., max_length=30)


class CursoUpdate(SchemaModel):
    nome: Optional[str] = Field(None, min_length=2, max_length=80)
    grau: Optional[str] = Field(None, max_length=30)


class CursoResumo(SchemaModel):
    id: int
    nome: str
    grau: str


class DisciplinaDoCurso(SchemaModel):
    id: int
    codigo: str
    nome: str
    creditos: int
    carga_horaria: int
    ativo: bool


class PeriodoDoCurso(SchemaModel):
    id: int
    numero: int
    nome: Optional[str]
    descricao: Optional[str] = None
    total_disciplinas: Optional[int] = None


class CursoComDisciplinas(Curso):
    disciplinas: List[DisciplinaDoCurso]
    periodos: Optional[List[PeriodoDoCurso]] = None
