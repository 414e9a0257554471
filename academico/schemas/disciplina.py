"""
Disciplina schemas - a subject belongs to a course and may be linked to
several periods (see disciplina_periodo).
"""

from typing import Optional

from pydantic import Field

from academico.schemas.common import PositiveId, SchemaModel, SmallInt
from academico.schemas.curso import CursoResumo


class Disciplina(SchemaModel):
    id: PositiveId
    curso_id: PositiveId
    codigo: str = Field(..., max_length=10)
    nome: str = Field(..., max_length=120)
    creditos: SmallInt
    carga_horaria: int = Field(..., ge=1)
    ementa: Optional[str] = None
    bibliografia: Optional[str] = None
    ativo: bool = True


class DisciplinaCreate(SchemaModel):
    curso_id: PositiveId
    codigo: str = Field(..., max_length=10)
    nome: str = Field(..., max_length=120)
    creditos: SmallInt
    carga_horaria: int = Field(..., ge=1)
    ementa: Optional[str] = None
    bibliografia: Optional[str] = None
    ativo: bool = True


class DisciplinaUpdate(SchemaModel):
    curso_id: Optional[PositiveId] = None
    codigo: Optional[str] = Field(None, max_length=10)
    nome: Optional[str] = Field(None, max_length=120)
    creditos: Optional[SmallInt] = None
    carga_horaria: Optional[int] = Field(None, ge=1)
    ementa: Optional[str] = None
    bibliografia: Optional[str] = None
    ativo: Optional[bool] = None


class DisciplinaComCurso(Disciplina):
    curso: CursoResumo
