"""
Coorte schemas - entry-year grouping of a course, shift and curriculum.
"""

from typing import Optional

from pydantic import Field

from academico.schemas.common import AnoLetivo, PositiveId, SchemaModel


class Coorte(SchemaModel):
    id: PositiveId
    curso_id: PositiveId
    turno_id: PositiveId
    curriculo_id: PositiveId
    ano_ingresso: AnoLetivo
    rotulo: str = Field(..., min_length=1, max_length=40)
    ativo: bool


class CoorteCreate(SchemaModel):
    curso_id: PositiveId
    turno_id: PositiveId
    curriculo_id: PositiveId
    ano_ingresso: AnoLetivo
    rotulo: str = Field(..., min_length=1, max_length=40)
    ativo: bool


class CoorteUpdate(SchemaModel):
    curso_id: Optional[PositiveId] = None
    turno_id: Optional[PositiveId] = None
    curriculo_id: Optional[PositiveId] = None
    ano_ingresso: Optional[AnoLetivo] = None
    rotulo: Optional[str] = Field(None, min_length=1, max_length=40)
    ativo: Optional[bool] = None


class CoorteResumo(SchemaModel):
    id: int
    rotulo: str
    ano_ingresso: int
    ativo: bool
