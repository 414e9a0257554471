"""
Curriculo schemas - a versioned curriculum of a course/shift with a
validity window.
"""

from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from academico.schemas.common import PositiveId, SchemaModel


def _check_vigencia(model):
    if model.vigente_de and model.vigente_ate and model.vigente_ate < model.vigente_de:
        raise ValueError("vigenteAte deve ser posterior a vigenteDe")
    return model


class Curriculo(SchemaModel):
    id: PositiveId
    curso_id: PositiveId
    turno_id: PositiveId
    versao: str = Field(..., min_length=1, max_length=40)
    vigente_de: Optional[date] = None
    vigente_ate: Optional[date] = None
    ativo: bool


class CurriculoCreate(SchemaModel):
    curso_id: PositiveId
    turno_id: PositiveId
    versao: str = Field(..., min_length=1, max_length=40)
    vigente_de: Optional[date] = None
    vigente_ate: Optional[date] = None
    ativo: bool

    check_vigencia = model_validator(mode="after")(_check_vigencia)


class CurriculoUpdate(SchemaModel):
    curso_id: Optional[PositiveId] = None
    turno_id: Optional[PositiveId] = None
    versao: Optional[str] = Field(None, min_length=1, max_length=40)
    vigente_de: Optional[date] = None
    vigente_ate: Optional[date] = None
    ativo: Optional[bool] = None

    check_vigencia = model_validator(mode="after")(_check_vigencia)
