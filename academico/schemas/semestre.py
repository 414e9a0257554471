"""
Semestre schemas - calendar semester (year + 1/2) with its date window.
"""

from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from academico.schemas.common import AnoLetivo, SchemaModel


def _check_datas(model):
    if model.inicio and model.termino and model.termino < model.inicio:
        raise ValueError("termino deve ser posterior ao inicio")
    return model


class Semestre(SchemaModel):
    id: int
    ano: AnoLetivo
    periodo: int = Field(..., ge=1, le=2)
    inicio: date
    termino: date


class SemestreCreate(SchemaModel):
    ano: AnoLetivo
    periodo: int = Field(..., ge=1, le=2)
    inicio: date
    termino: date

    check_datas = model_validator(mode="after")(_check_datas)


class SemestreUpdate(SchemaModel):
    ano: Optional[AnoLetivo] = None
    periodo: Optional[int] = Field(None, ge=1, le=2)
    inicio: Optional[date] = None
    termino: Optional[date] = None

    check_datas = model_validator(mode="after")(_check_datas)
