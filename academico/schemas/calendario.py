"""
Calendario schemas - semester events (holidays, exam weeks) and the
key/value configuration store, plus the month grid shown by the portal.
"""

from datetime import date
from typing import Any, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from academico.schemas.common import PositiveId, SchemaModel


def _check_termino(value, info: ValidationInfo):
    inicio = info.data.get("inicio")
    if value and inicio and value < inicio:
        raise ValueError("termino deve ser igual ou posterior ao inicio")
    return value


class Calendario(SchemaModel):
    id: PositiveId
    evento: str = Field(..., max_length=100)
    inicio: date
    termino: date
    obs: Optional[str] = None
    periodo_id: Optional[int] = None


class CalendarioCreate(SchemaModel):
    evento: str = Field(..., max_length=100)
    inicio: date
    termino: date
    obs: Optional[str] = None
    periodo_id: Optional[int] = None

    check_termino = field_validator("termino")(_check_termino)


class CalendarioUpdate(SchemaModel):
    evento: Optional[str] = Field(None, max_length=100)
    inicio: Optional[date] = None
    termino: Optional[date] = None
    obs: Optional[str] = None
    periodo_id: Optional[int] = None

    check_termino = field_validator("termino")(_check_termino)


class Configuracao(SchemaModel):
    chave: str
    valor: Any = None


class ConfiguracaoUpdate(SchemaModel):
    valor: Any = None


class EventoDoDia(SchemaModel):
    id: Optional[int] = None
    evento: str


class DiaCalendario(SchemaModel):
    data: date
    no_mes: bool
    hoje: bool = False
    eventos: List[EventoDoDia] = []


class GradeMensal(SchemaModel):
    ano: int
    mes: int = Field(..., ge=1, le=12)
    semanas: List[List[DiaCalendario]]
