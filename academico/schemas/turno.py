"""
Turno schemas - shifts (Diurno, Vespertino, Noturno) and their time slots.
"""

from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator

from academico.schemas.common import HoraMinuto, PositiveId, SchemaModel, hora_em_minutos


class TurnoHorario(SchemaModel):
    id: Optional[str] = Field(None, min_length=1)
    ordem: Optional[int] = Field(None, ge=0)
    descricao: Optional[str] = Field(None, min_length=1, max_length=80)
    hora_inicio: HoraMinuto
    hora_fim: HoraMinuto

    @field_validator("hora_fim")
    @classmethod
    def check_intervalo(cls, value, info: ValidationInfo):
        inicio = info.data.get("hora_inicio")
        if inicio and hora_em_minutos(value) <= hora_em_minutos(inicio):
            raise ValueError("horaFim deve ser maior que horaInicio")
        return value


class Turno(SchemaModel):
    id: PositiveId
    nome: str = Field(..., min_length=2, max_length=30)
    horarios: List[TurnoHorario] = []


class TurnoCreate(SchemaModel):
    nome: str = Field(..., min_length=2, max_length=30)
    horarios: List[TurnoHorario] = []


class TurnoUpdate(SchemaModel):
    nome: Optional[str] = Field(None, min_length=2, max_length=30)
    horarios: Optional[List[TurnoHorario]] = None
