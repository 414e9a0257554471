"""
Frequencia schemas - presence/absence of one enrollment in one lesson.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import Field, ValidationInfo, field_validator

from academico.schemas.aluno import AlunoIdentificacao
from academico.schemas.common import PositiveId, SchemaModel

NivelAlerta = Literal["normal", "warning", "critical"]


class Frequencia(SchemaModel):
    id: PositiveId
    aula_id: PositiveId
    inscricao_id: PositiveId
    presente: bool
    justificativa: Optional[str] = None


class FrequenciaCreate(SchemaModel):
    aula_id: PositiveId
    inscricao_id: PositiveId
    presente: bool
    justificativa: Optional[str] = None


class FrequenciaUpdate(SchemaModel):
    aula_id: Optional[PositiveId] = None
    inscricao_id: Optional[PositiveId] = None
    presente: Optional[bool] = None
    justificativa: Optional[str] = None


class AulaResumo(SchemaModel):
    id: int
    data: date
    topico: Optional[str] = None


class InscricaoResumo(SchemaModel):
    id: int
    aluno: AlunoIdentificacao


class FrequenciaCompleta(Frequencia):
    aula: AulaResumo
    inscricao: InscricaoResumo


class ConsultaFrequencia(SchemaModel):
    total_aulas: int = Field(..., ge=0)
    faltas: int = Field(..., ge=0)

    @field_validator("faltas")
    @classmethod
    def check_faltas(cls, value, info: ValidationInfo):
        total = info.data.get("total_aulas")
        if total is not None and value > total:
            raise ValueError("faltas não pode ser maior que totalAulas")
        return value


class StatusFrequencia(SchemaModel):
    total_classes: int
    absences: int
    attended_classes: int
    attendance_percentage: float
    absence_percentage: float
    alert_level: NivelAlerta
    alert_message: Optional[str] = None
    needs_alert: bool
