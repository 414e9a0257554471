"""
Aula schemas - one calendar occurrence of a class, its attendance sheet
and the weekly batch generator payload.
"""

from datetime import date
from typing import List, Literal, Optional, Union

from pydantic import Field, ValidationInfo, field_validator

from academico.schemas.aluno import AlunoIdentificacao
from academico.schemas.common import HoraMinuto, PositiveId, SchemaModel, UrlStr, hora_em_minutos


class Aula(SchemaModel):
    id: PositiveId
    turma_id: PositiveId
    data: date
    hora_inicio: Optional[HoraMinuto] = None
    hora_fim: Optional[HoraMinuto] = None
    topico: Optional[str] = None
    material_url: Optional[Union[UrlStr, Literal[""]]] = None
    observacao: Optional[str] = None


class AulaCreate(SchemaModel):
    turma_id: PositiveId
    data: date
    hora_inicio: Optional[HoraMinuto] = None
    hora_fim: Optional[HoraMinuto] = None
    topico: Optional[str] = None
    material_url: Optional[Union[UrlStr, Literal[""]]] = None
    observacao: Optional[str] = None


class AulaUpdate(SchemaModel):
    turma_id: Optional[PositiveId] = None
    data: Optional[date] = None
    hora_inicio: Optional[HoraMinuto] = None
    hora_fim: Optional[HoraMinuto] = None
    topico: Optional[str] = None
    material_url: Optional[Union[UrlStr, Literal[""]]] = None
    observacao: Optional[str] = None


class FrequenciaDaAula(SchemaModel):
    id: int
    inscricao_id: int
    presente: bool
    justificativa: Optional[str] = None
    aluno: AlunoIdentificacao


class AulaComFrequencia(Aula):
    frequencias: List[FrequenciaDaAula]


class AulasBatch(SchemaModel):
    """Generate one lesson per week on ``diaDaSemana`` (0=Sunday .. 6=Saturday)."""
    turma_id: PositiveId
    dia_da_semana: int = Field(..., ge=0, le=6)
    data_inicio: date
    data_fim: date
    hora_inicio: HoraMinuto
    hora_fim: HoraMinuto
    pular_feriados: bool = False
    dry_run: bool = False

    @field_validator("data_fim")
    @classmethod
    def check_periodo(cls, value, info: ValidationInfo):
        inicio = info.data.get("data_inicio")
        if inicio and value < inicio:
            raise ValueError("dataFim deve ser igual ou posterior a dataInicio")
        return value

    @field_validator("hora_fim")
    @classmethod
    def check_horario(cls, value, info: ValidationInfo):
        inicio = info.data.get("hora_inicio")
        if inicio and hora_em_minutos(value) <= hora_em_minutos(inicio):
            raise ValueError("horaFim deve ser maior que horaInicio")
        return value


class AulasBatchResponse(SchemaModel):
    total_geradas: int
    existentes_ignoradas: Optional[int] = None
    datas: Optional[List[date]] = None
    criadas: Optional[List[Aula]] = None


class FrequenciaLancamento(SchemaModel):
    inscricao_id: PositiveId
    presente: bool
    justificativa: Optional[str] = None


class LancarFrequencias(SchemaModel):
    frequencias: List[FrequenciaLancamento] = Field(..., min_length=1)


class FrequenciaAtualizada(SchemaModel):
    inscricao_id: int
    frequencia: Optional[float] = None
