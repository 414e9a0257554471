"""
Turma schemas - one offering (section) of a subject taught by a professor,
and the enrollments (inscrições) attached to it.
"""

from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BeforeValidator, Field, ValidationInfo, field_validator

from academico.schemas.aluno import AlunoResumo
from academico.schemas.common import CodigoRA, Matricula, PositiveId, SchemaModel
from academico.schemas.coorte import CoorteResumo
from academico.schemas.periodo import PeriodoResumo
from academico.schemas.professor import ProfessorResumo


class StatusInscricao(str, Enum):
    MATRICULADO = "MATRICULADO"
    CANCELADO = "CANCELADO"
    APROVADO = "APROVADO"
    REPROVADO = "REPROVADO"


def _to_decimal(value: Any) -> Optional[float]:
    """Decimal columns arrive as numbers or numeric strings."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return float(value.replace(",", "."))
        except ValueError:
            return None
    return float(value)


OptionalDecimal = Annotated[Optional[float], BeforeValidator(_to_decimal)]


class DisciplinaResumo(SchemaModel):
    id: int
    codigo: str
    nome: str
    creditos: Optional[int] = None
    carga_horaria: Optional[int] = None
    periodo_id: Optional[int] = None
    curso_id: Optional[int] = None
    periodo: Optional[PeriodoResumo] = None


class Turma(SchemaModel):
    id: PositiveId
    disciplina_id: PositiveId
    professor_id: Matricula
    coorte_id: Optional[int] = None
    sala: Optional[str] = Field(None, max_length=20)
    horario: Optional[str] = Field(None, max_length=50)
    secao: Optional[str] = Field(None, max_length=6)
    total_inscritos: Optional[int] = Field(None, ge=0)


class TurmaCreate(SchemaModel):
    disciplina_id: PositiveId
    professor_id: Matricula
    coorte_id: Optional[int] = None
    sala: Optional[str] = Field(None, max_length=20)
    horario: Optional[str] = Field(None, max_length=50)
    secao: Optional[str] = Field(None, max_length=6)


class TurmaUpdate(SchemaModel):
    disciplina_id: Optional[PositiveId] = None
    professor_id: Optional[Matricula] = None
    coorte_id: Optional[int] = None
    sala: Optional[str] = Field(None, max_length=20)
    horario: Optional[str] = Field(None, max_length=50)
    secao: Optional[str] = Field(None, max_length=6)


class TurmaInscrito(SchemaModel):
    id: int
    turma_id: int
    aluno_id: str
    media: OptionalDecimal = None
    frequencia: OptionalDecimal = None
    status: StatusInscricao
    aluno: Optional[AlunoResumo] = None


class TurmaCompleta(Turma):
    disciplina: Optional[DisciplinaResumo] = None
    professor: Optional[ProfessorResumo] = None
    coorte: Optional[CoorteResumo] = None
    inscritos: Optional[List[TurmaInscrito]] = None


class TurmaInscricaoCreate(SchemaModel):
    aluno_id: CodigoRA
    status: Optional[StatusInscricao] = None


class TurmaInscricaoBulk(SchemaModel):
    coorte_id: Optional[PositiveId] = None
    status: Optional[StatusInscricao] = None
    aluno_ids: Optional[List[CodigoRA]] = Field(None, validate_default=True)

    @field_validator("aluno_ids")
    @classmethod
    def check_alvo(cls, value, info: ValidationInfo):
        if not value and info.data.get("coorte_id") is None:
            raise ValueError("Informe alunoIds ou coorteId")
        return value


class TurmaInscricaoUpdate(SchemaModel):
    status: Optional[StatusInscricao] = None
