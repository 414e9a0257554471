"""
Avaliacao schemas - gradable assessments of a class and per-student grades.

The weights of a class's evaluations are expected to add up to 100, but
that is only reported (ValidacaoPesos), never enforced here.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import Field

from academico.schemas.aluno import AlunoIdentificacao
from academico.schemas.common import CodigoRA, Nota, PositiveId, SchemaModel, SmallInt, UrlStr


class TipoAvaliacao(str, Enum):
    PROVA = "PROVA"
    TRABALHO = "TRABALHO"
    PARTICIPACAO = "PARTICIPACAO"
    OUTRO = "OUTRO"


class Avaliacao(SchemaModel):
    id: PositiveId
    turma_id: PositiveId
    data: date
    tipo: TipoAvaliacao
    codigo: str = Field(..., max_length=8)
    descricao: str = Field(..., max_length=50)
    peso: SmallInt
    arquivo_url: Optional[UrlStr] = None


class AvaliacaoCreate(SchemaModel):
    turma_id: PositiveId
    data: date
    tipo: TipoAvaliacao
    codigo: str = Field(..., max_length=8)
    descricao: str = Field(..., max_length=50)
    peso: SmallInt
    arquivo_url: Optional[UrlStr] = None


class AvaliacaoUpdate(SchemaModel):
    turma_id: Optional[PositiveId] = None
    data: Optional[date] = None
    tipo: Optional[TipoAvaliacao] = None
    codigo: Optional[str] = Field(None, max_length=8)
    descricao: Optional[str] = Field(None, max_length=50)
    peso: Optional[SmallInt] = None
    arquivo_url: Optional[UrlStr] = None


class AvaliacaoAluno(SchemaModel):
    id: PositiveId
    avaliacao_id: PositiveId
    aluno_id: CodigoRA
    nota: Nota
    obs: Optional[str] = None


class AvaliacaoAlunoCreate(SchemaModel):
    avaliacao_id: PositiveId
    aluno_id: CodigoRA
    nota: Nota
    obs: Optional[str] = None


class AvaliacaoAlunoUpdate(SchemaModel):
    avaliacao_id: Optional[PositiveId] = None
    aluno_id: Optional[CodigoRA] = None
    nota: Optional[Nota] = None
    obs: Optional[str] = None


class NotaLancada(SchemaModel):
    id: int
    aluno_id: str
    nota: float
    obs: Optional[str] = None
    aluno: AlunoIdentificacao


class AvaliacaoComNotas(Avaliacao):
    notas: List[NotaLancada]


class NotaLancamento(SchemaModel):
    aluno_id: CodigoRA
    nota: Nota
    obs: Optional[str] = None


class LancarNotas(SchemaModel):
    notas: List[NotaLancamento] = Field(..., min_length=1)


class MediaAtualizada(SchemaModel):
    """Class average stored on an enrollment after grades are recorded."""
    aluno_id: str
    media: Optional[float] = None


class ValidarPesos(SchemaModel):
    pesos: List[int] = Field(..., min_length=1)


class ValidacaoPesos(SchemaModel):
    is_valid: bool
    total: int
    difference: int
