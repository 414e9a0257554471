"""
Integração schemas - bulk import of students/professors from the
Directus CMS, and the candidate records listed before importing.

An import item is a regular "create with user" payload plus the id the
record has in Directus.
"""

from datetime import datetime
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BeforeValidator, Field

from academico.schemas.aluno import AlunoCreateWithUser
from academico.schemas.common import SchemaModel
from academico.schemas.pessoa import Sexo
from academico.schemas.professor import ProfessorCreateWithUser

MAX_IMPORT_ITEMS = 50


def _source_id_to_str(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


SourceId = Annotated[str, BeforeValidator(_source_id_to_str), Field(min_length=1)]


class DirectusAlunoImportItem(AlunoCreateWithUser):
    source_id: SourceId


class DirectusAlunoImport(SchemaModel):
    items: List[DirectusAlunoImportItem] = Field(..., min_length=1, max_length=MAX_IMPORT_ITEMS)


class DirectusProfessorImportItem(ProfessorCreateWithUser):
    source_id: SourceId


class DirectusProfessorImport(SchemaModel):
    items: List[DirectusProfessorImportItem] = Field(..., min_length=1, max_length=MAX_IMPORT_ITEMS)


class CursoCandidato(SchemaModel):
    id: Optional[str] = None
    slug: Optional[str] = None
    title: Optional[str] = None


class DirectusAlunoCandidate(SchemaModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    cellphone: Optional[str] = None
    cpf: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[Sexo] = None
    church: Optional[str] = None
    denomination: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    scheduling_date: Optional[str] = None
    scheduling_time: Optional[str] = None
    status: Optional[str] = None
    course: Optional[CursoCandidato] = None
    created_at: Optional[str] = None


class DirectusProfessorCandidate(SchemaModel):
    id: str
    name: str
    position: Optional[str] = None
    bio: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    qualifications: Optional[str] = None
    photo_url: Optional[str] = None


CandidateT = TypeVar("CandidateT", DirectusAlunoCandidate, DirectusProfessorCandidate)


class CandidatosResponse(SchemaModel, Generic[CandidateT]):
    items: List[CandidateT]
    total: int
    fetched_at: datetime


class ImportResultado(SchemaModel):
    source_id: str
    ra: Optional[str] = None
    matricula: Optional[str] = None


class ImportResponse(SchemaModel):
    success: bool = True
    message: str
    data: List[ImportResultado]
