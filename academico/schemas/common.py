"""
Common schemas - base model, constrained field types and the generic
request/response envelopes shared by every resource.

Wire names are camelCase (``pessoaId``); Python attributes are snake_case
(``pessoa_id``). Both are accepted on input.
"""

import math
import re
from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel


class SchemaModel(BaseModel):
    """Base for every DTO: camelCase aliases, unknown keys stripped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self, **kwargs) -> dict:
        """JSON-ready dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


# ============================================================
# CONSTRAINED TYPES
# ============================================================

def _exact_length(size: int, message: str):
    def check(value: str) -> str:
        if len(value) != size:
            raise ValueError(message)
        return value
    return AfterValidator(check)


def _max_length(size: int):
    def check(value: str) -> str:
        if len(value) > size:
            raise ValueError(f"String deve ter no máximo {size} caractere(s)")
        return value
    return AfterValidator(check)


_CPF_RE = re.compile(r"^\d{11}$")
_HORA_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
_url_adapter = TypeAdapter(HttpUrl)


def _check_cpf(value: str) -> str:
    if not _CPF_RE.match(value):
        raise ValueError("CPF deve ter 11 dígitos")
    return value


def _check_hora(value: str) -> str:
    if not _HORA_RE.match(value):
        raise ValueError("Formato inválido (HH:mm)")
    return value


def _check_url(value: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError("URL inválida") from None
    return value


PositiveId = Annotated[int, Field(gt=0)]
SmallInt = Annotated[int, Field(ge=1, le=32767)]
AnoLetivo = Annotated[int, Field(ge=1900, le=2100)]
Nota = Annotated[float, Field(ge=0, le=10)]

CodigoRA = Annotated[str, _exact_length(8, "RA deve ter 8 caracteres")]
Matricula = Annotated[str, _exact_length(8, "Matrícula deve ter 8 caracteres")]
CPF = Annotated[str, AfterValidator(_check_cpf)]
HoraMinuto = Annotated[str, AfterValidator(_check_hora)]
UrlStr = Annotated[str, AfterValidator(_check_url)]
Email = Annotated[EmailStr, _max_length(120)]


def hora_em_minutos(hora: str) -> int:
    """'7:05' -> 425. Assumes an already validated HoraMinuto."""
    horas, minutos = hora.split(":")
    return int(horas) * 60 + int(minutos)


# ============================================================
# QUERY / PATH PARAMETERS
# ============================================================

class Pagination(SchemaModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Filter(SchemaModel):
    filter: Optional[str] = None
    sort: Optional[str] = None
    order: Literal["asc", "desc"] = "asc"


class DateRange(SchemaModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class IdParam(SchemaModel):
    id: PositiveId


class StringIdParam(SchemaModel):
    id: str = Field(..., min_length=1)


# ============================================================
# RESPONSE ENVELOPES
# ============================================================

class ApiResponse(SchemaModel):
    success: bool
    message: str
    data: Optional[Any] = None


class PaginationMeta(SchemaModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit) if limit else 0)


class PaginatedResponse(SchemaModel):
    success: bool = True
    data: List[Any]
    pagination: PaginationMeta


class MessageResponse(SchemaModel):
    message: str
    success: bool = True


class ErrorDetail(SchemaModel):
    field: str
    message: str


class ErrorResponse(SchemaModel):
    success: bool = False
    message: str
    errors: List[ErrorDetail] = []
