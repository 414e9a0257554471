"""
DisciplinaPeriodo schemas - the link between a subject and a period,
carrying display order and whether the subject is mandatory there.
"""

from typing import Optional

from pydantic import ConfigDict, field_validator, model_validator

from academico.schemas.common import PositiveId, SchemaModel, SmallInt


def _not_null(value):
    if value is None:
        raise ValueError("Campo não pode ser nulo")
    return value


class DisciplinaPeriodo(SchemaModel):
    disciplina_id: PositiveId
    periodo_id: PositiveId
    ordem: Optional[SmallInt] = None
    obrigatoria: bool = True


class DisciplinaPeriodoCreate(SchemaModel):
    model_config = ConfigDict(extra="forbid")

    disciplina_id: PositiveId
    periodo_id: PositiveId
    ordem: Optional[SmallInt] = None
    obrigatoria: bool = True

    # Omitting a field is fine; sending null is not
    @field_validator("ordem", "obrigatoria", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)


class DisciplinaPeriodoUpdate(SchemaModel):
    ordem: Optional[SmallInt] = None
    obrigatoria: Optional[bool] = None

    @field_validator("ordem", "obrigatoria", mode="before")
    @classmethod
    def reject_null(cls, value):
        return _not_null(value)

    @model_validator(mode="after")
    def check_not_empty(self):
        if self.ordem is None and self.obrigatoria is None:
            raise ValueError("Informe pelo menos um campo para atualizar")
        return self
