"""
Aula Service

Weekly lesson generation for a class: one lesson per week on a given
weekday between two dates, optionally skipping calendar events
(holidays, breaks) and dates that already have a lesson.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Tuple

from sqlalchemy import text
from sqlalchemy.orm import Session

from academico.schemas.aula import Aula, AulasBatch, AulasBatchResponse

logger = logging.getLogger(__name__)


@dataclass
class DatasGeradas:
    datas: List[date] = field(default_factory=list)
    existentes_ignoradas: int = 0


def python_weekday(dia_da_semana: int) -> int:
    """0=Sunday..6=Saturday -> date.weekday() (0=Monday..6=Sunday)."""
    return (dia_da_semana - 1) % 7


def weekly_dates(inicio: date, fim: date, dia_da_semana: int) -> List[date]:
    """Every date in [inicio, fim] that falls on ``dia_da_semana`` (0=Sunday)."""
    alvo = python_weekday(dia_da_semana)
    atual = inicio + timedelta(days=(alvo - inicio.weekday()) % 7)
    datas = []
    while atual <= fim:
        datas.append(atual)
        atual += timedelta(days=7)
    return datas


def generate_lesson_dates(
    batch: AulasBatch,
    feriados: Iterable[Tuple[date, date]] = (),
    existentes: Iterable[date] = (),
) -> DatasGeradas:
    """
    Dates the batch would create.

    ``feriados`` are ``(inicio, termino)`` calendar ranges, only honored
    when ``pularFeriados`` is set. ``existentes`` are dates that already
    have a lesson for the class; they are skipped and counted.
    """
    datas = weekly_dates(batch.data_inicio, batch.data_fim, batch.dia_da_semana)

    if batch.pular_feriados:
        feriados = list(feriados)
        datas = [d for d in datas if not any(inicio <= d <= termino for inicio, termino in feriados)]

    ja_existem = set(existentes)
    resultado = DatasGeradas()
    for d in datas:
        if d in ja_existem:
            resultado.existentes_ignoradas += 1
        else:
            resultado.datas.append(d)
    return resultado


def create_lessons_batch(db: Session, batch: AulasBatch) -> AulasBatchResponse:
    """
    Generate the batch against stored events and lessons; insert unless dry run.

    Runs inside the caller's session so the inserts commit together.
    """
    feriados = []
    if batch.pular_feriados:
        rows = db.execute(
            text("""
                SELECT inicio, termino FROM calendario
                WHERE termino >= :inicio AND inicio <= :fim
            """),
            {"inicio": batch.data_inicio, "fim": batch.data_fim}
        ).fetchall()
        feriados = [(_as_date(r[0]), _as_date(r[1])) for r in rows]

    existentes = db.execute(
        text("SELECT data FROM aulas WHERE turma_id = :turma_id AND data BETWEEN :inicio AND :fim"),
        {"turma_id": batch.turma_id, "inicio": batch.data_inicio, "fim": batch.data_fim}
    ).fetchall()

    geradas = generate_lesson_dates(batch, feriados, [_as_date(r[0]) for r in existentes])

    if batch.dry_run:
        return AulasBatchResponse(
            total_geradas=len(geradas.datas),
            existentes_ignoradas=geradas.existentes_ignoradas,
            datas=geradas.datas,
        )

    criadas = []
    for data in geradas.datas:
        row = db.execute(
            text("""
                INSERT INTO aulas (turma_id, data, hora_inicio, hora_fim)
                VALUES (:turma_id, :data, :hora_inicio, :hora_fim)
                RETURNING id, turma_id, data, hora_inicio, hora_fim, topico, material_url, observacao
            """),
            {
                "turma_id": batch.turma_id,
                "data": data,
                "hora_inicio": batch.hora_inicio,
                "hora_fim": batch.hora_fim,
            }
        ).mappings().fetchone()
        criadas.append(Aula.model_validate({**row, "data": _as_date(row["data"])}))

    logger.info("Turma %s: %d aula(s) criada(s), %d ignorada(s)",
                batch.turma_id, len(criadas), geradas.existentes_ignoradas)

    return AulasBatchResponse(
        total_geradas=len(criadas),
        existentes_ignoradas=geradas.existentes_ignoradas,
        criadas=criadas,
    )


def _as_date(value) -> date:
    # sqlite hands dates back as ISO text
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value
