"""
Calendar Service - month grid for the academic calendar screen.

Weeks start on Sunday; the first and last weeks are padded with days of
the neighbouring months.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from academico.schemas.calendario import Calendario, DiaCalendario, EventoDoDia, GradeMensal


def _first_sunday_on_or_before(day: date) -> date:
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _last_day_of_month(ano: int, mes: int) -> date:
    if mes == 12:
        return date(ano, 12, 31)
    return date(ano, mes + 1, 1) - timedelta(days=1)


def build_month_grid(
    ano: int,
    mes: int,
    eventos: Iterable[Calendario] = (),
    hoje: Optional[date] = None,
) -> GradeMensal:
    """
    Weeks of seven ``DiaCalendario`` covering the whole month.

    Each day lists the events whose [inicio, termino] contains it.
    """
    primeiro = date(ano, mes, 1)
    ultimo = _last_day_of_month(ano, mes)
    inicio = _first_sunday_on_or_before(primeiro)
    fim = ultimo + timedelta(days=(5 - ultimo.weekday()) % 7)
    hoje = hoje or date.today()
    eventos = list(eventos)

    semanas = []
    semana = []
    dia = inicio
    while dia <= fim:
        semana.append(DiaCalendario(
            data=dia,
            no_mes=dia.month == mes,
            hoje=dia == hoje,
            eventos=[
                EventoDoDia(id=e.id, evento=e.evento)
                for e in eventos if e.inicio <= dia <= e.termino
            ],
        ))
        if len(semana) == 7:
            semanas.append(semana)
            semana = []
        dia += timedelta(days=1)

    return GradeMensal(ano=ano, mes=mes, semanas=semanas)


def load_month_events(db: Session, ano: int, mes: int) -> list:
    """Stored calendar events overlapping the given month."""
    primeiro = date(ano, mes, 1)
    ultimo = _last_day_of_month(ano, mes)
    rows = db.execute(
        text("""
            SELECT id, evento, inicio, termino, obs, periodo_id FROM calendario
            WHERE termino >= :primeiro AND inicio <= :ultimo
            ORDER BY inicio, id
        """),
        {"primeiro": primeiro, "ultimo": ultimo}
    ).mappings().fetchall()
    return [Calendario.model_validate(dict(row)) for row in rows]
