"""
Attendance Service

Attendance percentages and the absence alert shown on a student's
record. A student fails by attendance above 25% absences; the warning
starts at 20%.

Recording a lesson's attendance also refreshes the percentage stored
on each enrollment.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from academico.schemas.aula import FrequenciaAtualizada, LancarFrequencias
from academico.schemas.frequencia import NivelAlerta, StatusFrequencia

logger = logging.getLogger(__name__)

LIMITE_CRITICO = 25.0
LIMITE_AVISO = 20.0


def _two_decimals(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def attendance_percentage(total_classes: int, absences: int) -> float:
    """Attended share of classes; 100 when no class was given yet."""
    if total_classes == 0:
        return 100.0
    return _two_decimals((total_classes - absences) / total_classes * 100)


def absence_percentage(total_classes: int, absences: int) -> float:
    """Absent share of classes; 0 when no class was given yet."""
    if total_classes == 0:
        return 0.0
    return _two_decimals(absences / total_classes * 100)


def presence_percentage(presentes: int, total_aulas: int) -> Optional[float]:
    """Percentage stored on an enrollment after attendance is recorded."""
    if total_aulas <= 0:
        return None
    return _two_decimals(presentes / total_aulas * 100)


def alert_level(total_classes: int, absences: int) -> NivelAlerta:
    percentage = absence_percentage(total_classes, absences)
    if percentage >= LIMITE_CRITICO:
        return "critical"
    if percentage >= LIMITE_AVISO:
        return "warning"
    return "normal"


def alert_message(level: NivelAlerta, absence_pct: float) -> Optional[str]:
    if level == "critical":
        return (
            f"ATENÇÃO: Aluno excedeu 25% de faltas ({absence_pct:.1f}%). "
            "Risco de reprovação por frequência."
        )
    if level == "warning":
        return (
            f"AVISO: Aluno se aproxima do limite de faltas ({absence_pct:.1f}%). "
            "Limite máximo: 25%."
        )
    return None


def needs_alert(total_classes: int, absences: int) -> bool:
    return alert_level(total_classes, absences) != "normal"


def attendance_status(total_classes: int, absences: int) -> StatusFrequencia:
    """Everything the attendance card shows for one enrollment."""
    if total_classes < 0 or absences < 0:
        raise ValueError("Valores de frequência não podem ser negativos")
    if absences > total_classes:
        raise ValueError("faltas não pode ser maior que totalAulas")

    absence_pct = absence_percentage(total_classes, absences)
    level = alert_level(total_classes, absences)
    return StatusFrequencia(
        total_classes=total_classes,
        absences=absences,
        attended_classes=total_classes - absences,
        attendance_percentage=attendance_percentage(total_classes, absences),
        absence_percentage=absence_pct,
        alert_level=level,
        alert_message=alert_message(level, absence_pct),
        needs_alert=level != "normal",
    )


def record_attendance(db: Session, aula_id: int, payload: LancarFrequencias) -> List[FrequenciaAtualizada]:
    """
    Replace the lesson's attendance rows for the given enrollments and
    store each enrollment's presence over all lessons of the class.
    """
    aula = db.execute(text("SELECT turma_id FROM aulas WHERE id = :id"), {"id": aula_id}).fetchone()
    if not aula:
        raise HTTPException(status_code=404, detail="Aula não encontrada")
    turma_id = aula[0]

    inscricoes = []
    for lancamento in payload.frequencias:
        if lancamento.inscricao_id not in inscricoes:
            inscricoes.append(lancamento.inscricao_id)
        db.execute(
            text("DELETE FROM frequencias WHERE aula_id = :aula_id AND inscricao_id = :inscricao_id"),
            {"aula_id": aula_id, "inscricao_id": lancamento.inscricao_id}
        )
        db.execute(
            text("""
                INSERT INTO frequencias (aula_id, inscricao_id, presente, justificativa)
                VALUES (:aula_id, :inscricao_id, :presente, :justificativa)
            """),
            {
                "aula_id": aula_id,
                "inscricao_id": lancamento.inscricao_id,
                "presente": lancamento.presente,
                "justificativa": lancamento.justificativa,
            }
        )

    total_aulas = db.execute(
        text("SELECT COUNT(*) FROM aulas WHERE turma_id = :turma_id"),
        {"turma_id": turma_id}
    ).scalar()

    resultado = []
    for inscricao_id in inscricoes:
        presentes = db.execute(
            text("""
                SELECT COUNT(*)
                FROM frequencias f
                JOIN aulas a ON a.id = f.aula_id
                WHERE a.turma_id = :turma_id AND f.inscricao_id = :inscricao_id AND f.presente = :presente
            """),
            {"turma_id": turma_id, "inscricao_id": inscricao_id, "presente": True}
        ).scalar()
        frequencia = presence_percentage(presentes, total_aulas)

        if frequencia is not None:
            db.execute(
                text("UPDATE turmas_inscritos SET frequencia = :frequencia WHERE id = :id"),
                {"frequencia": frequencia, "id": inscricao_id}
            )
        resultado.append(FrequenciaAtualizada(inscricao_id=inscricao_id, frequencia=frequencia))

    logger.info("Aula %s: %d frequência(s) registrada(s), turma %s", aula_id, len(payload.frequencias), turma_id)
    return resultado
