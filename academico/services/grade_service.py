"""
Grade Service

Grade arithmetic used by the evaluation screens:
- half-up rounding to one decimal (7.25 -> 7.3)
- weighted average of a student's grades
- class average where missing grades count as zero
- weight check (a class's evaluation weights should add up to 100)
- pt-BR display format (comma decimal separator)
- recording an evaluation's grades and refreshing the class averages
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fastapi import HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from academico.schemas.avaliacao import LancarNotas, MediaAtualizada, ValidacaoPesos

logger = logging.getLogger(__name__)

NOTA_MINIMA = 0.0
NOTA_MAXIMA = 10.0
PESO_TOTAL = 100


def round_grade(grade: float) -> float:
    """Half-up to one decimal place: 7.25 -> 7.3, 7.24 -> 7.2, 7.15 -> 7.2."""
    return float(Decimal(str(grade)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def weighted_average(grades: Iterable[Tuple[float, float]]) -> float:
    """
    Weighted average of ``(nota, peso)`` pairs, rounded.

    Returns 0 for no grades or when the weights add up to zero.
    """
    grades = list(grades)
    if not grades:
        return 0.0

    total_weight = sum(peso for _, peso in grades)
    if total_weight == 0:
        return 0.0

    weighted_sum = sum(nota * peso for nota, peso in grades)
    return round_grade(weighted_sum / total_weight)


def class_average(notas: Dict[int, float], pesos: Dict[int, float]) -> Optional[float]:
    """
    Final grade of one student in a class.

    ``pesos`` maps every evaluation of the class to its weight; ``notas``
    maps evaluation id to the student's grade. Evaluations without a grade
    still count in the divisor.
    """
    total_weight = sum(pesos.values())
    if total_weight == 0:
        return None

    weighted_sum = sum(notas.get(avaliacao_id, 0.0) * peso for avaliacao_id, peso in pesos.items())
    return round_grade(weighted_sum / total_weight)


def validate_weights(weights: Sequence[int]) -> ValidacaoPesos:
    """Report whether the weights add up to 100 and by how much they miss."""
    total = sum(weights)
    return ValidacaoPesos(is_valid=total == PESO_TOTAL, total=total, difference=PESO_TOTAL - total)


def validate_grade(grade: float) -> bool:
    return NOTA_MINIMA <= grade <= NOTA_MAXIMA


def format_grade(grade: float) -> str:
    """7.5 -> '7,5'"""
    return f"{round_grade(grade):.1f}".replace(".", ",")


def parse_grade(value: str) -> float:
    """'7,5' or '7.5' -> 7.5. Raises ValueError for anything else."""
    return float(str(value).strip().replace(",", "."))


def record_grades(db: Session, avaliacao_id: int, payload: LancarNotas) -> List[MediaAtualizada]:
    """
    Replace the given students' grades for one evaluation, then refresh
    ``turmas_inscritos.media`` for each of them.

    Runs inside the caller's session; a missing evaluation is a 404 and
    nothing is written.
    """
    avaliacao = db.execute(
        text("SELECT turma_id FROM avaliacoes WHERE id = :id"),
        {"id": avaliacao_id}
    ).fetchone()
    if not avaliacao:
        raise HTTPException(status_code=404, detail="Avaliação não encontrada")
    turma_id = avaliacao[0]

    alunos = []
    for lancamento in payload.notas:
        if lancamento.aluno_id not in alunos:
            alunos.append(lancamento.aluno_id)
        db.execute(
            text("DELETE FROM avaliacoes_alunos WHERE avaliacao_id = :avaliacao_id AND aluno_id = :aluno_id"),
            {"avaliacao_id": avaliacao_id, "aluno_id": lancamento.aluno_id}
        )
        db.execute(
            text("""
                INSERT INTO avaliacoes_alunos (avaliacao_id, aluno_id, nota, obs)
                VALUES (:avaliacao_id, :aluno_id, :nota, :obs)
            """),
            {
                "avaliacao_id": avaliacao_id,
                "aluno_id": lancamento.aluno_id,
                "nota": round(lancamento.nota, 2),
                "obs": lancamento.obs,
            }
        )

    rows = db.execute(
        text("SELECT id, peso FROM avaliacoes WHERE turma_id = :turma_id"),
        {"turma_id": turma_id}
    ).fetchall()
    pesos = {r[0]: float(r[1] or 0) for r in rows}

    medias = []
    for aluno_id in alunos:
        rows = db.execute(
            text("""
                SELECT aa.avaliacao_id, aa.nota
                FROM avaliacoes_alunos aa
                JOIN avaliacoes a ON a.id = aa.avaliacao_id
                WHERE a.turma_id = :turma_id AND aa.aluno_id = :aluno_id
            """),
            {"turma_id": turma_id, "aluno_id": aluno_id}
        ).fetchall()
        media = class_average({r[0]: float(r[1]) for r in rows}, pesos)

        db.execute(
            text("UPDATE turmas_inscritos SET media = :media WHERE turma_id = :turma_id AND aluno_id = :aluno_id"),
            {"media": media, "turma_id": turma_id, "aluno_id": aluno_id}
        )
        medias.append(MediaAtualizada(aluno_id=aluno_id, media=media))

    logger.info("Avaliação %s: %d nota(s) lançada(s), turma %s", avaliacao_id, len(payload.notas), turma_id)
    return medias
