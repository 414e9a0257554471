"""
Evaluation Routes

POST /avaliacoes/validar-pesos - Check a list of weights (sum must be 100)
GET /turmas/{turma_id}/avaliacoes/validacao-pesos - Check the weights stored for a class
POST /avaliacoes/{avaliacao_id}/notas - Record grades and refresh the students' class averages
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy import text

from academico.core.auth import get_current_user, require_roles
from academico.db.session import get_db_session
from academico.schemas.avaliacao import LancarNotas, ValidacaoPesos, ValidarPesos
from academico.schemas.common import ApiResponse
from academico.services.grade_service import record_grades, validate_weights

router = APIRouter(tags=["Avaliações"], dependencies=[Depends(get_current_user)])


@router.post("/avaliacoes/validar-pesos", response_model=ApiResponse)
async def validar_pesos(data: ValidarPesos):
    resultado = validate_weights(data.pesos)
    return ApiResponse(success=True, message=_mensagem(resultado), data=resultado.to_wire())


@router.get("/turmas/{turma_id}/avaliacoes/validacao-pesos", response_model=ApiResponse)
async def validacao_pesos_turma(turma_id: int = Path(..., gt=0)):
    """Weights of every evaluation already registered for the class."""
    with get_db_session() as db:
        rows = db.execute(
            text("SELECT peso FROM avaliacoes WHERE turma_id = :turma_id ORDER BY data, id"),
            {"turma_id": turma_id}
        ).fetchall()

    resultado = validate_weights([r[0] for r in rows])
    return ApiResponse(success=True, message=_mensagem(resultado), data=resultado.to_wire())


@router.post("/avaliacoes/{avaliacao_id}/notas", response_model=ApiResponse, status_code=201)
def lancar_notas(
    data: LancarNotas,
    avaliacao_id: int = Path(..., gt=0),
    user: dict = Depends(require_roles("ADMIN", "SECRETARIA", "PROFESSOR")),
):
    with get_db_session() as db:
        medias = record_grades(db, avaliacao_id, data)

    return ApiResponse(
        success=True,
        message="Notas lançadas e médias atualizadas",
        data=[m.to_wire() for m in medias],
    )


def _mensagem(resultado: ValidacaoPesos) -> str:
    if resultado.is_valid:
        return "Pesos somam 100"
    if resultado.difference > 0:
        return f"Faltam {resultado.difference} pontos para 100"
    return f"Pesos excedem 100 em {-resultado.difference} pontos"
