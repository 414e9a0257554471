"""
Lesson Routes

POST /aulas/batch - Generate weekly lessons for a class (dryRun only lists dates)
POST /aulas/{aula_id}/frequencias - Record a lesson's attendance and refresh the percentages
"""

from fastapi import APIRouter, Depends, Path

from academico.core.auth import require_roles
from academico.db.session import get_db_session
from academico.schemas.aula import AulasBatch, LancarFrequencias
from academico.schemas.common import ApiResponse
from academico.services.attendance_service import record_attendance
from academico.services.aula_service import create_lessons_batch

router = APIRouter(prefix="/aulas", tags=["Aulas"])


@router.post("/batch", response_model=ApiResponse)
async def aulas_batch(
    data: AulasBatch,
    user: dict = Depends(require_roles("ADMIN", "SECRETARIA", "PROFESSOR")),
):
    with get_db_session() as db:
        resultado = create_lessons_batch(db, data)

    if data.dry_run:
        message = f"{resultado.total_geradas} aula(s) seriam criadas"
    else:
        message = f"{resultado.total_geradas} aula(s) criada(s)"
    return ApiResponse(success=True, message=message, data=resultado.to_wire(exclude_none=True))


@router.post("/{aula_id}/frequencias", response_model=ApiResponse, status_code=201)
def lancar_frequencias(
    data: LancarFrequencias,
    aula_id: int = Path(..., gt=0),
    user: dict = Depends(require_roles("ADMIN", "SECRETARIA", "PROFESSOR")),
):
    with get_db_session() as db:
        atualizadas = record_attendance(db, aula_id, data)

    return ApiResponse(
        success=True,
        message="Frequências registradas e % atualizada",
        data=[f.to_wire() for f in atualizadas],
    )
