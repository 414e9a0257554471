"""
Attendance Routes

POST /frequencias/status - Attendance percentages and absence alert
"""

from fastapi import APIRouter, Depends

from academico.core.auth import get_current_user
from academico.schemas.common import ApiResponse
from academico.schemas.frequencia import ConsultaFrequencia
from academico.services.attendance_service import attendance_status

router = APIRouter(prefix="/frequencias", tags=["Frequências"], dependencies=[Depends(get_current_user)])


@router.post("/status", response_model=ApiResponse)
async def status_frequencia(data: ConsultaFrequencia):
    status = attendance_status(data.total_aulas, data.faltas)
    return ApiResponse(success=True, message="Situação de frequência calculada", data=status.to_wire())
