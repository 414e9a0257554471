"""
Calendar Routes

GET /calendario/grade?ano=2025&mes=3 - Month grid with stored events
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from academico.core.auth import get_current_user
from academico.db.session import get_db_session
from academico.schemas.common import ApiResponse
from academico.services.calendar_service import build_month_grid, load_month_events

router = APIRouter(prefix="/calendario", tags=["Calendário"], dependencies=[Depends(get_current_user)])


@router.get("/grade", response_model=ApiResponse)
async def grade_mensal(
    ano: Optional[int] = Query(None, ge=1900, le=2100),
    mes: Optional[int] = Query(None, ge=1, le=12),
):
    """Defaults to the current month."""
    hoje = date.today()
    ano = ano or hoje.year
    mes = mes or hoje.month

    with get_db_session() as db:
        eventos = load_month_events(db, ano, mes)

    grade = build_month_grid(ano, mes, eventos, hoje=hoje)
    return ApiResponse(success=True, message="Calendário carregado", data=grade.to_wire())
