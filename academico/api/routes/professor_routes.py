"""
Professor Routes

POST /professores - Create professor (inline or existing person) with optional login
"""

from fastapi import APIRouter, Depends

from academico.core.auth import require_roles
from academico.db.session import get_db_session
from academico.schemas.common import ApiResponse
from academico.schemas.professor import ProfessorCreateWithUser
from academico.services.cadastro_service import create_professor_with_user

router = APIRouter(prefix="/professores", tags=["Professores"])


@router.post("", response_model=ApiResponse, status_code=201)
def create_professor(
    data: ProfessorCreateWithUser,
    user: dict = Depends(require_roles("ADMIN", "SECRETARIA")),
):
    """Create a professor. Either ``pessoaId`` or an inline ``pessoa`` is required."""
    with get_db_session() as db:
        resultado = create_professor_with_user(db, data)

    return ApiResponse(
        success=True,
        message="Professor criado com sucesso",
        data={
            "professor": resultado.registro.to_wire(),
            "user": resultado.user.to_wire() if resultado.user else None,
        },
    )
