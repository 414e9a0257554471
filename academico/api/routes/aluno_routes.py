"""
Aluno Routes

POST /alunos - Create student (inline or existing person) with optional login
"""

from fastapi import APIRouter, Depends

from academico.core.auth import require_roles
from academico.db.session import get_db_session
from academico.schemas.aluno import AlunoCreateWithUser
from academico.schemas.common import ApiResponse
from academico.services.cadastro_service import create_aluno_with_user

router = APIRouter(prefix="/alunos", tags=["Alunos"])


@router.post("", response_model=ApiResponse, status_code=201)
def create_aluno(data: AlunoCreateWithUser, user: dict = Depends(require_roles("ADMIN", "SECRETARIA"))):
    """
    Create a student. Either ``pessoaId`` or an inline ``pessoa`` is required;
    ``ra`` is generated from ``anoIngresso`` when omitted.
    """
    with get_db_session() as db:
        resultado = create_aluno_with_user(db, data)

    return ApiResponse(
        success=True,
        message="Aluno criado com sucesso",
        data={
            "aluno": resultado.registro.to_wire(),
            "user": resultado.user.to_wire() if resultado.user else None,
        },
    )
