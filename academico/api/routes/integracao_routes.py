"""
Integration Routes (Directus CMS) - ADMIN only

GET /integracoes/directus/alunos - Student candidates (?refresh=true skips cache)
GET /integracoes/directus/professores - Professor candidates
POST /integracoes/directus/alunos/importar - Import selected students
POST /integracoes/directus/professores/importar - Import selected professors
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from academico.core.auth import require_roles
from academico.db.session import get_db_session
from academico.schemas.common import ApiResponse
from academico.schemas.integracao import (
    CandidatosResponse, DirectusAlunoCandidate, DirectusAlunoImport,
    DirectusProfessorCandidate, DirectusProfessorImport, ImportResponse,
)
from academico.services.cadastro_service import import_alunos, import_professores
from academico.services.directus_client import DirectusClient, get_directus_client

router = APIRouter(
    prefix="/integracoes/directus",
    tags=["Integrações"],
    dependencies=[Depends(require_roles("ADMIN"))],
)


@router.get("/alunos", response_model=ApiResponse)
def list_aluno_candidates(refresh: bool = False, client: DirectusClient = Depends(get_directus_client)):
    items = client.get_aluno_candidates(refresh=refresh)
    data = CandidatosResponse[DirectusAlunoCandidate](
        items=items, total=len(items), fetched_at=datetime.now(timezone.utc)
    )
    return ApiResponse(success=True, message="Candidatos carregados", data=data.to_wire())


@router.get("/professores", response_model=ApiResponse)
def list_professor_candidates(refresh: bool = False, client: DirectusClient = Depends(get_directus_client)):
    items = client.get_professor_candidates(refresh=refresh)
    data = CandidatosResponse[DirectusProfessorCandidate](
        items=items, total=len(items), fetched_at=datetime.now(timezone.utc)
    )
    return ApiResponse(success=True, message="Candidatos carregados", data=data.to_wire())


@router.post("/alunos/importar", response_model=ImportResponse, status_code=201)
def importar_alunos(payload: DirectusAlunoImport):
    """All items are created in one transaction; any error imports nothing."""
    with get_db_session() as db:
        resultados = import_alunos(db, payload)

    return ImportResponse(message=f"{len(resultados)} aluno(s) importado(s) com sucesso", data=resultados)


@router.post("/professores/importar", response_model=ImportResponse, status_code=201)
def importar_professores(payload: DirectusProfessorImport):
    """All items are created in one transaction; any error imports nothing."""
    with get_db_session() as db:
        resultados = import_professores(db, payload)

    return ImportResponse(message=f"{len(resultados)} professor(es) importado(s) com sucesso", data=resultados)
