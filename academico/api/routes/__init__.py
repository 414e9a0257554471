"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from academico.api.routes.health_routes import router as health_router
from academico.api.routes.auth_routes import router as auth_router
from academico.api.routes.aluno_routes import router as aluno_router
from academico.api.routes.professor_routes import router as professor_router
from academico.api.routes.avaliacao_routes import router as avaliacao_router
from academico.api.routes.frequencia_routes import router as frequencia_router
from academico.api.routes.aula_routes import router as aula_router
from academico.api.routes.calendario_routes import router as calendario_router
from academico.api.routes.integracao_routes import router as integracao_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(aluno_router)
api_router.include_router(professor_router)
api_router.include_router(avaliacao_router)
api_router.include_router(frequencia_router)
api_router.include_router(aula_router)
api_router.include_router(calendario_router)
api_router.include_router(integracao_router)
