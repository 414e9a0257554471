"""
Seminário Acadêmico - Main Application

FastAPI backend with:
- PostgreSQL for all academic records (raw SQL through SQLAlchemy)
- JWT authentication with role guards
- Directus CMS integration for importing students and professors

Run: uvicorn academico.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from academico import __version__
from academico.api.routes import api_router
from academico.core.config import get_settings
from academico.schemas.common import ErrorResponse
from academico.utils.validation import format_validation_errors

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Seminário Acadêmico",
    description="""
    Academic administration API for a theological seminary.

    ## Features
    - **Authentication**: JWT access/refresh tokens, roles ADMIN, SECRETARIA, PROFESSOR, ALUNO
    - **Cadastro**: students and professors created with their person record and login
    - **Avaliações**: weight validation for a class's evaluations
    - **Frequência**: attendance percentages and absence alerts
    - **Aulas**: weekly lesson generation skipping holidays
    - **Calendário**: month grid with academic events
    - **Integrações**: import of candidates from Directus
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# ============================================================
# ERROR HANDLERS
# ============================================================

def _validation_response(errors) -> JSONResponse:
    body = ErrorResponse(message="Erro de validação", errors=format_validation_errors(errors))
    return JSONResponse(status_code=400, content=body.to_wire())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _validation_response(exc.errors())


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return _validation_response(exc.errors())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "message": "Erro interno do servidor"})


@app.on_event("startup")
async def startup_event():
    logger.info("Seminário Acadêmico %s iniciado (Directus %s)",
                __version__, "ativo" if settings.directus_enabled else "desativado")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Seminário Acadêmico", "docs": "/docs"}
