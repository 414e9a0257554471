"""
Authentication Routes

POST /auth/login - Login with e-mail or username, get token pair
POST /auth/refresh - Rotate tokens from a stored refresh token
GET /auth/me - Get current user info
POST /auth/change-password - Change own password
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text

from academico.core.auth import (
    create_access_token, create_refresh_token, decode_token, get_current_user,
    hash_password, refresh_token_expiry, verify_password,
)
from academico.db.session import get_db_session
from academico.schemas.auth import AuthResponse, EmailLogin, Login, RefreshTokenRequest, UserInfo
from academico.schemas.common import ApiResponse, MessageResponse
from academico.schemas.user import ChangePassword

router = APIRouter(prefix="/auth", tags=["Authentication"])

_USER_COLUMNS = """
    SELECT u.id, u.username, u.password_hash, u.role, u.is_active, p.nome_completo, p.email
    FROM users u JOIN pessoas p ON p.id = u.pessoa_id
"""


def _issue_tokens(db, user_id: int, role: str) -> tuple:
    access_token = create_access_token(user_id, role)
    refresh_token = create_refresh_token(user_id, role)
    db.execute(
        text("""
            UPDATE users SET refresh_token = :token, refresh_token_expires = :expires, updated_at = :now
            WHERE id = :id
        """),
        {"token": refresh_token, "expires": refresh_token_expiry(), "now": datetime.now(), "id": user_id}
    )
    return access_token, refresh_token


@router.post("/login", response_model=ApiResponse)
def login(request: Login):
    """
    Login with ``email`` or ``identifier`` (e-mail or username).

    Include token in requests: Authorization: Bearer <accessToken>
    """
    if isinstance(request, EmailLogin):
        identifier = request.email
    else:
        identifier = request.identifier

    if "@" in identifier:
        where, params = "WHERE LOWER(p.email) = LOWER(:identifier)", {"identifier": identifier}
    else:
        where, params = "WHERE u.username = :identifier", {"identifier": identifier}

    with get_db_session() as db:
        user = db.execute(text(_USER_COLUMNS + where), params).fetchone()

        if not user or not verify_password(request.password, user[2]):
            raise HTTPException(status_code=401, detail="Credenciais inválidas")

        user_id, username, _, role, is_active, nome, email = user
        if is_active != "S":
            raise HTTPException(status_code=403, detail="Usuário inativo")

        access_token, refresh_token = _issue_tokens(db, user_id, role)
        db.execute(text("UPDATE users SET last_login = :now WHERE id = :id"), {"now": datetime.now(), "id": user_id})

    data = AuthResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=UserInfo(id=str(user_id), nome=nome, email=email, role=role),
    )
    return ApiResponse(success=True, message="Login realizado com sucesso", data=data.to_wire())


@router.post("/refresh", response_model=ApiResponse)
async def refresh(request: RefreshTokenRequest):
    """Exchange a valid refresh token for a new token pair; the old one stops working."""
    invalid = HTTPException(status_code=401, detail="Refresh token inválido")

    payload = decode_token(request.refresh_token, refresh=True)
    if not payload or not payload.sub.isdigit():
        raise invalid

    with get_db_session() as db:
        row = db.execute(
            text(_USER_COLUMNS + "WHERE u.id = :id"), {"id": int(payload.sub)}
        ).fetchone()
        stored = db.execute(
            text("SELECT refresh_token, refresh_token_expires FROM users WHERE id = :id"),
            {"id": int(payload.sub)}
        ).fetchone()

        if not row or not stored or stored[0] != request.refresh_token:
            raise invalid
        if _expired(stored[1]):
            raise invalid
        if row[4] != "S":
            raise HTTPException(status_code=403, detail="Usuário inativo")

        access_token, refresh_token = _issue_tokens(db, row[0], row[3])

    data = AuthResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=UserInfo(id=str(row[0]), nome=row[5], email=row[6], role=row[3]),
    )
    return ApiResponse(success=True, message="Token renovado com sucesso", data=data.to_wire())


def _expired(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value < datetime.now(timezone.utc)


@router.get("/me", response_model=ApiResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    info = UserInfo(id=str(user["id"]), nome=user["nome"], email=user["email"], role=user["role"])
    return ApiResponse(success=True, message="Usuário autenticado", data=info.to_wire())


@router.post("/change-password", response_model=MessageResponse)
def change_password(data: ChangePassword, user: dict = Depends(get_current_user)):
    """Change own password; the current password must be confirmed."""
    if not data.current_password:
        raise HTTPException(status_code=400, detail="Senha atual é obrigatória")

    with get_db_session() as db:
        row = db.execute(text("SELECT password_hash FROM users WHERE id = :id"), {"id": user["id"]}).fetchone()
        if not row or not verify_password(data.current_password, row[0]):
            raise HTTPException(status_code=400, detail="Senha atual incorreta")

        db.execute(
            text("""
                UPDATE users SET password_hash = :hash, refresh_token = NULL, updated_at = :now
                WHERE id = :id
            """),
            {"hash": hash_password(data.new_password), "now": datetime.now(), "id": user["id"]}
        )

    return MessageResponse(message="Senha alterada com sucesso")
