"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- Access / refresh JWT creation and verification
- FastAPI dependencies for protected routes and role guards
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from sqlalchemy import text

from academico.core.config import get_settings
from academico.db.session import get_db_session
from academico.schemas.auth import JwtPayload

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

# Bearer token extractor; missing header is reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # malformed hash stored for the user
        return False


def _encode(user_id, role: str, token_type: str, expires_delta: timedelta, secret: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    return _encode(
        user_id, role, "access",
        expires_delta or timedelta(minutes=settings.jwt_expire_minutes),
        settings.jwt_secret_key,
    )


def create_refresh_token(user_id, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT refresh token, signed with its own secret."""
    return _encode(
        user_id, role, "refresh",
        expires_delta or timedelta(days=settings.jwt_refresh_expire_days),
        settings.jwt_refresh_secret_key,
    )


def refresh_token_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=settings.jwt_refresh_expire_days)


def decode_token(token: str, refresh: bool = False) -> Optional[JwtPayload]:
    """Decode and verify a JWT; None when invalid, expired or of the other type."""
    secret = settings.jwt_refresh_secret_key if refresh else settings.jwt_secret_key
    try:
        payload = JwtPayload.model_validate(
            jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
        )
    except (JWTError, ValidationError):
        return None

    if payload.type != ("refresh" if refresh else "access"):
        return None
    return payload


def load_user(db, user_id: int) -> Optional[dict]:
    """User row joined with the person's name, plus every granted role."""
    row = db.execute(
        text("""
            SELECT u.id, u.username, u.role, u.is_active, p.nome_completo, p.email
            FROM users u JOIN pessoas p ON p.id = u.pessoa_id
            WHERE u.id = :id
        """),
        {"id": user_id}
    ).fetchone()
    if not row:
        return None

    roles = {row[2]}
    extra = db.execute(text("SELECT role FROM user_roles WHERE user_id = :id"), {"id": user_id})
    roles.update(r[0] for r in extra.fetchall())

    return {
        "id": row[0],
        "username": row[1],
        "role": row[2],
        "is_active": row[3],
        "nome": row[4],
        "email": row[5],
        "roles": sorted(roles),
    }


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token inválido ou expirado",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token de acesso não fornecido",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    if not payload or not payload.sub.isdigit():
        raise credentials_exception

    with get_db_session() as db:
        user = load_user(db, int(payload.sub))

    if not user:
        raise credentials_exception

    if user["is_active"] != "S":
        raise HTTPException(status_code=403, detail="Usuário inativo")

    return user


def require_roles(*roles: str):
    """
    Dependency factory - allow only users holding one of ``roles``.

    Usage:
        @router.post("/alunos", dependencies=[Depends(require_roles("ADMIN", "SECRETARIA"))])
    """
    async def checker(user: dict = Depends(get_current_user)) -> dict:
        if not set(user["roles"]) & set(roles):
            raise HTTPException(status_code=403, detail="Acesso negado para este perfil")
        return user

    return checker
