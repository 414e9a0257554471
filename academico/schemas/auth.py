"""
Auth schemas - login payloads, token pair and the JWT claims.
"""

from typing import Literal, Optional, Union

from pydantic import EmailStr, Field

from academico.schemas.common import SchemaModel
from academico.schemas.user import Role


class EmailLogin(SchemaModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    remember_me: bool = False


class IdentifierLogin(SchemaModel):
    """``identifier`` is an e-mail or a username."""
    identifier: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    remember_me: bool = False


Login = Union[EmailLogin, IdentifierLogin]


class JwtPayload(SchemaModel):
    sub: str
    role: Role
    exp: int
    iat: int
    type: Literal["access", "refresh"] = "access"


class RefreshTokenRequest(SchemaModel):
    refresh_token: str


class UserInfo(SchemaModel):
    id: str
    nome: str
    email: Optional[str] = None
    role: Role


class AuthResponse(SchemaModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserInfo
