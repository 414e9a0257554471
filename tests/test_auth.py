# tests/test_auth.py

from datetime import timedelta

from jose import jwt
from sqlalchemy import text

from academico.core.auth import (
    create_access_token, create_refresh_token, decode_token, hash_password, load_user, verify_password,
)
from academico.core.config import get_settings
from academico.db.session import get_db_session
from conftest import create_user


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("senha123")
        assert hashed != "senha123"
        assert verify_password("senha123", hashed)
        assert not verify_password("outra-senha", hashed)

    def test_malformed_hash(self):
        assert not verify_password("senha123", "nao-e-um-hash")


class TestTokens:

    def test_access_token_claims(self):
        payload = decode_token(create_access_token(42, "SECRETARIA"))
        assert payload.sub == "42"
        assert payload.role == "SECRETARIA"
        assert payload.type == "access"

    def test_refresh_token_needs_refresh_secret(self):
        token = create_refresh_token(42, "ADMIN")
        assert decode_token(token) is None
        assert decode_token(token, refresh=True).type == "refresh"

    def test_access_token_rejected_as_refresh(self):
        assert decode_token(create_access_token(42, "ADMIN"), refresh=True) is None

    def test_wrong_type_with_same_secret(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "role": "ADMIN", "type": "refresh", "iat": 0, "exp": 4102444800},
            settings.jwt_secret_key, algorithm=settings.jwt_algorithm,
        )
        assert decode_token(token) is None

    def test_expired(self):
        assert decode_token(create_access_token(1, "ADMIN", expires_delta=timedelta(seconds=-10))) is None

    def test_garbage(self):
        assert decode_token("abc.def.ghi") is None

    def test_tokens_are_unique(self):
        assert create_refresh_token(1, "ADMIN") != create_refresh_token(1, "ADMIN")


class TestLoadUser:

    def test_roles_merged(self, db, secretaria):
        db.execute(text("INSERT INTO user_roles (user_id, role) VALUES (:id, 'PROFESSOR')"), {"id": secretaria})
        user = load_user(db, secretaria)
        assert user["username"] == "secretaria"
        assert user["nome"] == "Maria Secretária"
        assert user["roles"] == ["PROFESSOR", "SECRETARIA"]

    def test_unknown(self, db):
        assert load_user(db, 999) is None


class TestLogin:

    def test_login_with_username(self, client, secretaria):
        response = client.post("/api/auth/login", json={"identifier": "secretaria", "password": "senha123"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["tokenType"] == "bearer"
        assert body["data"]["user"] == {
            "id": str(secretaria),
            "nome": "Maria Secretária",
            "email": "secretaria@seminario.edu.br",
            "role": "SECRETARIA",
        }
        assert decode_token(body["data"]["accessToken"]).sub == str(secretaria)

    def test_login_with_email(self, client, secretaria):
        response = client.post("/api/auth/login", json={"email": "Secretaria@seminario.edu.br", "password": "senha123"})
        assert response.status_code == 200

    def test_identifier_may_be_email(self, client, secretaria):
        response = client.post("/api/auth/login", json={"identifier": "secretaria@seminario.edu.br", "password": "senha123"})
        assert response.status_code == 200

    def test_login_stores_refresh_token(self, client, secretaria):
        body = client.post("/api/auth/login", json={"identifier": "secretaria", "password": "senha123"}).json()
        with get_db_session() as db:
            row = db.execute(text("SELECT refresh_token, last_login FROM users WHERE id = :id"), {"id": secretaria}).fetchone()
        assert row[0] == body["data"]["refreshToken"]
        assert row[1] is not None

    def test_wrong_password(self, client, secretaria):
        response = client.post("/api/auth/login", json={"identifier": "secretaria", "password": "errada123"})
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Credenciais inválidas"}

    def test_unknown_user(self, client):
        response = client.post("/api/auth/login", json={"identifier": "ninguem", "password": "senha123"})
        assert response.status_code == 401

    def test_inactive_user(self, client):
        create_user(username="inativo", is_active="N")
        response = client.post("/api/auth/login", json={"identifier": "inativo", "password": "senha123"})
        assert response.status_code == 403
        assert response.json()["message"] == "Usuário inativo"

    def test_invalid_payload(self, client):
        response = client.post("/api/auth/login", json={"password": "senha123"})
        assert response.status_code == 400
        assert response.json()["message"] == "Erro de validação"


class TestRefresh:

    def login(self, client):
        return client.post("/api/auth/login", json={"identifier": "secretaria", "password": "senha123"}).json()["data"]

    def test_rotates_tokens(self, client, secretaria):
        tokens = self.login(client)

        response = client.post("/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]})

        assert response.status_code == 200
        novo = response.json()["data"]["refreshToken"]
        assert novo != tokens["refreshToken"]

        reused = client.post("/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
        assert reused.status_code == 401
        assert reused.json()["message"] == "Refresh token inválido"

    def test_access_token_is_not_a_refresh_token(self, client, secretaria):
        tokens = self.login(client)
        response = client.post("/api/auth/refresh", json={"refreshToken": tokens["accessToken"]})
        assert response.status_code == 401

    def test_token_not_stored(self, client, secretaria):
        response = client.post("/api/auth/refresh", json={"refreshToken": create_refresh_token(secretaria, "SECRETARIA")})
        assert response.status_code == 401


class TestMe:

    def test_me(self, client, auth_headers, secretaria):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(secretaria)

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Token de acesso não fornecido"

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer abc"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token inválido ou expirado"

    def test_deleted_user(self, client):
        headers = {"Authorization": f"Bearer {create_access_token(999, 'ADMIN')}"}
        assert client.get("/api/auth/me", headers=headers).status_code == 401

    def test_inactive_user(self, client):
        user_id = create_user(username="inativo", is_active="N")
        headers = {"Authorization": f"Bearer {create_access_token(user_id, 'SECRETARIA')}"}
        assert client.get("/api/auth/me", headers=headers).status_code == 403


class TestChangePassword:

    def test_changes_password(self, client, auth_headers, secretaria):
        response = client.post("/api/auth/change-password", headers=auth_headers, json={
            "currentPassword": "senha123", "newPassword": "nova-senha", "confirmPassword": "nova-senha",
        })

        assert response.status_code == 200
        assert response.json() == {"message": "Senha alterada com sucesso", "success": True}
        login = client.post("/api/auth/login", json={"identifier": "secretaria", "password": "nova-senha"})
        assert login.status_code == 200

    def test_current_password_required(self, client, auth_headers):
        response = client.post("/api/auth/change-password", headers=auth_headers, json={
            "newPassword": "nova-senha", "confirmPassword": "nova-senha",
        })
        assert response.status_code == 400
        assert response.json()["message"] == "Senha atual é obrigatória"

    def test_wrong_current_password(self, client, auth_headers):
        response = client.post("/api/auth/change-password", headers=auth_headers, json={
            "currentPassword": "errada123", "newPassword": "nova-senha", "confirmPassword": "nova-senha",
        })
        assert response.status_code == 400
        assert response.json()["message"] == "Senha atual incorreta"

    def test_confirmation_mismatch(self, client, auth_headers):
        response = client.post("/api/auth/change-password", headers=auth_headers, json={
            "currentPassword": "senha123", "newPassword": "nova-senha", "confirmPassword": "outra-senha",
        })
        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "confirmPassword", "message": "Senhas não conferem"}]
