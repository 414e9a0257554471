# tests/conftest.py

import os

# Configuração de testes antes de qualquer import do pacote
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "segredo-de-teste"
os.environ["JWT_REFRESH_SECRET_KEY"] = "segredo-refresh-de-teste"
os.environ["DIRECTUS_URL"] = ""
os.environ["DIRECTUS_EMAIL"] = ""
os.environ["DIRECTUS_PASSWORD"] = ""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from academico.core.auth import create_access_token, hash_password
from academico.db.session import engine, get_db_session
from academico.main import app

DDL = [
    """
    CREATE TABLE pessoas (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        nome_completo TEXT NOT NULL,
        sexo TEXT NOT NULL,
        email TEXT UNIQUE,
        cpf TEXT UNIQUE,
        data_nasc TEXT,
        telefone TEXT,
        endereco TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    """,
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        pessoa_id INTEGER NOT NULL UNIQUE REFERENCES pessoas(id),
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        role TEXT NOT NULL,
        is_active TEXT NOT NULL DEFAULT 'S',
        last_login TEXT,
        password_reset_token TEXT,
        password_reset_expires TEXT,
        refresh_token TEXT,
        refresh_token_expires TEXT,
        created_at TEXT,
        updated_at TEXT
    )
    """,
    """
    CREATE TABLE user_roles (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id),
        role TEXT NOT NULL,
        created_at TEXT,
        updated_at TEXT,
        UNIQUE (user_id, role)
    )
    """,
    """
    CREATE TABLE periodos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        curso_id INTEGER NOT NULL,
        numero INTEGER NOT NULL,
        nome TEXT
    )
    """,
    """
    CREATE TABLE alunos (
        ra TEXT PRIMARY KEY,
        pessoa_id INTEGER NOT NULL REFERENCES pessoas(id),
        curso_id INTEGER NOT NULL,
        turno_id INTEGER,
        coorte_id INTEGER,
        periodo_id INTEGER,
        ano_ingresso INTEGER NOT NULL,
        igreja TEXT,
        situacao TEXT NOT NULL DEFAULT 'ATIVO',
        coeficiente_acad REAL,
        created_at TEXT,
        updated_at TEXT
    )
    """,
    """
    CREATE TABLE professores (
        matricula TEXT PRIMARY KEY,
        pessoa_id INTEGER NOT NULL REFERENCES pessoas(id),
        data_inicio TEXT NOT NULL,
        formacao_acad TEXT,
        situacao TEXT NOT NULL DEFAULT 'ATIVO'
    )
    """,
    """
    CREATE TABLE avaliacoes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        turma_id INTEGER NOT NULL,
        data TEXT NOT NULL,
        tipo TEXT NOT NULL,
        codigo TEXT NOT NULL,
        descricao TEXT NOT NULL,
        peso INTEGER NOT NULL,
        arquivo_url TEXT
    )
    """,
    """
    CREATE TABLE aulas (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        turma_id INTEGER NOT NULL,
        data TEXT NOT NULL,
        hora_inicio TEXT,
        hora_fim TEXT,
        topico TEXT,
        material_url TEXT,
        observacao TEXT
    )
    """,
    """
    CREATE TABLE turmas_inscritos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        turma_id INTEGER NOT NULL,
        aluno_id TEXT NOT NULL,
        media REAL,
        frequencia REAL,
        status TEXT NOT NULL DEFAULT 'MATRICULADO',
        UNIQUE (turma_id, aluno_id)
    )
    """,
    """
    CREATE TABLE avaliacoes_alunos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        avaliacao_id INTEGER NOT NULL REFERENCES avaliacoes(id),
        aluno_id TEXT NOT NULL,
        nota REAL NOT NULL,
        obs TEXT
    )
    """,
    """
    CREATE TABLE frequencias (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        aula_id INTEGER NOT NULL REFERENCES aulas(id),
        inscricao_id INTEGER NOT NULL REFERENCES turmas_inscritos(id),
        presente INTEGER NOT NULL,
        justificativa TEXT
    )
    """,
    """
    CREATE TABLE calendario (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        evento TEXT NOT NULL,
        inicio TEXT NOT NULL,
        termino TEXT NOT NULL,
        obs TEXT,
        periodo_id INTEGER
    )
    """,
]

TABLES = [
    "user_roles", "users", "alunos", "professores", "pessoas", "periodos",
    "avaliacoes_alunos", "frequencias", "turmas_inscritos", "avaliacoes", "aulas", "calendario",
]


@pytest.fixture(scope="session", autouse=True)
def schema():
    """Cria as tabelas no banco SQLite em memória uma única vez."""
    with engine.begin() as conn:
        for statement in DDL:
            conn.execute(text(statement))
    yield


@pytest.fixture(autouse=True)
def clean_tables():
    """Limpa todas as tabelas após cada teste."""
    yield
    with engine.begin() as conn:
        for table in TABLES:
            conn.execute(text(f"DELETE FROM {table}"))


@pytest.fixture
def db():
    """Sessão transacional, confirmada ao final do teste."""
    with get_db_session() as session:
        yield session


@pytest.fixture
def client():
    """Cliente HTTP da aplicação."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_user(username="secretaria", password="senha123", role="SECRETARIA", is_active="S",
                nome="Maria Secretária", email=None):
    """Insere pessoa + usuário e devolve o id do usuário."""
    now = datetime.now()
    with get_db_session() as session:
        pessoa_id = session.execute(
            text("""
                INSERT INTO pessoas (nome_completo, sexo, email, created_at, updated_at)
                VALUES (:nome, 'F', :email, :now, :now) RETURNING id
            """),
            {"nome": nome, "email": email or f"{username}@seminario.edu.br", "now": now}
        ).fetchone()[0]
        user_id = session.execute(
            text("""
                INSERT INTO users (pessoa_id, username, password_hash, role, is_active, created_at, updated_at)
                VALUES (:pessoa_id, :username, :hash, :role, :ativo, :now, :now) RETURNING id
            """),
            {"pessoa_id": pessoa_id, "username": username, "hash": hash_password(password),
             "role": role, "ativo": is_active, "now": now}
        ).fetchone()[0]
    return user_id


@pytest.fixture
def secretaria():
    """Usuário SECRETARIA ativo."""
    return create_user()


@pytest.fixture
def admin():
    """Usuário ADMIN ativo."""
    return create_user(username="admin", password="admin123", role="ADMIN", nome="Administrador")


@pytest.fixture
def auth_headers(secretaria):
    return {"Authorization": f"Bearer {create_access_token(secretaria, 'SECRETARIA')}"}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin, 'ADMIN')}"}
