"""
Cadastro Service

Creates a student or professor together with its person record and,
optionally, its login - all inside the caller's transaction, so either
everything is stored or nothing is.

Every function takes an open session from ``get_db_session()``; raising
HTTPException inside the ``with`` block rolls the whole unit back.

Rules:
- RA / matrícula must be unused (409)
- inline person: CPF and e-mail must be unused (409)
- referenced person must exist (404)
- a person that already has a login gets the new role added to it
- RA is generated as YYYY + 4-digit sequence when not supplied
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union

from fastapi import HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from academico.core.auth import hash_password
from academico.schemas.aluno import Aluno, AlunoCreateWithUser
from academico.schemas.integracao import DirectusAlunoImport, DirectusProfessorImport, ImportResultado
from academico.schemas.pessoa import PessoaCreate
from academico.schemas.professor import Professor, ProfessorCreateWithUser
from academico.schemas.user import UserResumo
from academico.utils.endereco import encode_endereco

logger = logging.getLogger(__name__)

RA_SEQUENCIA_MAX = 9999


@dataclass
class CadastroResultado:
    registro: Union[Aluno, Professor]
    user: Optional[UserResumo] = None


# ============================================================
# RA
# ============================================================

def generate_ra(db: Session, ano_ingresso: int) -> str:
    """First free RA of the year: 2025 -> '20250001', '20250002', ..."""
    ano = str(ano_ingresso)
    rows = db.execute(
        text("SELECT ra FROM alunos WHERE ra LIKE :prefixo"),
        {"prefixo": f"{ano}%"}
    ).fetchall()
    usados = {r[0].strip() for r in rows}

    for sequencial in range(1, RA_SEQUENCIA_MAX + 1):
        ra = f"{ano}{sequencial:04d}"
        if ra not in usados:
            return ra

    raise HTTPException(status_code=409, detail=f"Não foi possível gerar RA único para o ano {ano}")


# ============================================================
# PESSOA / USER HELPERS
# ============================================================

def _insert_pessoa(db: Session, pessoa: PessoaCreate) -> int:
    if pessoa.cpf:
        found = db.execute(text("SELECT id FROM pessoas WHERE cpf = :cpf"), {"cpf": pessoa.cpf}).fetchone()
        if found:
            raise HTTPException(status_code=409, detail=f"CPF {pessoa.cpf} já cadastrado")
    if pessoa.email:
        found = db.execute(
            text("SELECT id FROM pessoas WHERE LOWER(email) = LOWER(:email)"),
            {"email": pessoa.email}
        ).fetchone()
        if found:
            raise HTTPException(status_code=409, detail=f"Email {pessoa.email} já cadastrado")

    now = datetime.now()
    row = db.execute(
        text("""
            INSERT INTO pessoas (nome_completo, sexo, email, cpf, data_nasc, telefone, endereco, created_at, updated_at)
            VALUES (:nome_completo, :sexo, :email, :cpf, :data_nasc, :telefone, :endereco, :created_at, :updated_at)
            RETURNING id
        """),
        {
            "nome_completo": pessoa.nome_completo,
            "sexo": pessoa.sexo.value,
            "email": pessoa.email,
            "cpf": pessoa.cpf,
            "data_nasc": pessoa.data_nasc,
            "telefone": pessoa.telefone,
            "endereco": encode_endereco(pessoa.endereco),
            "created_at": now,
            "updated_at": now,
        }
    ).fetchone()
    return row[0]


def _resolve_pessoa(db: Session, pessoa_id: Optional[int], pessoa: Optional[PessoaCreate]) -> int:
    if pessoa_id is None and pessoa is not None:
        return _insert_pessoa(db, pessoa)

    if pessoa_id is None:
        raise HTTPException(status_code=400, detail="pessoaId é obrigatório (ou forneça pessoa inline)")

    found = db.execute(text("SELECT id FROM pessoas WHERE id = :id"), {"id": pessoa_id}).fetchone()
    if not found:
        raise HTTPException(status_code=404, detail=f"Pessoa {pessoa_id} não encontrada")
    return pessoa_id


def _grant_role(db: Session, user_id: int, role: str) -> None:
    now = datetime.now()
    db.execute(
        text("""
            INSERT INTO user_roles (user_id, role, created_at, updated_at)
            VALUES (:user_id, :role, :created_at, :updated_at)
            ON CONFLICT (user_id, role) DO NOTHING
        """),
        {"user_id": user_id, "role": role, "created_at": now, "updated_at": now}
    )


def _existing_user(db: Session, pessoa_id: int) -> Optional[UserResumo]:
    row = db.execute(
        text("SELECT id, username FROM users WHERE pessoa_id = :pessoa_id"),
        {"pessoa_id": pessoa_id}
    ).fetchone()
    return UserResumo(id=row[0], username=row[1]) if row else None


def _provision_user(db: Session, pessoa_id: int, role: str, payload) -> Optional[UserResumo]:
    """
    Grant ``role`` to the person's login, creating the login when asked.

    An existing login always receives the role; a new one is created only
    with ``createUser`` and its username must be free.
    """
    existing = _existing_user(db, pessoa_id)
    if existing:
        _grant_role(db, existing.id, role)
        return existing if payload.create_user else None

    if not payload.create_user:
        return None

    taken = db.execute(
        text("SELECT id FROM users WHERE username = :username"),
        {"username": payload.username}
    ).fetchone()
    if taken:
        raise HTTPException(status_code=409, detail=f"Usuário {payload.username} já está em uso")

    now = datetime.now()
    row = db.execute(
        text("""
            INSERT INTO users (pessoa_id, username, password_hash, role, is_active, created_at, updated_at)
            VALUES (:pessoa_id, :username, :password_hash, :role, 'S', :created_at, :updated_at)
            RETURNING id, username
        """),
        {
            "pessoa_id": pessoa_id,
            "username": payload.username,
            "password_hash": hash_password(payload.password),
            "role": role,
            "created_at": now,
            "updated_at": now,
        }
    ).fetchone()
    _grant_role(db, row[0], role)
    return UserResumo(id=row[0], username=row[1])


# ============================================================
# ALUNO / PROFESSOR
# ============================================================

def _check_periodo(db: Session, curso_id: int, periodo_id: Optional[int]) -> None:
    if not periodo_id:
        return
    row = db.execute(text("SELECT curso_id FROM periodos WHERE id = :id"), {"id": periodo_id}).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Período informado não existe")
    if row[0] != curso_id:
        raise HTTPException(status_code=400, detail="O período selecionado não pertence ao curso informado")


def create_aluno_with_user(db: Session, payload: AlunoCreateWithUser) -> CadastroResultado:
    """Person (inline or referenced) + student + optional login, in ``db``'s transaction."""
    if payload.ra:
        found = db.execute(text("SELECT ra FROM alunos WHERE ra = :ra"), {"ra": payload.ra}).fetchone()
        if found:
            raise HTTPException(status_code=409, detail=f"RA {payload.ra} já está em uso")

    _check_periodo(db, payload.curso_id, payload.periodo_id)

    pessoa_id = _resolve_pessoa(db, payload.pessoa_id, payload.pessoa)
    ra = payload.ra or generate_ra(db, payload.ano_ingresso)

    now = datetime.now()
    row = db.execute(
        text("""
            INSERT INTO alunos (ra, pessoa_id, curso_id, turno_id, coorte_id, periodo_id, ano_ingresso,
                                igreja, situacao, coeficiente_acad, created_at, updated_at)
            VALUES (:ra, :pessoa_id, :curso_id, :turno_id, :coorte_id, :periodo_id, :ano_ingresso,
                    :igreja, :situacao, :coeficiente_acad, :created_at, :updated_at)
            RETURNING ra, pessoa_id, curso_id, turno_id, coorte_id, periodo_id, ano_ingresso,
                      igreja, situacao, coeficiente_acad, created_at, updated_at
        """),
        {
            "ra": ra,
            "pessoa_id": pessoa_id,
            "curso_id": payload.curso_id,
            "turno_id": payload.turno_id,
            "coorte_id": payload.coorte_id,
            "periodo_id": payload.periodo_id,
            "ano_ingresso": payload.ano_ingresso,
            "igreja": payload.igreja,
            "situacao": payload.situacao.value,
            "coeficiente_acad": payload.coeficiente_acad,
            "created_at": now,
            "updated_at": now,
        }
    ).mappings().fetchone()
    aluno = Aluno.model_validate(dict(row))

    user = _provision_user(db, pessoa_id, "ALUNO", payload)
    logger.info("Aluno %s cadastrado (pessoa %s, usuário %s)", ra, pessoa_id, user.username if user else "-")
    return CadastroResultado(registro=aluno, user=user)


def create_professor_with_user(db: Session, payload: ProfessorCreateWithUser) -> CadastroResultado:
    """Person (inline or referenced) + professor + optional login, in ``db``'s transaction."""
    found = db.execute(
        text("SELECT matricula FROM professores WHERE matricula = :matricula"),
        {"matricula": payload.matricula}
    ).fetchone()
    if found:
        raise HTTPException(status_code=409, detail=f"Matrícula {payload.matricula} já está em uso")

    pessoa_id = _resolve_pessoa(db, payload.pessoa_id, payload.pessoa)

    row = db.execute(
        text("""
            INSERT INTO professores (matricula, pessoa_id, data_inicio, formacao_acad, situacao)
            VALUES (:matricula, :pessoa_id, :data_inicio, :formacao_acad, :situacao)
            RETURNING matricula, pessoa_id, data_inicio, formacao_acad, situacao
        """),
        {
            "matricula": payload.matricula,
            "pessoa_id": pessoa_id,
            "data_inicio": payload.data_inicio,
            "formacao_acad": payload.formacao_acad,
            "situacao": payload.situacao.value,
        }
    ).mappings().fetchone()
    professor = Professor.model_validate(dict(row))

    user = _provision_user(db, pessoa_id, "PROFESSOR", payload)
    logger.info("Professor %s cadastrado (pessoa %s, usuário %s)",
                payload.matricula, pessoa_id, user.username if user else "-")
    return CadastroResultado(registro=professor, user=user)


# ============================================================
# BULK IMPORT (Directus)
# ============================================================

def import_alunos(db: Session, payload: DirectusAlunoImport) -> List[ImportResultado]:
    """Create every student of the batch; any failure aborts the whole batch."""
    resultados = []
    for item in payload.items:
        resultado = create_aluno_with_user(db, item)
        resultados.append(ImportResultado(source_id=item.source_id, ra=resultado.registro.ra))
    logger.info("Importação Directus: %d aluno(s)", len(resultados))
    return resultados


def import_professores(db: Session, payload: DirectusProfessorImport) -> List[ImportResultado]:
    """Create every professor of the batch; any failure aborts the whole batch."""
    resultados = []
    for item in payload.items:
        resultado = create_professor_with_user(db, item)
        resultados.append(ImportResultado(source_id=item.source_id, matricula=resultado.registro.matricula))
    logger.info("Importação Directus: %d professor(es)", len(resultados))
    return resultados
