# tests/test_validation.py

import pytest
from pydantic import ValidationError

from academico.schemas.aluno import AlunoCreateWithUser
from academico.schemas.aula import AulaCreate
from academico.schemas.disciplina_periodo import DisciplinaPeriodoCreate
from academico.schemas.integracao import DirectusAlunoImport
from academico.schemas.pessoa import PessoaCreate
from academico.utils.validation import error_field, format_validation_errors


def formatted(schema, data):
    with pytest.raises(ValidationError) as exc:
        schema.model_validate(data)
    return format_validation_errors(exc.value.errors())


class TestErrorField:

    def test_request_location_dropped(self):
        assert error_field(("body", "pessoa", "nomeCompleto")) == "pessoa.nomeCompleto"

    def test_list_index_kept(self):
        assert error_field(("body", "items", 0, "sourceId")) == "items.0.sourceId"

    def test_union_tags_dropped(self):
        assert error_field(("body", "EmailLogin", "email")) == "email"
        assert error_field(("materialUrl", "function-after[_check_url(), str]")) == "materialUrl"


class TestFormatValidationErrors:

    def test_missing_fields(self):
        errors = formatted(PessoaCreate, {})
        assert {"field": "nomeCompleto", "message": "Campo obrigatório"} in errors
        assert {"field": "sexo", "message": "Campo obrigatório"} in errors

    def test_string_length_messages(self):
        errors = formatted(PessoaCreate, {"nomeCompleto": "A", "sexo": "M", "telefone": "9" * 21})
        assert {"field": "nomeCompleto", "message": "String deve ter pelo menos 2 caractere(s)"} in errors
        assert {"field": "telefone", "message": "String deve ter no máximo 20 caractere(s)"} in errors

    def test_number_bound_message(self):
        errors = formatted(DisciplinaPeriodoCreate, {"disciplinaId": 1, "periodoId": 2, "ordem": 0})
        assert errors == [{"field": "ordem", "message": "Número deve ser maior ou igual a 1"}]

    def test_custom_message_without_prefix(self):
        errors = formatted(AlunoCreateWithUser, {
            "pessoaId": 1, "cursoId": 1, "anoIngresso": 2025, "createUser": True, "username": "ana.souza",
        })
        assert errors == [{"field": "password", "message": "Senha é obrigatória para criar o acesso"}]

    def test_email_message(self):
        errors = formatted(PessoaCreate, {"nomeCompleto": "Ana", "sexo": "F", "email": "ana-sem-arroba"})
        assert errors == [{"field": "email", "message": "Email inválido"}]

    def test_enum_message(self):
        errors = formatted(PessoaCreate, {"nomeCompleto": "Ana", "sexo": "X"})
        assert errors[0]["field"] == "sexo"
        assert errors[0]["message"].startswith("Valor inválido")

    def test_extra_key(self):
        errors = formatted(DisciplinaPeriodoCreate, {"disciplinaId": 1, "periodoId": 2, "nota": 1})
        assert errors == [{"field": "nota", "message": "Chave não reconhecida"}]

    def test_union_branches_collapsed_per_field(self):
        errors = formatted(AulaCreate, {"turmaId": 1, "data": "2025-03-10", "materialUrl": "xx"})
        assert all(e["field"] == "materialUrl" for e in errors)
        assert {"field": "materialUrl", "message": "URL inválida"} in errors

    def test_nested_list_path(self):
        errors = formatted(DirectusAlunoImport, {"items": [{"pessoaId": 1, "cursoId": 1, "anoIngresso": 2025}]})
        assert errors == [{"field": "items.0.sourceId", "message": "Campo obrigatório"}]

    def test_invalid_date(self):
        errors = formatted(AulaCreate, {"turmaId": 1, "data": "10/03/2025"})
        assert errors == [{"field": "data", "message": "Data inválida"}]
