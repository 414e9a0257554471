# tests/test_endereco.py

import json

import pytest

from academico.schemas.pessoa import Endereco
from academico.utils.endereco import decode_endereco, encode_endereco, format_endereco


class TestDecodeEndereco:

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty(self, raw):
        assert decode_endereco(raw) is None

    def test_json_object(self):
        assert decode_endereco('{"cidade": "Recife", "estado": "PE"}') == {"cidade": "Recife", "estado": "PE"}

    def test_double_encoded(self):
        raw = json.dumps(json.dumps({"logradouro": "Rua A", "numero": 10}))
        assert decode_endereco(raw) == {"logradouro": "Rua A", "numero": "10"}

    def test_single_quotes(self):
        assert decode_endereco("{'bairro': 'Boa Vista'}") == {"bairro": "Boa Vista"}

    def test_free_text_becomes_logradouro(self):
        assert decode_endereco("Rua do Sol, 45") == {"logradouro": "Rua do Sol, 45"}

    def test_unknown_keys_and_blanks_dropped(self):
        assert decode_endereco({"cidade": " Olinda ", "pais": "BR", "cep": ""}) == {"cidade": "Olinda"}

    def test_model_instance(self):
        assert decode_endereco(Endereco(cidade="Recife")) == {"cidade": "Recife"}

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            decode_endereco(123)


class TestEncodeEndereco:

    def test_compact_json(self):
        assert encode_endereco({"cidade": "São Paulo", "estado": "SP"}) == '{"cidade":"São Paulo","estado":"SP"}'

    def test_nothing_set(self):
        assert encode_endereco(Endereco()) is None
        assert encode_endereco(None) is None

    def test_stable_round_trip(self):
        stored = encode_endereco({"logradouro": "Rua A", "numero": "10", "cidade": "Recife"})
        assert encode_endereco(decode_endereco(stored)) == stored


def test_format_endereco():
    endereco = {"logradouro": "Rua A", "numero": "10", "bairro": "Centro", "cidade": "Recife",
                "estado": "PE", "cep": "50000000"}
    assert format_endereco(endereco) == "Rua A 10 - Centro - Recife/PE 50000000"
    assert format_endereco(None) == ""
