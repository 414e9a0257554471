"""
Address codec - the only place where a person's address crosses between
its structured form and the text stored in older rows.

Older records hold the address as a JSON string, sometimes encoded twice
and sometimes written with single quotes; a few hold a plain street line.
"""

import json
from typing import Any, Optional

ENDERECO_FIELDS = ("logradouro", "numero", "complemento", "bairro", "cidade", "estado", "cep")


def _clean(data: dict) -> Optional[dict]:
    """Keep known keys with non-empty values, as strings."""
    cleaned = {}
    for key in ENDERECO_FIELDS:
        value = data.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            cleaned[key] = value
    return cleaned or None


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        pass
    # legacy rows written with python-style quotes: {'cidade': 'Recife'}
    try:
        return json.loads(text.replace("'", '"'))
    except ValueError:
        return None


def decode_endereco(raw: Any) -> Optional[dict]:
    """
    Decode an address from whatever was stored.

    Returns a dict with the known address keys, or None when there is
    nothing to show. Never raises for text input.
    """
    if raw is None:
        return None

    if hasattr(raw, "model_dump"):
        raw = raw.model_dump()

    if isinstance(raw, dict):
        return _clean(raw)

    if not isinstance(raw, str):
        raise TypeError(f"Endereço em formato não suportado: {type(raw).__name__}")

    text = raw.strip()
    if not text:
        return None

    parsed = _loads(text)
    # double-encoded: "\"{\\\"cidade\\\": ...}\""
    if isinstance(parsed, str):
        parsed = _loads(parsed)

    if isinstance(parsed, dict):
        return _clean(parsed)

    return {"logradouro": text}


def encode_endereco(endereco: Any) -> Optional[str]:
    """Serialize an address to the compact JSON stored in the database."""
    data = decode_endereco(endereco)
    if not data:
        return None
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def format_endereco(endereco: Any) -> str:
    """One-line display form: 'Rua A 10 ap 2 - Centro - Recife/PE 50000000'."""
    data = decode_endereco(endereco) or {}
    rua = " ".join(data[k] for k in ("logradouro", "numero", "complemento") if k in data)
    cidade = "/".join(data[k] for k in ("cidade", "estado") if k in data)
    if "cep" in data:
        cidade = f"{cidade} {data['cep']}".strip()
    return " - ".join(part for part in (rua, data.get("bairro", ""), cidade) if part)
