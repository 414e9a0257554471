"""
Validation error formatting.

Turns pydantic error dicts into the ``[{"field", "message"}]`` list the
portal shows next to each form field, with messages in Brazilian
Portuguese.
"""

import re
from typing import Any, Dict, Iterable, List

# Request location prefixes added by FastAPI
_LOCATIONS = {"body", "query", "path", "header", "cookie"}

# Wire field names are camelCase; anything else in a loc is a union tag
# ("EmailLogin", "function-after[...]", "literal['']")
_FIELD_SEGMENT = re.compile(r"^[a-z_][A-Za-z0-9_]*$")

_MESSAGES = {
    "missing": "Campo obrigatório",
    "string_type": "Esperado texto",
    "int_type": "Esperado número inteiro",
    "int_parsing": "Esperado número inteiro",
    "int_from_float": "Esperado número inteiro",
    "float_type": "Esperado número",
    "float_parsing": "Esperado número",
    "bool_type": "Esperado verdadeiro ou falso",
    "bool_parsing": "Esperado verdadeiro ou falso",
    "date_type": "Data inválida",
    "date_parsing": "Data inválida",
    "date_from_datetime_parsing": "Data inválida",
    "date_from_datetime_inexact": "Data inválida",
    "datetime_type": "Data/hora inválida",
    "datetime_parsing": "Data/hora inválida",
    "datetime_from_date_parsing": "Data/hora inválida",
    "string_pattern_mismatch": "Formato inválido",
    "extra_forbidden": "Chave não reconhecida",
    "model_type": "Esperado objeto",
    "model_attributes_type": "Esperado objeto",
    "dict_type": "Esperado objeto",
    "list_type": "Esperado lista",
    "url_parsing": "URL inválida",
    "url_scheme": "URL inválida",
    "url_type": "URL inválida",
    "json_invalid": "JSON inválido",
}


def _ctx(error: Dict[str, Any], key: str) -> Any:
    return (error.get("ctx") or {}).get(key)


def translate_error(error: Dict[str, Any]) -> str:
    """pt-BR message for a single pydantic error dict."""
    kind = error.get("type", "")

    if kind in _MESSAGES:
        return _MESSAGES[kind]

    if kind == "string_too_short":
        return f"String deve ter pelo menos {_ctx(error, 'min_length')} caractere(s)"
    if kind == "string_too_long":
        return f"String deve ter no máximo {_ctx(error, 'max_length')} caractere(s)"
    if kind == "too_short":
        return f"Lista deve ter pelo menos {_ctx(error, 'min_length')} elemento(s)"
    if kind == "too_long":
        return f"Lista deve ter no máximo {_ctx(error, 'max_length')} elemento(s)"
    if kind == "greater_than_equal":
        return f"Número deve ser maior ou igual a {_ctx(error, 'ge')}"
    if kind == "greater_than":
        return f"Número deve ser maior que {_ctx(error, 'gt')}"
    if kind == "less_than_equal":
        return f"Número deve ser menor ou igual a {_ctx(error, 'le')}"
    if kind == "less_than":
        return f"Número deve ser menor que {_ctx(error, 'lt')}"
    if kind in ("literal_error", "enum"):
        expected = _ctx(error, "expected")
        if expected:
            return f"Valor inválido. Esperado {str(expected).replace(' or ', ' ou ')}"
        return "Valor inválido"

    if kind in ("value_error", "assertion_error"):
        message = str(_ctx(error, "error") or error.get("msg", ""))
        for prefix in ("Value error, ", "Assertion failed, "):
            if message.startswith(prefix):
                message = message[len(prefix):]
        if message.startswith("value is not a valid email address"):
            return "Email inválido"
        return message or "Valor inválido"

    return error.get("msg") or "Valor inválido"


def error_field(loc: Iterable[Any]) -> str:
    """Dotted wire path of an error location, without request prefix or union tags."""
    parts = list(loc)
    if parts and parts[0] in _LOCATIONS:
        parts = parts[1:]
    return ".".join(
        str(part) for part in parts
        if isinstance(part, int) or _FIELD_SEGMENT.match(str(part))
    )


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert ``ValidationError.errors()`` into ``[{"field", "message"}]``.

    One entry per violated constraint; union branches reporting the same
    problem on the same field are collapsed.
    """
    formatted = []
    seen = set()
    for error in errors:
        item = {"field": error_field(error.get("loc", ())), "message": translate_error(error)}
        key = (item["field"], item["message"])
        if key in seen:
            continue
        seen.add(key)
        formatted.append(item)
    return formatted
