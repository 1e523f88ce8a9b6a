# cepform/domain/validation.py
from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from .address import FIELD_TYPES, AddressRecord
from .errors import AddressValidationError, ValidationIssue

# Messages shown to the user, per field and per violated rule (pydantic error type).
FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "postalCode": {
        "string_pattern_mismatch": "Informe um CEP com 8 dígitos.",
    },
    "street": {
        "string_too_short": "Logradouro deve ter ao menos 2 caracteres.",
        "string_too_long": "Logradouro deve ter no máximo 120 caracteres.",
    },
    "number": {
        "string_too_short": "Informe o número.",
        "string_too_long": "Número deve ter até 6 caracteres.",
        "string_pattern_mismatch": "Número deve conter apenas letras, números ou hífen.",
    },
    "complement": {
        "string_too_long": "Complemento deve ter no máximo 80 caracteres.",
    },
    "neighborhood": {
        "string_too_short": "Bairro deve ter ao menos 2 caracteres.",
        "string_too_long": "Bairro deve ter no máximo 80 caracteres.",
    },
    "city": {
        "string_too_short": "Cidade deve ter ao menos 2 caracteres.",
        "string_too_long": "Cidade deve ter no máximo 80 caracteres.",
    },
    "stateCode": {
        "string_pattern_mismatch": "Estado deve ter duas letras.",
    },
}

GENERIC_MESSAGES: dict[str, str] = {
    "missing": "Campo obrigatório.",
    "string_type": "Valor deve ser um texto.",
    "model_type": "Dados devem ser um objeto JSON.",
    "model_attributes_type": "Dados devem ser um objeto JSON.",
}

FALLBACK_MESSAGE = "Valor inválido."

_FIELD_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    name: TypeAdapter(tp) for name, tp in FIELD_TYPES.items()
}


def _message_for(field: str | None, error_type: str) -> str:
    if field is not None:
        msg = FIELD_MESSAGES.get(field, {}).get(error_type)
        if msg:
            return msg
    return GENERIC_MESSAGES.get(error_type, FALLBACK_MESSAGE)


def _issues_from(errors: list[ErrorDetails]) -> list[ValidationIssue]:
    """
    One issue per field: the first rule it broke. A payload-level error
    (empty loc) is reported once with an empty path.
    """
    seen: set[tuple[Any, ...]] = set()
    out: list[ValidationIssue] = []
    for err in errors:
        loc = tuple(err.get("loc") or ())
        key = loc[:1]
        if key in seen:
            continue
        seen.add(key)
        field = loc[0] if loc and isinstance(loc[0], str) else None
        out.append(ValidationIssue(path=loc[:1], message=_message_for(field, err["type"])))
    return out


def validate_address(candidate: Any) -> AddressRecord:
    """
    Validate a candidate record (usually a decoded JSON body).

    Returns the normalized record (stateCode upper-cased, unknown keys dropped)
    or raises AddressValidationError listing every invalid field.
    Never raises anything else, whatever the input looks like.
    """
    try:
        return AddressRecord.model_validate(candidate)
    except PydanticValidationError as e:
        raise AddressValidationError(_issues_from(e.errors())) from None


def validate_field(field: str, value: Any) -> str | None:
    """Check a single field (on blur). Returns the first violation message, or None."""
    adapter = _FIELD_ADAPTERS.get(field)
    if adapter is None:
        raise KeyError(f"unknown address field: {field!r}")
    try:
        adapter.validate_python(value)
    except PydanticValidationError as e:
        errors = e.errors()
        return _message_for(field, errors[0]["type"]) if errors else FALLBACK_MESSAGE
    return None
