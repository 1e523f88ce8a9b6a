# cepform/domain/form.py
"""
Address form state as plain data.

Every user or I/O event goes through `reduce(state, event) -> state`, so the
whole interaction can be replayed and tested without any rendering surface.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Literal, Mapping

from .address import FIELDS, AddressFragment
from .errors import ValidationIssue
from .validation import validate_field

FeedbackKind = Literal["success", "error", "info"]

POSTAL_CODE_NOT_FOUND = "CEP não encontrado."
LOOKUP_FILLED = "Campos preenchidos automaticamente com os dados do ViaCEP."
LOOKUP_NO_DATA = "Não encontramos informações para este CEP."
LOOKUP_FAILED = "Não foi possível buscar o CEP. Tente novamente mais tarde."
SUBMIT_REJECTED = "Revise os campos destacados antes de salvar."
SAVE_OK = "Endereço salvo com sucesso!"

FREE_TEXT_MAX = 120

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_LETTERS = re.compile(r"[^A-Za-z]")
_NON_NUMBER_CHARS = re.compile(r"[^0-9A-Za-z-]")


def sanitize_input(field_name: str, raw: str) -> str:
    """
    Keystroke-level cleanup. Strips what can never be valid and caps length;
    the submit-time schema still decides what is acceptable.
    """
    if field_name == "postalCode":
        return _NON_DIGITS.sub("", raw)[:8]
    if field_name == "stateCode":
        return _NON_LETTERS.sub("", raw)[:2].upper()
    if field_name == "number":
        return _NON_NUMBER_CHARS.sub("", raw)[:6]
    return raw[:FREE_TEXT_MAX]


def format_postal_code(value: str) -> str:
    """Display mask: 01001000 -> 01001-000 (partial input stays unmasked up to 5 digits)."""
    if not value:
        return ""
    digits = _NON_DIGITS.sub("", value)[:8]
    if len(digits) <= 5:
        return digits
    return f"{digits[:5]}-{digits[5:]}"


def empty_values() -> dict[str, str]:
    return {name: "" for name in FIELDS}


@dataclass(frozen=True)
class Feedback:
    kind: FeedbackKind
    text: str


@dataclass(frozen=True)
class FormState:
    values: Mapping[str, str] = field(default_factory=empty_values)
    errors: Mapping[str, str] = field(default_factory=dict)
    feedback: Feedback | None = None
    is_fetching: bool = False
    is_saving: bool = False


# -------------------------
# Events
# -------------------------


@dataclass(frozen=True)
class FieldChanged:
    field: str
    raw: str


@dataclass(frozen=True)
class FieldBlurred:
    field: str


@dataclass(frozen=True)
class LookupStarted:
    pass


@dataclass(frozen=True)
class LookupSucceeded:
    fragment: AddressFragment


@dataclass(frozen=True)
class LookupNotFound:
    pass


@dataclass(frozen=True)
class LookupFailed:
    pass


@dataclass(frozen=True)
class Cleared:
    pass


@dataclass(frozen=True)
class SubmitRejected:
    issues: tuple[ValidationIssue, ...]


@dataclass(frozen=True)
class SaveStarted:
    pass


@dataclass(frozen=True)
class SaveSucceeded:
    pass


@dataclass(frozen=True)
class SaveFailed:
    message: str


FormEvent = (
    FieldChanged
    | FieldBlurred
    | LookupStarted
    | LookupSucceeded
    | LookupNotFound
    | LookupFailed
    | Cleared
    | SubmitRejected
    | SaveStarted
    | SaveSucceeded
    | SaveFailed
)


def _without(errors: Mapping[str, str], *names: str) -> dict[str, str]:
    return {k: v for k, v in errors.items() if k not in names}


def reduce(state: FormState, event: FormEvent) -> FormState:
    if isinstance(event, FieldChanged):
        values = dict(state.values)
        values[event.field] = sanitize_input(event.field, event.raw)
        return replace(
            state,
            values=values,
            errors=_without(state.errors, event.field),
            feedback=None,
        )

    if isinstance(event, FieldBlurred):
        msg = validate_field(event.field, state.values.get(event.field, ""))
        errors = _without(state.errors, event.field)
        if msg:
            errors[event.field] = msg
        return replace(state, errors=errors)

    if isinstance(event, LookupStarted):
        return replace(state, is_fetching=True)

    if isinstance(event, LookupSucceeded):
        values = {**state.values, **event.fragment.as_form_values()}
        # postalCode keeps whatever blur validation said about it
        errors = {k: v for k, v in state.errors.items() if k == "postalCode"}
        return replace(
            state,
            values=values,
            errors=errors,
            feedback=Feedback("info", LOOKUP_FILLED),
            is_fetching=False,
        )

    if isinstance(event, LookupNotFound):
        return replace(
            state,
            errors={**state.errors, "postalCode": POSTAL_CODE_NOT_FOUND},
            feedback=Feedback("error", LOOKUP_NO_DATA),
            is_fetching=False,
        )

    if isinstance(event, LookupFailed):
        return replace(state, feedback=Feedback("error", LOOKUP_FAILED), is_fetching=False)

    if isinstance(event, Cleared):
        return FormState()

    if isinstance(event, SubmitRejected):
        errors: dict[str, str] = {}
        for issue in event.issues:
            name = issue.field
            if name and name not in errors:
                errors[name] = issue.message
        return replace(state, errors=errors, feedback=Feedback("error", SUBMIT_REJECTED))

    if isinstance(event, SaveStarted):
        return replace(state, feedback=None, is_saving=True)

    if isinstance(event, SaveSucceeded):
        return replace(state, feedback=Feedback("success", SAVE_OK), is_saving=False)

    if isinstance(event, SaveFailed):
        return replace(state, feedback=Feedback("error", event.message), is_saving=False)

    raise TypeError(f"unhandled form event: {event!r}")
