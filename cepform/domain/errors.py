# cepform/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    """
    One rejected field. `path` mirrors the wire location of the value:
      ("postalCode",) for a field, () when the whole payload is unusable.
    """

    path: tuple[str | int, ...]
    message: str

    @property
    def field(self) -> str | None:
        if not self.path:
            return None
        head = self.path[0]
        return head if isinstance(head, str) else None


class AddressValidationError(Exception):
    """Candidate record rejected before any I/O. Always carries at least one issue."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        if not issues:
            raise ValueError("AddressValidationError needs at least one issue")
        self.issues = list(issues)
        fields = ", ".join(i.field or "<payload>" for i in self.issues)
        super().__init__(f"invalid address fields: {fields}")


class PersistenceError(Exception):
    """Store read/parse/write failure. Fatal for the current request."""

    # What callers are allowed to see; the exception text stays server-side.
    public_message = "Erro ao salvar o endereço."


class AddressLookupError(Exception):
    """Base for postal code lookup failures. Recoverable: the form keeps working."""


class PostalCodeNotFound(AddressLookupError):
    def __init__(self, postal_code: str) -> None:
        self.postal_code = postal_code
        super().__init__(f"postal code not found: {postal_code!r}")


class LookupUnavailable(AddressLookupError):
    """Network error, timeout or an unusable response from the lookup service."""
