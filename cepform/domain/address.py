# cepform/domain/address.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _upper(value: str) -> str:
    return value.upper()


# Per-field constraints. Length rules are checked before patterns, so a value
# that breaks both reports the length problem.
# ASCII classes on purpose: the regex engine treats \d as Unicode digits.
PostalCode = Annotated[str, Field(pattern=r"^[0-9]{8}$")]
Street = Annotated[str, Field(min_length=2, max_length=120)]
Number = Annotated[str, Field(min_length=1, max_length=6, pattern=r"^[0-9A-Za-z-]+$")]
Complement = Annotated[str, Field(max_length=80)]
Neighborhood = Annotated[str, Field(min_length=2, max_length=80)]
City = Annotated[str, Field(min_length=2, max_length=80)]
StateCode = Annotated[str, Field(pattern=r"^[A-Za-z]{2}$"), AfterValidator(_upper)]

# Wire name -> constrained type, in form order.
FIELD_TYPES: dict[str, object] = {
    "postalCode": PostalCode,
    "street": Street,
    "number": Number,
    "complement": Complement,
    "neighborhood": Neighborhood,
    "city": City,
    "stateCode": StateCode,
}

FIELDS: tuple[str, ...] = tuple(FIELD_TYPES)


class AddressRecord(BaseModel):
    """
    One validated address, exactly as the caller may submit it.

    Attributes are snake_case; the wire (and the JSON store) uses camelCase:
      postalCode, street, number, complement, neighborhood, city, stateCode

    Unknown keys are dropped, so a caller-supplied savedAt never survives.
    """

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    postal_code: PostalCode
    street: Street
    number: Number
    complement: Complement = ""
    neighborhood: Neighborhood
    city: City
    state_code: StateCode

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class StoredAddress(AddressRecord):
    saved_at: str


@dataclass(frozen=True)
class AddressFragment:
    """
    Partial address returned by the postal code lookup. Any piece may be empty;
    the user reviews everything before saving.
    """

    street: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state_code: str = ""

    def as_form_values(self) -> dict[str, str]:
        return {
            "street": self.street,
            "complement": self.complement,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "stateCode": self.state_code.upper(),
        }
