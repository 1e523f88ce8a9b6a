from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .domain.address import AddressFragment
from .domain.errors import ValidationIssue


class MessageOut(BaseModel):
    message: str


class IssueOut(BaseModel):
    path: list[str | int]
    message: str

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> "IssueOut":
        return cls(path=list(issue.path), message=issue.message)


class ValidationFailedOut(MessageOut):
    issues: list[IssueOut]


class AddressFragmentOut(BaseModel):
    # camelCase on the wire, same keys the save endpoint accepts
    model_config = ConfigDict(alias_generator=to_camel)

    postal_code: str
    street: str
    complement: str
    neighborhood: str
    city: str
    state_code: str

    @classmethod
    def from_fragment(cls, postal_code: str, fragment: AddressFragment) -> "AddressFragmentOut":
        return cls.model_validate({"postalCode": postal_code, **fragment.as_form_values()})


class HealthOut(BaseModel):
    status: str = "ok"
