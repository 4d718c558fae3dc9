"""Contributor schemas (persons and organizations)."""

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .localizable_string import LocalizableString


class ContributorKind(str, Enum):
    """The two kinds of contributor a publication can credit."""

    PERSON = "Person"
    ORGANIZATION = "Organization"


class Contributor(BaseModel):
    """A person or organization associated with a creative role.

    Attributes:
        kind: Whether the contributor is a person or an organization
        name: Names of the contributor, possibly in several languages
        id: Identifier of the contributor
        url: Absolute URL describing the contributor
        type: Declared types, always containing "Person" or "Organization"
        extra_fields: Properties of the source object with no schema counterpart
    """

    kind: ContributorKind = ContributorKind.PERSON
    name: list[LocalizableString]
    id: str | None = None
    url: str | None = None
    type: list[str] = ["Person"]
    extra_fields: dict[str, Any] = {}

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @property
    def is_person(self) -> bool:
        return self.kind == ContributorKind.PERSON
