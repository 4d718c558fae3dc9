"""Linked resource schema."""

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .localizable_string import LocalizableString


class LinkedResource(BaseModel):
    """A URL with descriptive metadata and relation tags.

    Linked resources populate the reading order, resources and links
    collections of a publication.

    Attributes:
        url: Absolute URL of the resource
        encoding_format: Media type of the resource
        name: Names of the resource
        description: Short description of the resource
        rel: Relation values describing the role of the resource
        duration: Playing time, in normal play time syntax
        type: Declared types of the link object
        extra_fields: Properties of the source object with no schema counterpart
    """

    url: str
    encoding_format: str | None = None
    name: list[LocalizableString] | None = None
    description: LocalizableString | None = None
    rel: list[str] | None = None
    duration: str | None = None
    type: list[str] | None = None
    extra_fields: dict[str, Any] = {}

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def has_rel(self, *values: str) -> bool:
        """Whether any of ``values`` appears among the relation values."""
        if not self.rel:
            return False
        return any(value in self.rel for value in values)
