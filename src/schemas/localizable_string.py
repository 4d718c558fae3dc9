"""Localizable string schema."""

from pydantic import BaseModel


class LocalizableString(BaseModel):
    """A text value tagged with the language it is written in.

    Attributes:
        value: The text itself
        language: BCP 47 language tag, if known
    """

    value: str
    language: str | None = None

    def __str__(self) -> str:
        return self.value
