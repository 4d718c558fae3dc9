"""Builders for localizable strings."""

from typing import Any

from schemas.localizable_string import LocalizableString

from ..diagnostics import Diagnostics
from ..utils import as_list, is_language_tag
from .results import BuildResult, Invalid, Ok, collect


def build_localizable_string(
    diagnostics: Diagnostics, raw: Any, default_language: str | None = None
) -> BuildResult[LocalizableString]:
    """Build a localizable string from a plain string or a value object.

    A plain string is tagged with ``default_language``. An object supplies
    its own ``value`` and ``language`` (the JSON-LD ``@value``/``@language``
    spellings are accepted too). An invalid language tag is cleared with a
    warning; a missing value makes the string invalid.

    Args:
        diagnostics: Log receiving warnings and errors
        raw: String or object from the canonical manifest
        default_language: Language applied to plain strings

    Returns:
        Ok with the string, or Invalid if there is no value
    """
    if isinstance(raw, str):
        return Ok(LocalizableString(value=raw, language=default_language or None))

    if not isinstance(raw, dict):
        diagnostics.error(False, f"Invalid string value: {raw!r}")
        return Invalid("not a string")

    value = raw.get("value", raw.get("@value"))
    if not diagnostics.error(isinstance(value, str), "String without value"):
        return Invalid("no value")

    language = raw.get("language", raw.get("@language"))
    if language is not None and not diagnostics.warning(
        is_language_tag(language), f'"{language}" is not a valid language tag'
    ):
        language = None

    return Ok(LocalizableString(value=value, language=language))


def build_localizable_strings(
    diagnostics: Diagnostics, raw: Any, default_language: str | None = None
) -> list[LocalizableString] | None:
    """Build a list of localizable strings from a scalar or an array.

    Returns:
        The valid strings, or None if none survive
    """
    return collect(
        lambda item: build_localizable_string(diagnostics, item, default_language),
        as_list(raw),
    )


def build_first_localizable_string(
    diagnostics: Diagnostics, raw: Any, default_language: str | None = None
) -> LocalizableString | None:
    """Build a single localizable string; for an array, the first valid one."""
    strings = build_localizable_strings(diagnostics, raw, default_language)
    return strings[0] if strings else None
