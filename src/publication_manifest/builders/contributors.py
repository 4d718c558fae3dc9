"""Builders for contributors (persons and organizations)."""

from typing import Any

from schemas.contributor import Contributor, ContributorKind
from schemas.localizable_string import LocalizableString

from ..diagnostics import Diagnostics
from ..utils import absolutize, as_list, check_url, copy_extra_fields
from .results import BuildResult, Invalid, Ok, collect
from .strings import build_localizable_strings

CONTRIBUTOR_KEYS = frozenset({"name", "id", "@id", "url", "type", "@type"})


def build_contributor(
    diagnostics: Diagnostics,
    raw: Any,
    base: str,
    language: str | None = None,
    person_only: bool = False,
) -> BuildResult[Contributor]:
    """Build a contributor from a name or a contributor object.

    A bare string is taken to be the name of a person. An object must have
    a name; its type defaults to Person and, when given, must include Person
    or Organization. For person-only roles an organization is rejected. A
    URL is resolved against ``base`` and checked, but a bad URL does not
    invalidate the contributor.

    Args:
        diagnostics: Log receiving warnings and errors
        raw: String or object from the canonical manifest
        base: Base URL for resolving the contributor's URL
        language: Default language for the contributor's names
        person_only: Whether the role only admits persons

    Returns:
        Ok with the contributor, or Invalid if it must be dropped
    """
    if isinstance(raw, str):
        return Ok(
            Contributor(
                kind=ContributorKind.PERSON,
                name=[LocalizableString(value=raw, language=language or None)],
                type=["Person"],
            )
        )

    if not diagnostics.error(
        isinstance(raw, dict), f"Invalid contributor: {raw!r} is not an object."
    ):
        return Invalid("not an object")

    if not diagnostics.error(
        raw.get("name") is not None, "Invalid contributor: no name provided."
    ):
        return Invalid("no name")

    names = build_localizable_strings(diagnostics, raw["name"], language)
    if not diagnostics.error(
        names is not None, "Invalid contributor: no valid name provided."
    ):
        return Invalid("no valid name")

    raw_type = raw.get("type", raw.get("@type"))
    if raw_type is None:
        types = ["Person"]
    else:
        types = [str(item) for item in as_list(raw_type)]
        if not diagnostics.error(
            "Person" in types or "Organization" in types,
            f"Invalid contributor type {types} for {names[0].value}: "
            "must be a Person or an Organization.",
        ):
            return Invalid("unknown type")

    if person_only and not diagnostics.error(
        "Person" in types, f"Invalid contributor {names[0].value}: must be a Person."
    ):
        return Invalid("not a person")

    url = None
    if raw.get("url"):
        url = absolutize(raw["url"], base)
        check_url(url, diagnostics)

    identifier = raw.get("id", raw.get("@id"))

    return Ok(
        Contributor(
            kind=ContributorKind.PERSON if "Person" in types else ContributorKind.ORGANIZATION,
            name=names,
            id=identifier if isinstance(identifier, str) else None,
            url=url if isinstance(url, str) else None,
            type=types,
            extra_fields=copy_extra_fields(raw, CONTRIBUTOR_KEYS),
        )
    )


def build_contributors(
    diagnostics: Diagnostics,
    raw: Any,
    base: str,
    language: str | None = None,
    person_only: bool = False,
) -> list[Contributor] | None:
    """Build the contributors of one role, dropping the invalid ones.

    Returns:
        The valid contributors, or None if none survive
    """
    return collect(
        lambda item: build_contributor(diagnostics, item, base, language, person_only),
        as_list(raw),
    )
