"""Canonicalization profiles.

A profile tells the canonicalizer which manifest terms take arrays,
contributor objects, link objects, localizable strings and URLs, so the same
algorithm can serve different manifest vocabularies. A profile may also
carry an extension hook that runs last on the canonical manifest.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from schemas.entry_page import EntryPage

# (manifest, base, entry_page, language, direction) -> manifest
ProfileExtension = Callable[[dict[str, Any], str, EntryPage | None, str, str], dict[str, Any]]

MISC_ARRAY_PROPERTIES = ("type", "name", "rel")

A11Y_PROPERTIES = (
    "accessMode",
    "accessModeSufficient",
    "accessibilityAPI",
    "accessibilityControl",
    "accessibilityFeature",
    "accessibilityHazard",
)

CREATOR_PROPERTIES = (
    "artist",
    "author",
    "colorist",
    "contributor",
    "creator",
    "editor",
    "illustrator",
    "inker",
    "letterer",
    "penciler",
    "publisher",
    "readBy",
    "translator",
)

RESOURCE_CATEGORIZATION_PROPERTIES = ("readingOrder", "resources", "links")

LOCALIZABLE_PROPERTIES = ("name", "description", "accessibilitySummary")

URL_PROPERTIES = ("url", "id")


@dataclass(frozen=True)
class Profile:
    """Term classification driving canonicalization.

    Attributes:
        name: Profile identifier
        array_values: Terms whose values are always arrays
        entity_values: Terms whose values are contributor objects
        link_values: Terms whose values are link objects
        local_string_values: Terms whose values are localizable strings
        url_values: Terms whose values are URLs
        extension: Optional hook run after the generic steps
    """

    name: str
    array_values: tuple[str, ...]
    entity_values: tuple[str, ...]
    link_values: tuple[str, ...]
    local_string_values: tuple[str, ...]
    url_values: tuple[str, ...]
    extension: ProfileExtension | None = None

    @property
    def object_values(self) -> tuple[str, ...]:
        """Terms whose array items are entity or link objects."""
        return self.entity_values + self.link_values


CORE_PROFILE = Profile(
    name="core",
    array_values=(
        MISC_ARRAY_PROPERTIES
        + A11Y_PROPERTIES
        + CREATOR_PROPERTIES
        + RESOURCE_CATEGORIZATION_PROPERTIES
    ),
    entity_values=CREATOR_PROPERTIES,
    link_values=RESOURCE_CATEGORIZATION_PROPERTIES,
    local_string_values=LOCALIZABLE_PROPERTIES,
    url_values=URL_PROPERTIES,
)

PROFILES: dict[str, Profile] = {
    CORE_PROFILE.name: CORE_PROFILE,
}


def get_profile(name: str) -> Profile:
    """Look up a registered profile by name.

    Raises:
        KeyError: If no profile is registered under ``name``
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown profile: {name}") from None
