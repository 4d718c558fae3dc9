"""Build the typed manifest model from a canonical manifest.

Every recognized manifest term has an entry in ``TERM_SETTERS`` mapping it
to the function that validates the canonical value and stores it on the
model. Terms without an entry are ignored, so manifests may carry
properties this model does not know about.
"""

import logging
from collections.abc import Callable
from typing import Any

from schemas.manifest import ProgressionDirection, PublicationManifest, TextDirection

from .builders import (
    VOCABULARIES,
    build_contributors,
    build_first_localizable_string,
    build_linked_resources,
    build_localizable_strings,
    filter_terms,
)
from .diagnostics import Diagnostics
from .utils import absolutize, as_list, check_url, is_iso_date, is_language_tag

logger = logging.getLogger(__name__)

SKIPPED_TERMS = frozenset({"@context"})

TERM_ALIASES = {
    "@type": "type",
    "@id": "id",
}

# Manifest term -> (model attribute, person only)
CONTRIBUTOR_ROLES: dict[str, tuple[str, bool]] = {
    "artist": ("artist", True),
    "author": ("author", False),
    "colorist": ("colorist", True),
    "contributor": ("contributor", False),
    "creator": ("creator", False),
    "editor": ("editor", True),
    "illustrator": ("illustrator", True),
    "inker": ("inker", True),
    "letterer": ("letterer", True),
    "penciler": ("penciler", True),
    "publisher": ("publisher", False),
    "readBy": ("read_by", True),
    "translator": ("translator", False),
}

# Manifest term -> model attribute
ACCESSIBILITY_TERMS = {
    "accessMode": "access_mode",
    "accessModeSufficient": "access_mode_sufficient",
    "accessibilityAPI": "accessibility_api",
    "accessibilityControl": "accessibility_control",
    "accessibilityFeature": "accessibility_feature",
    "accessibilityHazard": "accessibility_hazard",
}

LINK_COLLECTIONS = {
    "readingOrder": "reading_order",
    "resources": "resources",
    "links": "links",
}


class ManifestBuilder:
    """Populates a PublicationManifest term by term.

    The base URL and the default language are fixed when the builder is
    created and are shared by all contributor and link builders.

    Attributes:
        diagnostics: Log receiving warnings and errors
        base: Base URL for relative references
        language: Default language of the manifest
        separate_file: Whether the manifest was loaded from its own file
        manifest: The model being populated
    """

    def __init__(
        self,
        diagnostics: Diagnostics,
        base: str,
        language: str | None = None,
        separate_file: bool = True,
    ):
        self.diagnostics = diagnostics
        self.base = base
        self.language = language or None
        self.separate_file = separate_file
        self.manifest = PublicationManifest()

    def build(self, canonical: dict[str, Any]) -> PublicationManifest:
        """Set every recognized term of ``canonical`` on the model.

        A term whose setter fails is reported and skipped; the others are
        still set.
        """
        for term, value in canonical.items():
            if term in SKIPPED_TERMS:
                continue
            final_term = TERM_ALIASES.get(term, term)
            setter = TERM_SETTERS.get(final_term)
            if setter is None:
                logger.debug(f"Ignoring unknown manifest term {term}")
                continue
            try:
                setter(self, value)
            except Exception as e:
                logger.error(f"Failed to set {final_term}: {e}")
                self.diagnostics.error(False, f"Invalid value for {final_term}: {e}")
        return self.manifest

    def _single(self, term: str, value: Any) -> Any:
        if isinstance(value, list):
            self.diagnostics.warning(
                len(value) <= 1, f"Only the first value of {term} is used"
            )
            return value[0] if value else None
        return value

    # --- identification

    def set_url(self, value: Any) -> None:
        url = absolutize(self._single("url", value), self.base)
        if self.diagnostics.error(isinstance(url, str), f"Invalid url: {url!r}"):
            self.manifest.url = check_url(url, self.diagnostics)

    def set_id(self, value: Any) -> None:
        identifier = absolutize(self._single("id", value), self.base)
        if self.diagnostics.error(isinstance(identifier, str), f"Invalid id: {identifier!r}"):
            self.manifest.id = identifier

    def set_type(self, value: Any) -> None:
        types = [str(item) for item in as_list(value) if item]
        self.manifest.type = types or None

    # --- text

    def set_name(self, value: Any) -> None:
        self.manifest.name = build_localizable_strings(
            self.diagnostics, value, self.language
        )

    def set_accessibility_summary(self, value: Any) -> None:
        self.manifest.accessibility_summary = build_first_localizable_string(
            self.diagnostics, value, self.language
        )

    def set_in_language(self, value: Any) -> None:
        if self.diagnostics.warning(
            is_language_tag(value), f'"{value}" is not a valid language tag'
        ):
            self.manifest.in_language = value

    def set_in_direction(self, value: Any) -> None:
        try:
            self.manifest.in_direction = TextDirection(value)
        except ValueError:
            self.diagnostics.warning(False, f'"{value}" is not a valid text direction tag')

    # --- dates

    def set_date_modified(self, value: Any) -> None:
        if self.diagnostics.warning(
            is_iso_date(value), f'"{value}" is not a valid date for dateModified'
        ):
            self.manifest.date_modified = value

    def set_date_published(self, value: Any) -> None:
        if self.diagnostics.warning(
            is_iso_date(value), f'"{value}" is not a valid date for datePublished'
        ):
            self.manifest.date_published = value

    def set_reading_progression(self, value: Any) -> None:
        try:
            self.manifest.reading_progression = ProgressionDirection(value)
        except ValueError:
            self.diagnostics.warning(False, f'"{value}" is not a valid reading progression')

    # --- collections

    def set_accessibility_terms(self, term: str, value: Any) -> None:
        terms = filter_terms(self.diagnostics, term, VOCABULARIES[term], value)
        setattr(self.manifest, ACCESSIBILITY_TERMS[term], terms)

    def set_contributors(self, role: str, value: Any) -> None:
        attribute, person_only = CONTRIBUTOR_ROLES[role]
        contributors = build_contributors(
            self.diagnostics, value, self.base, self.language, person_only
        )
        setattr(self.manifest, attribute, contributors)

    def set_links(self, term: str, value: Any) -> None:
        links = build_linked_resources(
            self.diagnostics, value, self.base, self.language, self.separate_file
        )
        setattr(self.manifest, LINK_COLLECTIONS[term], links)


Setter = Callable[[ManifestBuilder, Any], None]


def _build_setter_table() -> dict[str, Setter]:
    table: dict[str, Setter] = {
        "url": ManifestBuilder.set_url,
        "id": ManifestBuilder.set_id,
        "type": ManifestBuilder.set_type,
        "name": ManifestBuilder.set_name,
        "accessibilitySummary": ManifestBuilder.set_accessibility_summary,
        "inLanguage": ManifestBuilder.set_in_language,
        "inDirection": ManifestBuilder.set_in_direction,
        "dateModified": ManifestBuilder.set_date_modified,
        "datePublished": ManifestBuilder.set_date_published,
        "readingProgression": ManifestBuilder.set_reading_progression,
    }
    for term in ACCESSIBILITY_TERMS:
        table[term] = lambda builder, value, term=term: builder.set_accessibility_terms(
            term, value
        )
    for role in CONTRIBUTOR_ROLES:
        table[role] = lambda builder, value, role=role: builder.set_contributors(
            role, value
        )
    for term in LINK_COLLECTIONS:
        table[term] = lambda builder, value, term=term: builder.set_links(term, value)
    return table


TERM_SETTERS: dict[str, Setter] = _build_setter_table()


def build_manifest(
    diagnostics: Diagnostics,
    canonical: dict[str, Any],
    base: str,
    language: str | None = None,
    separate_file: bool = True,
) -> PublicationManifest:
    """Build the typed manifest model from a canonical manifest.

    Args:
        diagnostics: Log receiving warnings and errors
        canonical: Output of the canonicalizer
        base: Base URL for relative references
        language: Default language of the manifest
        separate_file: Whether the manifest was loaded from its own file

    Returns:
        The populated manifest model
    """
    builder = ManifestBuilder(diagnostics, base, language, separate_file)
    return builder.build(canonical)
