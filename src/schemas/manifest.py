"""Typed publication manifest schema.

The manifest model is populated term by term by the manifest builder and is
read-only afterwards. Every list-valued attribute is either a non-empty list
or None.

The derived links (accessibility report, privacy policy, cover, table of
contents) are looked up across the three link collections in the order
reading order, resources, links, and cached on first access.
"""

from enum import Enum
from functools import cached_property

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .contributor import Contributor
from .linked_resource import LinkedResource
from .localizable_string import LocalizableString

ACCESSIBILITY_REPORT_RELS = (
    "accessibility-report",
    "https://www.w3.org/ns/wp#accessibility-report",
)
PRIVACY_POLICY_RELS = ("privacy-policy",)
COVER_RELS = ("cover", "https://www.w3.org/ns/wp#cover")
TOC_RELS = ("contents",)


class TextDirection(str, Enum):
    """Base direction of the natural-language text in the manifest."""

    LTR = "ltr"
    RTL = "rtl"
    AUTO = "auto"


class ProgressionDirection(str, Enum):
    """Direction in which the reading order is paged through."""

    LTR = "ltr"
    RTL = "rtl"


class PublicationManifest(BaseModel):
    """Validated, typed view of a canonical publication manifest.

    Attributes:
        url: Address of the publication
        id: Canonical identifier of the publication
        type: Declared publication types
        name: Titles of the publication
        accessibility_summary: Human-readable accessibility statement
        in_language: Default language of the publication
        in_direction: Default base direction of text
        date_modified: Last modification date (ISO 8601)
        date_published: Publication date (ISO 8601)
        reading_progression: Paging direction of the reading order
        access_mode .. accessibility_hazard: Accessibility vocabulary terms
        author .. translator: Contributors by creative role
        reading_order: Resources in default reading order
        resources: Resources that are part of the publication
        links: Related resources outside the publication
    """

    url: str | None = None
    id: str | None = None
    type: list[str] | None = None
    name: list[LocalizableString] | None = None
    accessibility_summary: LocalizableString | None = None
    in_language: str | None = None
    in_direction: TextDirection | None = None
    date_modified: str | None = None
    date_published: str | None = None
    reading_progression: ProgressionDirection = ProgressionDirection.LTR

    # Accessibility
    access_mode: list[str] | None = None
    access_mode_sufficient: list[str] | None = None
    accessibility_api: list[str] | None = Field(default=None, alias="accessibilityAPI")
    accessibility_control: list[str] | None = None
    accessibility_feature: list[str] | None = None
    accessibility_hazard: list[str] | None = None

    # Creators
    artist: list[Contributor] | None = None
    author: list[Contributor] | None = None
    colorist: list[Contributor] | None = None
    contributor: list[Contributor] | None = None
    creator: list[Contributor] | None = None
    editor: list[Contributor] | None = None
    illustrator: list[Contributor] | None = None
    inker: list[Contributor] | None = None
    letterer: list[Contributor] | None = None
    penciler: list[Contributor] | None = None
    publisher: list[Contributor] | None = None
    read_by: list[Contributor] | None = None
    translator: list[Contributor] | None = None

    # Resource categorization
    reading_order: list[LinkedResource] | None = None
    resources: list[LinkedResource] | None = None
    links: list[LinkedResource] | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def _link_collections(self) -> list[list[LinkedResource]]:
        return [
            collection
            for collection in (self.reading_order, self.resources, self.links)
            if collection
        ]

    def find_link(self, *rels: str) -> LinkedResource | None:
        """First link, in search order, carrying one of ``rels``."""
        for collection in self._link_collections():
            for link in collection:
                if link.has_rel(*rels):
                    return link
        return None

    def find_links(self, *rels: str) -> list[LinkedResource] | None:
        """All links, in search order, carrying one of ``rels``."""
        found = [
            link
            for collection in self._link_collections()
            for link in collection
            if link.has_rel(*rels)
        ]
        return found or None

    @cached_property
    def accessibility_report(self) -> LinkedResource | None:
        return self.find_link(*ACCESSIBILITY_REPORT_RELS)

    @cached_property
    def privacy_policy(self) -> LinkedResource | None:
        return self.find_link(*PRIVACY_POLICY_RELS)

    @cached_property
    def cover(self) -> list[LinkedResource] | None:
        return self.find_links(*COVER_RELS)

    @cached_property
    def toc(self) -> LinkedResource | None:
        return self.find_link(*TOC_RELS)
