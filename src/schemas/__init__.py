"""Schema definitions for publication manifests."""

from .contributor import Contributor, ContributorKind
from .entry_page import EntryPage
from .linked_resource import LinkedResource
from .localizable_string import LocalizableString
from .manifest import ProgressionDirection, PublicationManifest, TextDirection
from .toc import TableOfContents, TocEntry

__all__ = [
    "Contributor",
    "ContributorKind",
    "EntryPage",
    "LinkedResource",
    "LocalizableString",
    "ProgressionDirection",
    "PublicationManifest",
    "TableOfContents",
    "TextDirection",
    "TocEntry",
]
