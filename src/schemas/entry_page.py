"""Entry page domain object."""

from dataclasses import dataclass


@dataclass
class EntryPage:
    """The primary entry page a manifest was discovered from.

    Supplies the fallback title and the default reading order of a
    publication.

    Attributes:
        url: Address of the page
        title: Text content of the page's <title>
        title_language: Language of the <title>, inherited from ancestors
    """

    url: str
    title: str | None = None
    title_language: str | None = None
