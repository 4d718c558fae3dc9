"""Table of contents schemas."""

from pydantic import BaseModel


class TocEntry(BaseModel):
    """A single link in a table of contents."""

    url: str
    name: str | None = None


class TableOfContents(BaseModel):
    """Table of contents extracted from a navigation document.

    Attributes:
        url: Address of the navigation document
        name: Heading of the navigation element, if any
        entries: Links in document order, resolved to absolute URLs
    """

    url: str
    name: str | None = None
    entries: list[TocEntry] = []

    def resource_urls(self) -> list[str]:
        """Distinct entry URLs without fragments, in first-occurrence order."""
        urls: list[str] = []
        for entry in self.entries:
            address = entry.url.split("#", 1)[0]
            if address not in urls:
                urls.append(address)
        return urls
