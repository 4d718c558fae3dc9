"""Table of contents extraction from navigation documents."""

import logging

from schemas.toc import TableOfContents, TocEntry

from .html_document import HTMLDocument

logger = logging.getLogger(__name__)

TOC_SELECTORS = ('[role~="doc-toc"]', "nav")
HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"


def extract_toc(document: HTMLDocument) -> TableOfContents | None:
    """Extract the table of contents of a navigation document.

    The first element with the ``doc-toc`` role is used, falling back to the
    first <nav> element in document order. Links are resolved against the
    document's base URL.

    Args:
        document: The parsed navigation document

    Returns:
        The table of contents, or None if the document has no navigation element
    """
    element = None
    for selector in TOC_SELECTORS:
        element = document.query(selector)
        if element is not None:
            break

    if element is None:
        logger.debug(f"No navigation element found in {document.url}")
        return None

    headings = element.cssselect(HEADING_SELECTOR)
    name = HTMLDocument.text(headings[0]) if headings else None

    entries = [
        TocEntry(
            url=document.resolve(anchor.get("href").strip()),
            name=HTMLDocument.text(anchor) or None,
        )
        for anchor in element.cssselect("a[href]")
    ]

    logger.debug(f"Found {len(entries)} table of contents entries in {document.url}")
    return TableOfContents(url=document.url, name=name or None, entries=entries)
