"""Parsed HTML documents.

Wraps an lxml HTML tree with the handful of DOM operations manifest
discovery needs: CSS selector queries, inherited attribute lookup and text
content.
"""

import logging
import re
from urllib.parse import urljoin

from lxml import etree, html

from .errors import DocumentParseError

logger = logging.getLogger(__name__)

# lxml refuses decoded text that still declares an encoding
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


class HTMLDocument:
    """An HTML document together with the URL it was retrieved from.

    Example:
        document = HTMLDocument.from_string(text, "https://example.org/book/")
        link = document.query('link[rel~="publication"]')
    """

    def __init__(self, root: html.HtmlElement, url: str):
        self._root = root
        self._url = url

    @classmethod
    def from_string(cls, text: str, url: str) -> "HTMLDocument":
        """Parse HTML text.

        Args:
            text: The HTML source
            url: Final address of the document

        Returns:
            The parsed document

        Raises:
            DocumentParseError: If the text cannot be parsed as HTML
        """
        if not text or not text.strip():
            raise DocumentParseError(f"Empty HTML document at {url}")
        text = _XML_DECLARATION.sub("", text, count=1)
        try:
            root = html.document_fromstring(text)
        except (etree.ParserError, ValueError) as e:
            raise DocumentParseError(f"HTML parsing error in {url}: {e}") from e
        return cls(root, url)

    @property
    def root(self) -> html.HtmlElement:
        return self._root

    @property
    def url(self) -> str:
        return self._url

    @property
    def base_url(self) -> str:
        """Base URL for relative references, honouring <base href>."""
        base = self.query("base[href]")
        if base is not None:
            return urljoin(self._url, base.get("href", "").strip())
        return self._url

    def query(self, selector: str) -> html.HtmlElement | None:
        """First element matching a CSS selector, in document order."""
        matches = self._root.cssselect(selector)
        return matches[0] if matches else None

    @property
    def title(self) -> html.HtmlElement | None:
        return self.query("title")

    def resolve(self, reference: str) -> str:
        return urljoin(self.base_url, reference)

    @staticmethod
    def get_attr(element: html.HtmlElement, name: str) -> str:
        """Value of an attribute, inherited from the nearest ancestor.

        Typical use is finding the language or direction of an element.

        Returns:
            The attribute value, or "" if no ancestor sets it
        """
        current = element
        while current is not None:
            value = current.get(name)
            if value:
                return value
            current = current.getparent()
        return ""

    @staticmethod
    def text(element: html.HtmlElement) -> str:
        return element.text_content().strip()
