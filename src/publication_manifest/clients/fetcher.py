"""Fetch manifests and HTML documents over HTTP(S)."""

import logging
from dataclasses import dataclass

import httpx

from ..html_document import HTMLDocument
from ..utils import check_url
from .client import Client
from .exceptions import ContentTypeError

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
HTML_MEDIA_TYPE = "text/html"


@dataclass
class FetchedResource:
    """Body of a fetched resource.

    Attributes:
        url: Final address of the resource, after redirects
        media_type: Base media type of the response
        text: Decoded response body
    """

    url: str
    media_type: str
    text: str


def base_media_type(content_type: str | None) -> str:
    """Reduce a Content-Type header to its base media type.

    Parameters are dropped and structured syntax suffixes are folded, so
    ``application/ld+json; charset=utf-8`` becomes ``application/json``.
    """
    if not content_type:
        return ""
    media_type = content_type.split(";", 1)[0].strip().lower()
    major, _, minor = media_type.partition("/")
    if "+" in minor:
        minor = minor.rsplit("+", 1)[1]
    return f"{major}/{minor}" if minor else major


class ResourceFetcher(Client):
    """Client fetching manifests and HTML documents.

    Every address is sanity checked before it is dereferenced, and the
    response must carry one of the expected media types.

    Example:
        with ResourceFetcher() as fetcher:
            text = fetcher.fetch_json("https://example.org/book/manifest.json")
    """

    def _get_checked(self, url: str, media_types: tuple[str, ...]) -> httpx.Response:
        checked_url = check_url(url)
        response = self.get(checked_url)
        media_type = base_media_type(response.headers.get("content-type"))
        if media_type not in media_types:
            raise ContentTypeError(
                f"{' or '.join(media_types)} is expected at {url} (got {media_type or 'nothing'})",
                content_type=media_type,
                expected=media_types,
            )
        return response

    def fetch(
        self, url: str, media_types: tuple[str, ...] = (JSON_MEDIA_TYPE, HTML_MEDIA_TYPE)
    ) -> FetchedResource:
        """Fetch a resource with one of the given media types.

        Args:
            url: Absolute http(s) URL of the resource
            media_types: Acceptable base media types

        Returns:
            The fetched resource

        Raises:
            InvalidURLError: If the URL fails the sanity check
            ContentTypeError: If the response has an unexpected media type
            APIError: If the server returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        response = self._get_checked(url, media_types)
        logger.debug(f"Fetched {response.url}")
        return FetchedResource(
            url=str(response.url),
            media_type=base_media_type(response.headers.get("content-type")),
            text=response.text,
        )

    def fetch_json(self, url: str) -> str:
        """Fetch the text of a JSON resource."""
        return self.fetch(url, (JSON_MEDIA_TYPE,)).text

    def fetch_html(self, url: str) -> HTMLDocument:
        """Fetch and parse an HTML document.

        The document keeps the final URL of the response, after redirects.

        Raises:
            DocumentParseError: If the body cannot be parsed as HTML
        """
        resource = self.fetch(url, (HTML_MEDIA_TYPE,))
        return HTMLDocument.from_string(resource.text, resource.url)
