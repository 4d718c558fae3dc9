"""Network clients for fetching manifests and HTML documents."""

from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    ContentTypeError,
    NotFoundError,
    RateLimitError,
)
from .fetcher import HTML_MEDIA_TYPE, JSON_MEDIA_TYPE, FetchedResource, ResourceFetcher

__all__ = [
    "Client",
    "ResourceFetcher",
    "FetchedResource",
    "JSON_MEDIA_TYPE",
    "HTML_MEDIA_TYPE",
    "ClientError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ContentTypeError",
]
