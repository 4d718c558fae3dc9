"""Validation and coercion helpers shared by the canonicalizer and builders."""

import copy
import re
from datetime import datetime
from typing import Any
from urllib.parse import urljoin, urlsplit

import httpx

from .diagnostics import Diagnostics
from .errors import InvalidURLError

WEB_SCHEMES = ("http", "https")

# Characters that may not appear unescaped in a URI (RFC 3986)
_FORBIDDEN_URL_CHARS = re.compile(r'[\s<>"{}|\\^`]')

# RFC 5646 language tag: langtag, private use, or an "i-" irregular tag
_LANGUAGE_TAG = re.compile(
    r"^(?:"
    r"(?:[a-z]{2,3}(?:-[a-z]{3}){0,3}|[a-z]{4}|[a-z]{5,8})"
    r"(?:-[a-z]{4})?"
    r"(?:-(?:[a-z]{2}|\d{3}))?"
    r"(?:-(?:[a-z\d]{5,8}|\d[a-z\d]{3}))*"
    r"(?:-[a-wyz\d](?:-[a-z\d]{2,8})+)*"
    r"(?:-x(?:-[a-z\d]{1,8})+)?"
    r"|x(?:-[a-z\d]{1,8})+"
    r"|i-[a-z]{2,8}"
    r")$",
    re.IGNORECASE,
)

# Normal play time (RFC 2326): "now", seconds, or h:mm:ss, each with an optional fraction
_NPT_DURATION = re.compile(
    r"^(?:now|\d+(?:\.\d*)?|\d+:[0-5]\d:[0-5]\d(?:\.\d*)?)$"
)

_PARTIAL_DATE_FORMATS = ("%Y", "%Y-%m")


def check_url(address: str, diagnostics: Diagnostics | None = None) -> str | None:
    """Run a basic sanity check on a URL.

    The checks are:

    1. the scheme must be http or https (a missing scheme means the value is a
       file name, which is rejected as well);
    2. the address must be a well-formed web URI with a host;
    3. an explicit port must be above 1024.

    When a diagnostics log is supplied, a failure is recorded as a warning and
    ``None`` is returned; an unsafe port is recorded but the address is still
    usable. Without a log the same failures raise, since the caller is about
    to dereference the address and has nothing else to do with it.

    Args:
        address: The URL to check
        diagnostics: Optional log receiving the failures

    Returns:
        The address if it can be used, otherwise None

    Raises:
        InvalidURLError: If no diagnostics log is given and a check fails
    """

    def fail(message: str) -> None:
        if diagnostics is None:
            raise InvalidURLError(message, address=address)
        diagnostics.warning(False, message)
        return None

    if not isinstance(address, str) or not address:
        return fail(f"Invalid URL: {address!r} is not an address")

    try:
        parsed = urlsplit(address)
        port = parsed.port
    except ValueError:
        return fail(f"The url {address} isn't valid")

    if not parsed.scheme:
        return fail(f"Invalid URL: no protocol ({address})")

    if parsed.scheme.lower() not in WEB_SCHEMES:
        return fail(f"Only http(s) url-s are accepted ({address})")

    if _FORBIDDEN_URL_CHARS.search(address):
        return fail(f"The url {address} isn't valid")

    try:
        host = httpx.URL(address).host
    except httpx.InvalidURL:
        return fail(f"The url {address} isn't valid")

    if not host:
        return fail(f"The url {address} isn't valid")

    if port is not None and port <= 1024:
        message = f"Unsafe port number used in {address} ({port})"
        if diagnostics is None:
            raise InvalidURLError(message, address=address)
        diagnostics.warning(False, message)

    return address


def absolutize(reference: Any, base: str) -> Any:
    """Resolve a (possibly relative) reference against ``base``.

    Non-string values are returned unchanged. Resolving an already
    absolute reference returns it as is, so the operation is idempotent.
    """
    if not isinstance(reference, str) or not base:
        return reference
    return urljoin(base, reference)


def is_language_tag(value: Any) -> bool:
    """Check a value against the BCP 47 language tag grammar."""
    return isinstance(value, str) and _LANGUAGE_TAG.match(value) is not None


def is_iso_date(value: Any) -> bool:
    """Check whether a value parses as an ISO 8601 date or date-time.

    Year and year-month forms (``2018``, ``2018-05``) are accepted as well.
    """
    if not isinstance(value, str) or not value:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
        return True
    except ValueError:
        pass
    for fmt in _PARTIAL_DATE_FORMATS:
        try:
            datetime.strptime(value, fmt)
            return True
        except ValueError:
            continue
    return False


def is_npt_duration(value: Any) -> bool:
    """Check a value against the normal play time grammar."""
    return isinstance(value, str) and _NPT_DURATION.match(value) is not None


def as_list(value: Any) -> list:
    """Wrap a scalar into a single-element list; lists are returned as is."""
    if isinstance(value, list):
        return value
    return [value]


def strip_fragment(address: str) -> str:
    """Remove the fragment identifier from a URL."""
    return address.split("#", 1)[0]


def copy_extra_fields(source: dict, known: frozenset[str]) -> dict[str, Any]:
    """Deep copy every key of ``source`` that is not in ``known``.

    Keeps non-schema properties of an entity so that information is never
    silently dropped, without aliasing the input.
    """
    return {
        key: copy.deepcopy(value) for key, value in source.items() if key not in known
    }
