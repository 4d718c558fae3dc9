"""Builders for linked resources."""

from typing import Any

from schemas.linked_resource import LinkedResource

from ..diagnostics import Diagnostics
from ..utils import (
    absolutize,
    as_list,
    check_url,
    copy_extra_fields,
    is_npt_duration,
    strip_fragment,
)
from .results import BuildResult, Invalid, Ok, collect
from .strings import build_first_localizable_string, build_localizable_strings

LINK_KEYS = frozenset(
    {
        "url",
        "encodingFormat",
        "name",
        "description",
        "rel",
        "duration",
        "type",
        "@type",
    }
)


def build_linked_resource(
    diagnostics: Diagnostics,
    raw: Any,
    base: str,
    language: str | None = None,
    separate_file: bool = True,
) -> BuildResult[LinkedResource]:
    """Build a linked resource from a URL or a link object.

    The URL is required and is resolved against ``base``. When the manifest
    is a separate file, ``base`` is the manifest's own address and a link
    pointing back at it is rejected.

    Args:
        diagnostics: Log receiving warnings and errors
        raw: String or object from the canonical manifest
        base: Base URL for resolving the link's URL
        language: Default language for the link's name and description
        separate_file: Whether the manifest was loaded from its own file

    Returns:
        Ok with the link, or Invalid if it must be dropped
    """
    if isinstance(raw, str):
        raw = {"url": raw}

    if not diagnostics.error(
        isinstance(raw, dict), f"Invalid linked resource: {raw!r} is not an object."
    ):
        return Invalid("not an object")

    if not diagnostics.error(
        isinstance(raw.get("url"), str), "Invalid linked resource: no URL provided."
    ):
        return Invalid("no url")

    url = absolutize(raw["url"], base)
    check_url(url, diagnostics)

    if separate_file and not diagnostics.error(
        strip_fragment(url) != strip_fragment(base),
        f"Invalid linked resource: {url} refers to the manifest itself.",
    ):
        return Invalid("refers to the manifest")

    duration = raw.get("duration")
    if duration is not None and not diagnostics.warning(
        is_npt_duration(duration), f'"{duration}" is not a valid duration'
    ):
        duration = None

    name = None
    if raw.get("name"):
        name = build_localizable_strings(diagnostics, raw["name"], language)

    description = None
    if raw.get("description"):
        description = build_first_localizable_string(
            diagnostics, raw["description"], language
        )

    rel = None
    if raw.get("rel"):
        rel = [item for item in as_list(raw["rel"]) if isinstance(item, str)] or None

    raw_type = raw.get("type", raw.get("@type"))
    encoding_format = raw.get("encodingFormat")

    return Ok(
        LinkedResource(
            url=url,
            encoding_format=encoding_format if isinstance(encoding_format, str) else None,
            name=name,
            description=description,
            rel=rel,
            duration=duration,
            type=[str(item) for item in as_list(raw_type)] if raw_type else None,
            extra_fields=copy_extra_fields(raw, LINK_KEYS),
        )
    )


def build_linked_resources(
    diagnostics: Diagnostics,
    raw: Any,
    base: str,
    language: str | None = None,
    separate_file: bool = True,
) -> list[LinkedResource] | None:
    """Build a link collection, dropping the invalid links.

    Returns:
        The valid links, or None if none survive
    """
    return collect(
        lambda item: build_linked_resource(
            diagnostics, item, base, language, separate_file
        ),
        as_list(raw),
    )
