"""Top-level manifest processing.

``process_manifest`` turns manifest text into the canonical manifest, the
typed model and the diagnostics of the run. ``obtain_manifest`` first
locates the manifest through the entry page that references it, and
``fetch_and_process`` starts from any URL, either a manifest or an entry
page.

Only malformed manifest text stops processing. Everything else, including
failures to fetch the table of contents, ends up in the diagnostics.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from schemas.entry_page import EntryPage
from schemas.manifest import PublicationManifest
from schemas.toc import TableOfContents

from .canonicalizer import canonicalize
from .clients import (
    HTML_MEDIA_TYPE,
    JSON_MEDIA_TYPE,
    ClientError,
    ResourceFetcher,
)
from .diagnostics import Diagnostics
from .errors import DocumentParseError, InvalidURLError, ManifestNotFoundError, ManifestParseError
from .html_document import HTMLDocument
from .manifest_builder import build_manifest
from .navigation import extract_toc
from .profiles import CORE_PROFILE, Profile
from .utils import strip_fragment

logger = logging.getLogger(__name__)

EXPECTED_CONTEXT = ("https://schema.org", "https://www.w3.org/ns/wp-context")
MANIFEST_LINK_SELECTOR = 'link[rel~="publication"]'


@dataclass
class ProcessingResult:
    """Products of one manifest processing run.

    Attributes:
        canonical: The canonical manifest, JSON serializable
        manifest: The typed manifest model
        diagnostics: Warnings and errors recorded during the run
        toc: Table of contents from the navigation document, if one was fetched
    """

    canonical: dict[str, Any]
    manifest: PublicationManifest
    diagnostics: Diagnostics
    toc: TableOfContents | None = None


def parse_manifest(text: str) -> dict[str, Any]:
    """Parse manifest text into a JSON object.

    Raises:
        ManifestParseError: If the text is not JSON or not a JSON object
    """
    try:
        manifest = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ManifestParseError(f"Syntax error in the manifest: {e}") from e
    if not isinstance(manifest, dict):
        raise ManifestParseError(
            f"Manifest is a JSON {type(manifest).__name__} and not an object"
        )
    return manifest


def check_context(diagnostics: Diagnostics, manifest: dict[str, Any]) -> None:
    """Warn about a missing or unexpected @context and a missing type."""
    context = manifest.get("@context")
    diagnostics.warning(
        isinstance(context, list) and tuple(context[:2]) == EXPECTED_CONTEXT,
        f"The @context should start with {list(EXPECTED_CONTEXT)}",
    )
    diagnostics.warning(
        bool(manifest.get("type") or manifest.get("@type")),
        "The manifest does not declare a publication type",
    )


def process_manifest(
    text: str,
    base: str,
    *,
    entry_page: EntryPage | None = None,
    language: str = "",
    direction: str = "",
    separate_file: bool = True,
    profile: Profile = CORE_PROFILE,
    fetcher: ResourceFetcher | None = None,
    entry_document: HTMLDocument | None = None,
    diagnostics: Diagnostics | None = None,
) -> ProcessingResult:
    """Process manifest text.

    Args:
        text: The manifest as JSON text
        base: Base URL; the manifest's own URL when it is a separate file
        entry_page: The primary entry page, if the manifest was found through one
        language: Default language (e.g., from an embedding <script>)
        direction: Default base direction
        separate_file: Whether the manifest was loaded from its own file
        profile: Canonicalization profile
        fetcher: Used to fetch the navigation document; skipped if None
        entry_document: Parsed entry page, reused when it is the navigation document
        diagnostics: Log to continue; a new one is started if None

    Returns:
        The canonical manifest, the typed model and the diagnostics

    Raises:
        ManifestParseError: If the text is not a JSON object
    """
    manifest_object = parse_manifest(text)
    if diagnostics is None:
        diagnostics = Diagnostics()

    check_context(diagnostics, manifest_object)

    canonical = canonicalize(
        diagnostics,
        manifest_object,
        base,
        entry_page=entry_page,
        language=language,
        direction=direction,
        profile=profile,
    )

    manifest = build_manifest(
        diagnostics,
        canonical,
        base,
        language=canonical.get("inLanguage"),
        separate_file=separate_file,
    )

    result = ProcessingResult(canonical=canonical, manifest=manifest, diagnostics=diagnostics)

    if fetcher is not None and manifest.toc is not None:
        result.toc = resolve_toc(diagnostics, manifest, fetcher, entry_document)

    logger.info(
        f"Processed manifest at {base}: "
        f"{len(diagnostics.errors)} errors, {len(diagnostics.warnings)} warnings"
    )
    return result


def resolve_toc(
    diagnostics: Diagnostics,
    manifest: PublicationManifest,
    fetcher: ResourceFetcher,
    entry_document: HTMLDocument | None = None,
) -> TableOfContents | None:
    """Fetch the manifest's navigation document and extract its table of contents.

    Failures are recorded as warnings and yield None.
    """
    toc_link = manifest.toc
    if toc_link is None:
        return None

    if entry_document is not None and strip_fragment(entry_document.url) == strip_fragment(
        toc_link.url
    ):
        document = entry_document
    else:
        try:
            document = fetcher.fetch_html(toc_link.url)
        except (ClientError, InvalidURLError, DocumentParseError) as e:
            logger.warning(f"Could not fetch navigation document {toc_link.url}: {e}")
            diagnostics.warning(False, f"Navigation document {toc_link.url} is unavailable: {e}")
            return None

    toc = extract_toc(document)
    diagnostics.warning(
        toc is not None, f"No table of contents found in {toc_link.url}"
    )
    return toc


def entry_page_of(document: HTMLDocument) -> EntryPage:
    """Describe an HTML document as the entry page of a publication."""
    title = document.title
    if title is None:
        return EntryPage(url=document.url)
    return EntryPage(
        url=document.url,
        title=HTMLDocument.text(title) or None,
        title_language=HTMLDocument.get_attr(title, "lang") or None,
    )


def obtain_manifest(
    document: HTMLDocument,
    fetcher: ResourceFetcher | None = None,
    profile: Profile = CORE_PROFILE,
) -> ProcessingResult:
    """Locate and process the manifest referenced by an entry page.

    The first <link rel="publication"> either points into the page (a
    fragment naming an embedding <script>) or to a separate manifest file.
    A separate file that cannot be fetched is reported in the diagnostics
    and processed as an empty manifest, leaving the entry page's title and
    address as the only information.

    Args:
        document: The parsed entry page
        fetcher: Used for the separate manifest file and the navigation document
        profile: Canonicalization profile

    Returns:
        The processing result

    Raises:
        ManifestNotFoundError: If the page does not reference a manifest
        ManifestParseError: If the manifest text is not a JSON object
    """
    link = document.query(MANIFEST_LINK_SELECTOR)
    if link is None:
        raise ManifestNotFoundError(f"No manifest reference found in {document.url}")

    reference = (link.get("href") or "").strip()
    if not reference:
        raise ManifestNotFoundError(f"Empty manifest reference in {document.url}")

    entry_page = entry_page_of(document)

    if reference.startswith("#"):
        script = document.root.get_element_by_id(reference[1:], None)
        if script is None or script.tag != "script":
            raise ManifestNotFoundError(
                f"Manifest at {document.resolve(reference)} not found"
            )
        logger.info(f"Processing manifest embedded in {document.url}")
        return process_manifest(
            script.text or "",
            document.base_url,
            entry_page=entry_page,
            language=HTMLDocument.get_attr(script, "lang"),
            direction=HTMLDocument.get_attr(script, "dir"),
            separate_file=False,
            profile=profile,
            fetcher=fetcher,
            entry_document=document,
        )

    if fetcher is None:
        raise ManifestNotFoundError(
            f"Manifest at {document.resolve(reference)} is a separate file and no fetcher is available"
        )

    manifest_url = document.resolve(reference)
    diagnostics = Diagnostics()
    logger.info(f"Fetching manifest {manifest_url}")
    try:
        manifest_text = fetcher.fetch_json(manifest_url)
    except (ClientError, InvalidURLError) as e:
        # Fall back to what the entry page alone provides
        logger.warning(f"JSON fetch error in {manifest_url}: {e}")
        diagnostics.warning(False, f"Manifest {manifest_url} is unavailable: {e}")
        manifest_text = "{}"

    return process_manifest(
        manifest_text,
        manifest_url,
        entry_page=entry_page,
        separate_file=True,
        profile=profile,
        fetcher=fetcher,
        entry_document=document,
        diagnostics=diagnostics,
    )


def fetch_and_process(
    url: str,
    fetcher: ResourceFetcher,
    profile: Profile = CORE_PROFILE,
) -> ProcessingResult:
    """Process the publication at ``url``, a manifest or an entry page.

    Raises:
        ClientError: If the URL cannot be fetched
        InvalidURLError: If the URL fails the sanity check
        ManifestNotFoundError: If an entry page does not lead to a manifest
        ManifestParseError: If the manifest text is not a JSON object
    """
    resource = fetcher.fetch(url, (JSON_MEDIA_TYPE, HTML_MEDIA_TYPE))
    if resource.media_type == JSON_MEDIA_TYPE:
        return process_manifest(
            resource.text,
            resource.url,
            separate_file=True,
            profile=profile,
            fetcher=fetcher,
        )
    document = HTMLDocument.from_string(resource.text, resource.url)
    return obtain_manifest(document, fetcher, profile)
