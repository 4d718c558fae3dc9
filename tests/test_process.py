"""Tests for the manifest processing pipeline."""

import json
from unittest.mock import MagicMock

import pytest

from publication_manifest.clients import (
    HTML_MEDIA_TYPE,
    JSON_MEDIA_TYPE,
    FetchedResource,
    NotFoundError,
)
from publication_manifest.diagnostics import Diagnostics
from publication_manifest.errors import ManifestNotFoundError, ManifestParseError
from publication_manifest.html_document import HTMLDocument
from publication_manifest.process import (
    check_context,
    entry_page_of,
    fetch_and_process,
    obtain_manifest,
    parse_manifest,
    process_manifest,
    resolve_toc,
)
from publication_manifest.manifest_builder import build_manifest
from schemas import TextDirection

CONTEXT = ["https://schema.org", "https://www.w3.org/ns/wp-context"]
ENTRY_URL = "https://x.test/book/index.html"
MANIFEST_URL = "https://x.test/book/manifest.json"

EMBEDDED_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Moby-Dick</title>
  <link rel="publication" href="#wpm">
  <script id="wpm" type="application/ld+json" dir="rtl">
    {
      "@context": ["https://schema.org", "https://www.w3.org/ns/wp-context"],
      "type": "Book",
      "resources": [{"url": "index.html", "rel": "contents"}]
    }
  </script>
</head>
<body>
  <nav role="doc-toc"><a href="c1.html">One</a><a href="c2.html">Two</a></nav>
</body>
</html>"""

LINKED_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Moby-Dick</title>
  <link rel="publication" href="manifest.json">
</head>
<body><p>Call me Ishmael.</p></body>
</html>"""


@pytest.fixture
def embedded_document():
    return HTMLDocument.from_string(EMBEDDED_PAGE, ENTRY_URL)


@pytest.fixture
def linked_document():
    return HTMLDocument.from_string(LINKED_PAGE, ENTRY_URL)


@pytest.fixture
def mock_fetcher():
    return MagicMock()


class TestParseManifest:
    """Tests for parsing manifest text."""

    def test_object(self):
        assert parse_manifest('{"name": "Hi"}') == {"name": "Hi"}

    def test_malformed_json(self):
        with pytest.raises(ManifestParseError, match="Syntax error"):
            parse_manifest('{"name": ')

    def test_not_an_object(self):
        with pytest.raises(ManifestParseError, match="JSON list"):
            parse_manifest('["name"]')


class TestCheckContext:
    """Tests for the @context and type check."""

    def test_expected_context(self, diagnostics):
        check_context(diagnostics, {"@context": CONTEXT + ["extra"], "type": "Book"})

        assert diagnostics.warnings == []

    def test_missing_context_and_type(self, diagnostics):
        check_context(diagnostics, {})

        assert len(diagnostics.warnings) == 2

    def test_wrong_context(self, diagnostics):
        check_context(diagnostics, {"@context": "https://schema.org", "@type": "Book"})

        assert len(diagnostics.warnings) == 1
        assert "@context" in diagnostics.warnings[0]


class TestProcessManifest:
    """Tests for process_manifest()."""

    def test_sample_manifest(self, sample_manifest_text):
        result = process_manifest(sample_manifest_text, "https://example.org/book/manifest.json")

        assert result.canonical["name"] == [{"value": "Moby-Dick", "language": "en"}]
        assert result.manifest.name[0].language == "en"
        assert result.manifest.cover[0].url == "https://example.org/book/cover.jpg"
        assert result.manifest.accessibility_report.url == "https://example.org/book/a11y.html"
        assert result.manifest.privacy_policy.url == "https://example.org/book/privacy.html"
        assert result.toc is None
        assert not result.diagnostics.has_errors

    def test_default_language_reaches_model(self):
        result = process_manifest(
            json.dumps({"@context": CONTEXT, "type": "Book", "name": "Hi"}),
            MANIFEST_URL,
            language="de",
        )

        assert result.manifest.in_language == "de"
        assert result.manifest.name[0].language == "de"

    def test_malformed_manifest_is_fatal(self):
        with pytest.raises(ManifestParseError):
            process_manifest("not json", MANIFEST_URL)

    def test_continues_given_diagnostics(self):
        diagnostics = Diagnostics()
        diagnostics.warning(False, "earlier")

        result = process_manifest("{}", MANIFEST_URL, diagnostics=diagnostics)

        assert result.diagnostics is diagnostics
        assert diagnostics.warnings[0] == "earlier"

    def test_toc_fetched_when_contents_link_present(self, mock_fetcher, navigation_html):
        mock_fetcher.fetch_html.return_value = HTMLDocument.from_string(
            navigation_html, "https://x.test/book/toc.html"
        )
        text = json.dumps(
            {"@context": CONTEXT, "type": "Book", "resources": [{"url": "toc.html", "rel": "contents"}]}
        )

        result = process_manifest(text, MANIFEST_URL, fetcher=mock_fetcher)

        mock_fetcher.fetch_html.assert_called_once_with("https://x.test/book/toc.html")
        assert result.toc.name == "Table of Contents"
        assert len(result.toc.entries) == 3

    def test_no_toc_fetch_without_contents_link(self, mock_fetcher, sample_manifest):
        del sample_manifest["resources"][1]

        result = process_manifest(json.dumps(sample_manifest), MANIFEST_URL, fetcher=mock_fetcher)

        mock_fetcher.fetch_html.assert_not_called()
        assert result.toc is None


class TestResolveToc:
    """Tests for resolve_toc()."""

    def build(self, diagnostics, url):
        return build_manifest(
            diagnostics, {"resources": [{"url": url, "rel": ["contents"]}]}, MANIFEST_URL
        )

    def test_fetch_failure_is_warning(self, diagnostics, mock_fetcher):
        mock_fetcher.fetch_html.side_effect = NotFoundError("Resource not found: toc.html")
        manifest = self.build(diagnostics, "https://x.test/book/toc.html")

        toc = resolve_toc(diagnostics, manifest, mock_fetcher)

        assert toc is None
        assert len(diagnostics.warnings) == 1
        assert "is unavailable" in diagnostics.warnings[0]
        assert diagnostics.errors == []

    def test_document_without_navigation(self, diagnostics, mock_fetcher):
        mock_fetcher.fetch_html.return_value = HTMLDocument.from_string(
            "<p>Nothing here</p>", "https://x.test/book/toc.html"
        )
        manifest = self.build(diagnostics, "https://x.test/book/toc.html")

        toc = resolve_toc(diagnostics, manifest, mock_fetcher)

        assert toc is None
        assert diagnostics.warnings == ["No table of contents found in https://x.test/book/toc.html"]

    def test_entry_document_is_reused(self, diagnostics, mock_fetcher, embedded_document):
        manifest = self.build(diagnostics, ENTRY_URL + "#toc")

        toc = resolve_toc(diagnostics, manifest, mock_fetcher, embedded_document)

        mock_fetcher.fetch_html.assert_not_called()
        assert [entry.url for entry in toc.entries] == [
            "https://x.test/book/c1.html",
            "https://x.test/book/c2.html",
        ]


class TestObtainManifest:
    """Tests for locating the manifest through an entry page."""

    def test_entry_page(self, embedded_document):
        entry_page = entry_page_of(embedded_document)

        assert entry_page.url == ENTRY_URL
        assert entry_page.title == "Moby-Dick"
        assert entry_page.title_language == "en"

    def test_embedded_manifest(self, embedded_document, mock_fetcher):
        result = obtain_manifest(embedded_document, mock_fetcher)

        manifest = result.manifest
        assert manifest.name[0].value == "Moby-Dick"
        assert manifest.name[0].language == "en"
        assert manifest.in_language == "en"
        assert manifest.in_direction == TextDirection.RTL
        assert [link.url for link in manifest.reading_order] == [ENTRY_URL]
        # The entry page is not the manifest file, so it may be linked
        assert manifest.resources[0].url == ENTRY_URL
        assert result.toc.entries[0].url == "https://x.test/book/c1.html"
        mock_fetcher.fetch_html.assert_not_called()
        assert result.diagnostics.errors == []
        assert result.diagnostics.warnings == []

    def test_embedded_manifest_without_fetcher(self, embedded_document):
        result = obtain_manifest(embedded_document)

        assert result.manifest.toc.url == ENTRY_URL
        assert result.toc is None

    def test_missing_script(self):
        document = HTMLDocument.from_string(
            '<html><head><link rel="publication" href="#nowhere"></head></html>', ENTRY_URL
        )

        with pytest.raises(ManifestNotFoundError, match="not found"):
            obtain_manifest(document)

    def test_script_id_with_quote(self):
        document = HTMLDocument.from_string(
            """<html lang="en"><head><title>Quoted</title>
            <link rel="publication" href='#a"b'>
            <script id='a"b' type="application/ld+json">{"type": "Book"}</script>
            </head></html>""",
            ENTRY_URL,
        )

        result = obtain_manifest(document)

        assert result.manifest.type == ["Book"]
        assert result.manifest.name[0].value == "Quoted"

    def test_fragment_naming_other_element(self):
        document = HTMLDocument.from_string(
            '<html><head><link rel="publication" href="#wpm"></head>'
            '<body><div id="wpm">{}</div></body></html>',
            ENTRY_URL,
        )

        with pytest.raises(ManifestNotFoundError, match="not found"):
            obtain_manifest(document)

    def test_no_manifest_link(self):
        document = HTMLDocument.from_string("<p>Plain page</p>", ENTRY_URL)

        with pytest.raises(ManifestNotFoundError, match="No manifest reference"):
            obtain_manifest(document)

    def test_separate_file(self, linked_document, mock_fetcher):
        mock_fetcher.fetch_json.return_value = json.dumps(
            {"@context": CONTEXT, "type": "Book", "name": "Own title", "readingOrder": "c1.html"}
        )

        result = obtain_manifest(linked_document, mock_fetcher)

        mock_fetcher.fetch_json.assert_called_once_with(MANIFEST_URL)
        assert result.manifest.name[0].value == "Own title"
        assert result.manifest.reading_order[0].url == "https://x.test/book/c1.html"
        assert result.diagnostics.warnings == []

    def test_separate_file_without_fetcher(self, linked_document):
        with pytest.raises(ManifestNotFoundError, match="no fetcher"):
            obtain_manifest(linked_document)

    def test_unavailable_manifest_falls_back_to_entry_page(self, linked_document, mock_fetcher):
        mock_fetcher.fetch_json.side_effect = NotFoundError(f"Resource not found: {MANIFEST_URL}")

        result = obtain_manifest(linked_document, mock_fetcher)

        assert result.manifest.name[0].value == "Moby-Dick"
        assert result.manifest.reading_order[0].url == ENTRY_URL
        assert result.diagnostics.warnings[0].startswith(f"Manifest {MANIFEST_URL} is unavailable")


class TestFetchAndProcess:
    """Tests for fetch_and_process()."""

    def test_json_resource(self, mock_fetcher, sample_manifest_text):
        mock_fetcher.fetch.return_value = FetchedResource(
            url=MANIFEST_URL, media_type=JSON_MEDIA_TYPE, text=sample_manifest_text
        )
        mock_fetcher.fetch_html.side_effect = NotFoundError("Resource not found")

        result = fetch_and_process(MANIFEST_URL, mock_fetcher)

        mock_fetcher.fetch.assert_called_once_with(MANIFEST_URL, (JSON_MEDIA_TYPE, HTML_MEDIA_TYPE))
        assert result.manifest.url == "https://example.org/book/"
        assert result.toc is None

    def test_html_resource(self, mock_fetcher):
        mock_fetcher.fetch.return_value = FetchedResource(
            url=ENTRY_URL, media_type=HTML_MEDIA_TYPE, text=EMBEDDED_PAGE
        )

        result = fetch_and_process("https://x.test/book/", mock_fetcher)

        assert result.manifest.type == ["Book"]
        assert result.manifest.reading_order[0].url == ENTRY_URL
        assert len(result.toc.entries) == 2
