"""Pytest fixtures for publication-manifest tests."""

import json
from unittest.mock import MagicMock

import pytest

from publication_manifest.diagnostics import Diagnostics


@pytest.fixture
def diagnostics():
    """Fresh diagnostics log."""
    return Diagnostics()


@pytest.fixture
def sample_manifest():
    """A complete manifest exercising most terms."""
    return {
        "@context": ["https://schema.org", "https://www.w3.org/ns/wp-context"],
        "type": "CreativeWork",
        "id": "urn:isbn:9780123456789",
        "url": "https://example.org/book/",
        "name": "Moby-Dick",
        "inLanguage": "en",
        "inDirection": "ltr",
        "datePublished": "1851-10-18",
        "dateModified": "2018-05-06T10:00:00Z",
        "readingProgression": "ltr",
        "author": [
            "Herman Melville",
            {"type": "Person", "name": "Ishmael", "url": "ishmael.html", "role": "narrator"},
        ],
        "publisher": {"type": "Organization", "name": "Harper & Brothers"},
        "accessMode": ["textual", "visual"],
        "accessibilityFeature": "tableOfContents",
        "accessibilitySummary": "Fully navigable text.",
        "readingOrder": [
            "chapter1.html",
            {"url": "chapter2.html", "name": "Loomings", "duration": "0:02:30"},
        ],
        "resources": [
            {"url": "cover.jpg", "rel": "cover", "encodingFormat": "image/jpeg"},
            {"url": "toc.html", "rel": "contents"},
        ],
        "links": [
            {"url": "a11y.html", "rel": "accessibility-report"},
            {"url": "privacy.html", "rel": ["privacy-policy"]},
        ],
    }


@pytest.fixture
def sample_manifest_text(sample_manifest):
    return json.dumps(sample_manifest)


@pytest.fixture
def navigation_html():
    """Navigation document with a doc-toc element."""
    return """<!DOCTYPE html>
<html lang="en">
<head><title>Contents</title></head>
<body>
  <nav role="doc-toc">
    <h2>Table of Contents</h2>
    <ol>
      <li><a href="chapter1.html">Chapter 1</a></li>
      <li><a href="chapter1.html#part2">Chapter 1, part 2</a></li>
      <li><a href="chapter2.html">Chapter 2</a></li>
    </ol>
  </nav>
</body>
</html>"""


@pytest.fixture
def make_response():
    """Factory for mocked httpx responses."""

    def _make_response(url, text, content_type="application/json", status_code=200):
        response = MagicMock()
        response.is_success = 200 <= status_code < 300
        response.status_code = status_code
        response.url = url
        response.headers = {"content-type": content_type}
        response.text = text
        return response

    return _make_response
