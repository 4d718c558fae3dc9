"""Tests for the CLI module."""

import json
from unittest.mock import MagicMock, patch

import pytest

from publication_manifest.cli import main
from publication_manifest.clients import JSON_MEDIA_TYPE, FetchedResource, NotFoundError
from publication_manifest.html_document import HTMLDocument

CONTEXT = ["https://schema.org", "https://www.w3.org/ns/wp-context"]


@pytest.fixture
def manifest_file(tmp_path):
    """A manifest on disk with one invalid accessibility term."""
    path = tmp_path / "manifest.json"
    path.write_text(
        json.dumps(
            {
                "@context": CONTEXT,
                "type": "Book",
                "name": "Hi",
                "author": "Jane Doe",
                "readingOrder": "doc.html",
                "accessMode": ["textual", "invalid-term"],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestCLICanonicalize:
    """Tests for the canonicalize command."""

    def test_canonical_output(self, manifest_file, capsys):
        result = main([
            "canonicalize", str(manifest_file),
            "--base", "https://x.test/m.json",
            "--lang", "en",
            "--output", "canonical",
        ])

        assert result == 0
        canonical = json.loads(capsys.readouterr().out)
        assert canonical["name"] == [{"value": "Hi", "language": "en"}]
        assert canonical["readingOrder"] == [
            {"type": ["LinkedResource"], "url": "https://x.test/doc.html"}
        ]

    def test_model_output(self, manifest_file, capsys):
        result = main([
            "canonicalize", str(manifest_file),
            "--base", "https://x.test/m.json",
            "--output", "model",
        ])

        assert result == 0
        model = json.loads(capsys.readouterr().out)
        assert model["author"][0]["name"][0]["value"] == "Jane Doe"
        assert model["accessMode"] == ["textual"]

    def test_both_outputs_by_default(self, manifest_file, capsys):
        result = main(["canonicalize", str(manifest_file), "--base", "https://x.test/m.json"])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert set(data) == {"canonical", "manifest"}

    def test_diagnostics_are_logged(self, manifest_file, caplog):
        main(["canonicalize", str(manifest_file), "--base", "https://x.test/m.json"])

        assert "Warnings: 1" in caplog.text
        assert '"invalid-term" is not a valid term for accessMode' in caplog.text

    def test_direction_option(self, manifest_file, capsys):
        main([
            "canonicalize", str(manifest_file),
            "--base", "https://x.test/m.json",
            "--dir", "rtl",
            "--output", "model",
        ])

        assert json.loads(capsys.readouterr().out)["inDirection"] == "rtl"

    def test_base_defaults_to_file_uri(self, manifest_file, capsys):
        result = main(["canonicalize", str(manifest_file), "--output", "canonical"])

        assert result == 0
        canonical = json.loads(capsys.readouterr().out)
        assert canonical["readingOrder"][0]["url"] == (manifest_file.resolve().parent / "doc.html").as_uri()

    def test_missing_file(self, tmp_path, caplog):
        result = main(["canonicalize", str(tmp_path / "missing.json")])

        assert result == 1
        assert "Manifest file not found" in caplog.text

    def test_malformed_file(self, tmp_path, caplog):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = main(["canonicalize", str(path)])

        assert result == 1
        assert "Failed to canonicalize" in caplog.text


class TestCLIProcess:
    """Tests for the process command."""

    @patch("publication_manifest.cli.ResourceFetcher")
    def test_process_manifest_url(self, mock_fetcher_class, capsys):
        mock_fetcher = MagicMock()
        mock_fetcher.__enter__ = MagicMock(return_value=mock_fetcher)
        mock_fetcher.__exit__ = MagicMock(return_value=False)
        mock_fetcher.fetch.return_value = FetchedResource(
            url="https://x.test/m.json",
            media_type=JSON_MEDIA_TYPE,
            text=json.dumps({"@context": CONTEXT, "type": "Book", "name": "Hi"}),
        )
        mock_fetcher_class.return_value = mock_fetcher

        result = main(["process", "https://x.test/m.json", "--output", "model"])

        assert result == 0
        model = json.loads(capsys.readouterr().out)
        assert model["name"] == [{"value": "Hi"}]
        config = mock_fetcher_class.call_args[0][0]
        assert "User-Agent" in config["headers"]

    @patch("publication_manifest.cli.ResourceFetcher")
    def test_process_reports_toc(self, mock_fetcher_class, capsys, navigation_html):
        mock_fetcher = MagicMock()
        mock_fetcher.__enter__ = MagicMock(return_value=mock_fetcher)
        mock_fetcher.__exit__ = MagicMock(return_value=False)
        mock_fetcher.fetch.return_value = FetchedResource(
            url="https://x.test/book/m.json",
            media_type=JSON_MEDIA_TYPE,
            text=json.dumps(
                {
                    "@context": CONTEXT,
                    "type": "Book",
                    "resources": [{"url": "toc.html", "rel": "contents"}],
                }
            ),
        )
        mock_fetcher.fetch_html.return_value = HTMLDocument.from_string(
            navigation_html, "https://x.test/book/toc.html"
        )
        mock_fetcher_class.return_value = mock_fetcher

        result = main(["process", "https://x.test/book/m.json"])

        assert result == 0
        toc = json.loads(capsys.readouterr().out)["toc"]
        assert toc["name"] == "Table of Contents"
        assert toc["resourceUrls"] == [
            "https://x.test/book/chapter1.html",
            "https://x.test/book/chapter2.html",
        ]

    @patch("publication_manifest.cli.ResourceFetcher")
    def test_process_fetch_failure(self, mock_fetcher_class, caplog):
        mock_fetcher = MagicMock()
        mock_fetcher.__enter__ = MagicMock(return_value=mock_fetcher)
        mock_fetcher.__exit__ = MagicMock(return_value=False)
        mock_fetcher.fetch.side_effect = NotFoundError("Resource not found: https://x.test/m.json")
        mock_fetcher_class.return_value = mock_fetcher

        result = main(["process", "https://x.test/m.json"])

        assert result == 1
        assert "Failed to process https://x.test/m.json" in caplog.text


class TestCLIMain:
    """Tests for the main entry point."""

    def test_no_command_prints_help(self, capsys):
        result = main([])

        assert result == 0
        assert "publication-manifest" in capsys.readouterr().out

    def test_unknown_profile_rejected(self, manifest_file):
        with pytest.raises(SystemExit):
            main(["canonicalize", str(manifest_file), "--profile", "audiobooks"])
