"""Command-line interface for publication-manifest."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from publication_manifest.clients import ResourceFetcher
from publication_manifest.diagnostics import Diagnostics
from publication_manifest.process import ProcessingResult, fetch_and_process, process_manifest
from publication_manifest.profiles import PROFILES, get_profile

DEFAULT_PROFILE = "core"
DEFAULT_OUTPUT = "both"
OUTPUT_CHOICES = ("canonical", "model", "both")
USER_AGENT = "publication-manifest/1.0"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def render_result(result: ProcessingResult, output: str) -> str:
    """Serialize the requested products of a processing run as JSON."""
    data: dict[str, Any] = {}
    if output in ("canonical", "both"):
        data["canonical"] = result.canonical
    if output in ("model", "both"):
        data["manifest"] = result.manifest.model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
        if result.toc is not None:
            data["toc"] = result.toc.model_dump(mode="json", exclude_none=True)
            data["toc"]["resourceUrls"] = result.toc.resource_urls()
    if output != "both":
        data = next(iter(data.values()))
    return json.dumps(data, indent=2, ensure_ascii=False)


def log_diagnostics(logger: logging.Logger, diagnostics: Diagnostics) -> None:
    """Write the diagnostics of a run through the logger."""
    if diagnostics.errors:
        logger.error(f"  Errors: {len(diagnostics.errors)}")
        for error in diagnostics.errors:
            logger.error(f"    - {error}")
    if diagnostics.warnings:
        logger.warning(f"  Warnings: {len(diagnostics.warnings)}")
        for warning in diagnostics.warnings:
            logger.warning(f"    - {warning}")


def process_url(args: argparse.Namespace) -> int:
    """Execute the process command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = {
        "headers": {
            "User-Agent": USER_AGENT,
        },
    }

    try:
        profile = get_profile(args.profile)
        with ResourceFetcher(config) as fetcher:
            logger.info(f"Processing {args.url}")
            result = fetch_and_process(args.url, fetcher, profile)

        print(render_result(result, args.output))
        log_diagnostics(logger, result.diagnostics)
        return 0

    except Exception as e:
        logger.error(f"Failed to process {args.url}: {e}")
        return 1


def canonicalize_file(args: argparse.Namespace) -> int:
    """Execute the canonicalize command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    manifest_path = args.file.resolve()
    if not manifest_path.exists():
        logger.error(f"Manifest file not found: {manifest_path}")
        return 1

    base = args.base or manifest_path.as_uri()

    try:
        profile = get_profile(args.profile)
        result = process_manifest(
            manifest_path.read_text(encoding="utf-8"),
            base,
            language=args.lang or "",
            direction=args.dir or "",
            separate_file=True,
            profile=profile,
        )

        print(render_result(result, args.output))
        log_diagnostics(logger, result.diagnostics)
        return 0

    except Exception as e:
        logger.error(f"Failed to canonicalize {manifest_path}: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="publication-manifest",
        description="Canonicalize and validate publication manifests",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    def add_common_arguments(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--profile",
            choices=sorted(PROFILES),
            default=DEFAULT_PROFILE,
            help=f"Canonicalization profile (default: {DEFAULT_PROFILE})",
        )
        subparser.add_argument(
            "--output",
            choices=OUTPUT_CHOICES,
            default=DEFAULT_OUTPUT,
            help=f"What to print (default: {DEFAULT_OUTPUT})",
        )

    process_parser = subparsers.add_parser(
        "process",
        help="Fetch and process a manifest or an entry page",
        description="Fetch a publication manifest, or an HTML entry page linking to one, and print its canonical form and typed model.",
    )
    process_parser.add_argument(
        "url",
        help="Address of the manifest or of the primary entry page",
    )
    add_common_arguments(process_parser)
    process_parser.set_defaults(func=process_url)

    canonicalize_parser = subparsers.add_parser(
        "canonicalize",
        help="Process a local manifest file",
        description="Read a publication manifest from a local file and print its canonical form and typed model.",
    )
    canonicalize_parser.add_argument(
        "file",
        type=Path,
        help="Path to the manifest JSON file",
    )
    canonicalize_parser.add_argument(
        "--base",
        type=str,
        default=None,
        help="Base URL for relative references (default: the file's own URL)",
    )
    canonicalize_parser.add_argument(
        "--lang",
        type=str,
        default=None,
        help="Default language of the manifest",
    )
    canonicalize_parser.add_argument(
        "--dir",
        choices=("ltr", "rtl", "auto"),
        default=None,
        help="Default base direction of the manifest",
    )
    add_common_arguments(canonicalize_parser)
    canonicalize_parser.set_defaults(func=canonicalize_file)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
