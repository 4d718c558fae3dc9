"""Builders turning canonical manifest values into typed model values."""

from .contributors import build_contributor, build_contributors
from .links import build_linked_resource, build_linked_resources
from .results import BuildResult, Invalid, Ok, collect
from .strings import (
    build_first_localizable_string,
    build_localizable_string,
    build_localizable_strings,
)
from .vocabulary import VOCABULARIES, filter_terms

__all__ = [
    "BuildResult",
    "Ok",
    "Invalid",
    "collect",
    "build_localizable_string",
    "build_localizable_strings",
    "build_first_localizable_string",
    "build_contributor",
    "build_contributors",
    "build_linked_resource",
    "build_linked_resources",
    "VOCABULARIES",
    "filter_terms",
]
