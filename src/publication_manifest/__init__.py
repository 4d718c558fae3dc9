"""Canonicalize and validate publication manifests."""

from .canonicalizer import canonicalize
from .diagnostics import Diagnostics, LogLevel
from .manifest_builder import build_manifest
from .process import ProcessingResult, fetch_and_process, obtain_manifest, process_manifest
from .profiles import CORE_PROFILE, Profile

__all__ = [
    "canonicalize",
    "build_manifest",
    "process_manifest",
    "obtain_manifest",
    "fetch_and_process",
    "ProcessingResult",
    "Diagnostics",
    "LogLevel",
    "Profile",
    "CORE_PROFILE",
]
