"""Exceptions raised by the manifest processing pipeline.

Schema violations never surface as exceptions; they are recorded in the
diagnostics log. These are reserved for the failures that stop processing.
"""


class ManifestError(Exception):
    """Base exception for all manifest processing errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ManifestParseError(ManifestError):
    """Raised when the manifest text is not a JSON object."""

    pass


class ManifestNotFoundError(ManifestError):
    """Raised when an entry page does not reference a manifest."""

    pass


class InvalidURLError(ManifestError, ValueError):
    """Raised when an address is not safe to dereference."""

    def __init__(self, message: str, address: str | None = None, *args, **kwargs):
        self.address = address
        super().__init__(message, *args, **kwargs)


class DocumentParseError(ManifestError):
    """Raised when an HTML document cannot be parsed."""

    pass
