"""Diagnostics log for manifest processing.

Every canonicalization and build pass writes its findings here instead of
raising. A check records a message only when its condition is false, and
always hands the condition back so callers can branch on it:

    if diagnostics.error(raw.get("url") is not None, "Invalid link: no URL provided."):
        ...
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Severity of a recorded diagnostic."""

    WARNING = "warning"
    ERROR = "error"


@dataclass
class Diagnostics:
    """Append-only collection of warnings and errors.

    Attributes:
        warnings: Warning messages in the order they were recorded
        errors: Error messages in the order they were recorded
    """

    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def check(
        self, condition: bool, message: str, level: LogLevel = LogLevel.ERROR
    ) -> bool:
        """Record ``message`` at ``level`` if ``condition`` is false.

        Args:
            condition: The assertion to test
            message: Message recorded when the assertion fails
            level: Which sequence the message is appended to

        Returns:
            The condition, unchanged
        """
        if not condition:
            if level == LogLevel.WARNING:
                self.warnings.append(message)
            else:
                self.errors.append(message)
            logger.debug(f"{level.value}: {message}")
        return condition

    def warning(self, condition: bool, message: str) -> bool:
        return self.check(condition, message, LogLevel.WARNING)

    def error(self, condition: bool, message: str) -> bool:
        return self.check(condition, message, LogLevel.ERROR)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def warnings_text(self) -> str:
        """Render the warnings as one message per line."""
        return "\n".join(f"    - {message}" for message in self.warnings)

    def errors_text(self) -> str:
        """Render the errors as one message per line."""
        return "\n".join(f"    - {message}" for message in self.errors)

    def report(self) -> str:
        """Render a flat, human-readable report of everything recorded."""
        lines = []
        if self.errors:
            lines.append(f"Errors: {len(self.errors)}")
            lines.append(self.errors_text())
        if self.warnings:
            lines.append(f"Warnings: {len(self.warnings)}")
            lines.append(self.warnings_text())
        if not lines:
            return "No errors or warnings."
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.report()
