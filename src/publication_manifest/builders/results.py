"""Outcome of building a single value.

Builders return ``Ok(value)`` for something usable and ``Invalid(reason)``
for something that must be dropped from its container. The reason has
already been recorded in the diagnostics log by the time it is returned.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    reason: str


BuildResult = Ok[T] | Invalid


def collect(
    build: Callable[[Any], "BuildResult[T]"], items: Iterable[Any]
) -> list[T] | None:
    """Build every item, keep the valid values.

    Returns:
        The valid values in input order, or None if there are none
    """
    values = [result.value for result in map(build, items) if isinstance(result, Ok)]
    return values or None
