"""
Total coercion functions for loosely-typed XML values.

Every value read from a parsed OggDude file is either a string, a dict, a
list or missing. These helpers turn such values into typed defaults and
never raise: a mandatory field that is missing or mistyped falls back to a
safe default and emits a diagnostic, so one bad record never aborts an
import.

Diagnostics are logged and, inside a ``collect_diagnostics()`` block, also
appended to the collector so callers can report them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

logger = logging.getLogger("oggdude-importer.coercion")

T = TypeVar("T")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_collector: ContextVar[list[str] | None] = ContextVar("oggdude_diagnostics", default=None)


@contextmanager
def collect_diagnostics() -> Iterator[list[str]]:
    """Collect diagnostics emitted in this context into a list."""
    diagnostics: list[str] = []
    token = _collector.set(diagnostics)
    try:
        yield diagnostics
    finally:
        _collector.reset(token)


def _diagnose(message: str) -> None:
    logger.warning(message)
    collected = _collector.get()
    if collected is not None:
        collected.append(message)


def _parse_int(value: str) -> int | None:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_markup_boolean(value: Any) -> bool:
    """True only for the literal string "true". Not general truthiness."""
    return isinstance(value, str) and value == "true"


def mandatory_string(label: str, value: Any) -> str:
    if not isinstance(value, str):
        _diagnose(f"Value {label} is mandatory !")
        return ""
    return value


def optional_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def mandatory_number(label: str, value: Any) -> int:
    """Parse the leading integer of ``value``; 0 with a diagnostic on a miss."""
    if not isinstance(value, str):
        _diagnose(f"Value {label} is mandatory !")
        return 0
    parsed = _parse_int(value)
    if parsed is None:
        _diagnose(f"Value {label} is not a number: {value!r}")
        return 0
    return parsed


def optional_number(value: Any) -> int:
    if not isinstance(value, str):
        return 0
    return _parse_int(value) or 0


def mandatory_boolean(label: str, value: Any) -> bool:
    if not isinstance(value, str):
        _diagnose(f"Value {label} is mandatory !")
        return False
    return parse_markup_boolean(value)


def optional_boolean(value: Any) -> bool:
    return parse_markup_boolean(value)


def optional_array(
    value: Any, mapper: Callable[[Any], T], *, scalars: bool = False
) -> list[T]:
    """Map a repeatable child that may have collapsed to a single value.

    Args:
        value: A list (every element is mapped), a dict (mapped as a
            one-element list) or anything else (empty list).
        mapper: Function applied to each element.
        scalars: Also wrap a bare string, for repeatable text-only children.

    Returns:
        The mapped elements, in source order.
    """
    if isinstance(value, list):
        return [mapper(v) for v in value]
    if isinstance(value, dict) or (scalars and isinstance(value, str)):
        return [mapper(value)]
    return []
