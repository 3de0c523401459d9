"""Predicate and pattern helpers for the matching assertions."""

from __future__ import annotations

import re
from typing import Any, Callable, Union

Predicate = Callable[[Any], bool]
PatternLike = Union[str, re.Pattern]


def compile_pattern(pattern: PatternLike) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    if isinstance(pattern, str):
        return re.compile(pattern)
    raise TypeError(f"expected a regex pattern, got {type(pattern).__name__}")


def pattern_predicate(pattern: PatternLike) -> Predicate:
    """Build a predicate that full-matches ``pattern`` against ``str(value)``."""
    regex = compile_pattern(pattern)

    def _matches(value: Any) -> bool:
        return regex.fullmatch(str(value)) is not None

    return _matches


def is_pattern(candidate: Any) -> bool:
    return isinstance(candidate, (str, re.Pattern))


def as_predicate(candidate: Predicate | PatternLike) -> Predicate:
    """Return ``candidate`` as a predicate, compiling it first if it is a pattern."""
    if is_pattern(candidate):
        return pattern_predicate(candidate)
    if callable(candidate):
        return candidate
    raise TypeError(
        f"expected a predicate or a regex pattern, got {type(candidate).__name__}"
    )


def describe(candidate: Predicate | PatternLike) -> str | None:
    """Return ``/pattern/`` for patterns and ``None`` for opaque predicates."""
    if is_pattern(candidate):
        return f"/{compile_pattern(candidate).pattern}/"
    return None
