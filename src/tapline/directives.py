"""TODO and SKIP directive formatting."""

from __future__ import annotations

from enum import Enum


class Directive(str, Enum):
    TODO = "TODO"
    SKIP = "SKIP"

    def marker(self, reason: str = "") -> str:
        """Return ``# TODO reason`` / ``# SKIP`` style directive text."""
        if reason:
            return f"# {self.value} {reason}"
        return f"# {self.value}"


def todo_suffix(message: str, reason: str) -> str:
    """Text appended to an assertion line carrying a pending TODO."""
    separator = " " if message else ""
    return separator + Directive.TODO.marker(reason)


def skip_message(reason: str = "") -> str:
    return Directive.SKIP.marker(reason)


def numbered_reasons(how_many: int, reason: str = "") -> list[str]:
    """Repeat ``reason`` ``how_many`` times with a ``cur/total`` counter.

    >>> numbered_reasons(2, "slow")
    ['slow 1/2', 'slow 2/2']
    """
    if how_many < 0:
        raise ValueError(f"cannot skip a negative number of tests: {how_many}")
    reasons = []
    for current in range(1, how_many + 1):
        counter = f"{current}/{how_many}"
        reasons.append(f"{reason} {counter}" if reason else counter)
    return reasons
