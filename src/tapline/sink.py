"""Destinations for TAP lines.

A sink is an ordered, append-only channel of lines. Subtests share their
parent's sink through an :class:`IndentedSink`, which is how nested output
ends up indented one unit per level.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO


class Sink(ABC):
    @abstractmethod
    def write_line(self, line: str) -> None:
        """Append one line. ``line`` carries no trailing newline."""
        ...


class StreamSink(Sink):
    """Write lines to a text stream, flushing after each one.

    Without an explicit stream the current ``sys.stdout`` (or ``sys.stderr``)
    is looked up on every write, so redirections done after the sink was
    created are honored.
    """

    def __init__(self, stream: TextIO | None = None, name: str = "stdout"):
        if name not in ("stdout", "stderr"):
            raise ValueError(f"unknown standard stream '{name}'")
        self._stream = stream
        self._name = name

    @property
    def stream(self) -> TextIO:
        if self._stream is not None:
            return self._stream
        return getattr(sys, self._name)

    def write_line(self, line: str) -> None:
        stream = self.stream
        stream.write(line + "\n")
        stream.flush()


class MemorySink(Sink):
    """Collect lines in a list, for inspection in tests."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)


class IndentedSink(Sink):
    """Prefix every line with ``unit`` before passing it on to ``inner``."""

    def __init__(self, inner: Sink, unit: str = "    "):
        self.inner = inner
        self.unit = unit

    def write_line(self, line: str) -> None:
        self.inner.write_line(self.unit + line)


def as_sink(out: Sink | TextIO | None) -> Sink:
    """Accept a ready sink, a writable text stream, or ``None`` for stdout."""
    if out is None:
        return StreamSink()
    if isinstance(out, Sink):
        return out
    if hasattr(out, "write"):
        return StreamSink(out)
    raise TypeError(f"cannot write TAP to {type(out).__name__}")
