"""The TAP session: plan bookkeeping, assertions, directives and subtests.

A :class:`Session` tracks how many tests were planned, run and passed, and
prints TAP directly to its sink as each operation happens::

    with Session(plan=2) as t:
        t.record(1 < 255, "integer comparison works")
        t.equals("55", 55, "pluggable comparison",
                 matcher=lambda s, i: s == str(i))

Assertion methods return whether the assertion held, so a test body can skip
work that depends on an earlier step. They never raise because a test failed;
the errors in :mod:`tapline.errors` only signal protocol misuse.
"""

from __future__ import annotations

import logging
import operator
import weakref
from typing import Any, Callable, TextIO, Tuple, Type, Union

from tapline.config import TapConfig
from tapline.directives import Directive, numbered_reasons, skip_message, todo_suffix
from tapline.errors import AlreadyFinished, AlreadyPlanned, LatePlan, TapError
from tapline.matchers import PatternLike, Predicate, as_predicate, describe
from tapline.render import can_render, render
from tapline.sink import IndentedSink, Sink, StreamSink, as_sink

Matcher = Callable[[Any, Any], bool]
Action = Callable[[], Any]
ErrorKind = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


def _check_count(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{what} must not be negative, got {value}")
    return value


def _check_kind(kind: Any) -> None:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    for k in kinds:
        if not (isinstance(k, type) and issubclass(k, BaseException)):
            raise TypeError(f"expected an exception class, got {k!r}")


def _names_tap_error(kind: Any) -> bool:
    kinds = kind if isinstance(kind, tuple) else (kind,)
    return any(issubclass(k, TapError) for k in kinds)


def _describe_error(exc: BaseException) -> str:
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


def _one_line(message: str) -> str:
    return " ".join(str(message).splitlines())


class Session:
    """State of one TAP producer and the stream it writes to.

    Args:
        plan: Number of tests to plan right away. Without it, either call
            :meth:`set_plan` before the first test or let :meth:`finalize`
            print the plan after the last one.
        skip_all: Skip the whole session: prints ``1..0 # SKIP <reason>`` and
            finishes immediately. Mutually exclusive with ``plan``.
        out: A :class:`~tapline.sink.Sink` or writable text stream.
            Defaults to the config's standard stream.
        config: Indentation and default TODO reason.
        logger: Logger for lifecycle events. Defaults to ``tapline``.
    """

    def __init__(
        self,
        plan: int | None = None,
        *,
        skip_all: str | None = None,
        out: Sink | TextIO | None = None,
        config: TapConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        if plan is not None and skip_all is not None:
            raise ValueError("a session cannot both plan tests and skip them all")

        self.config = config or TapConfig()
        if out is None:
            self.sink: Sink = StreamSink(name=self.config.stream)
        else:
            self.sink = as_sink(out)
        self.logger = logger or logging.getLogger("tapline")
        self.depth = 0
        self.message = ""

        self._plan: int | None = None
        self._run = 0
        self._good = 0
        self._todo: str | None = None
        self._finished = False
        self._bailed = False
        self._parent: weakref.ref[Session] | None = None
        self._injected = False
        self._children: weakref.WeakSet[Session] = weakref.WeakSet()

        if skip_all is not None:
            self._skip_all(skip_all)
        elif plan is not None:
            self.set_plan(plan)

    def __repr__(self) -> str:
        return (
            f"<Session {self._label()!r} depth={self.depth} plan={self._plan} "
            f"run={self._run} good={self._good} finished={self._finished}>"
        )

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # --- state ---

    @property
    def plan(self) -> int | None:
        return self._plan

    @property
    def run(self) -> int:
        return self._run

    @property
    def good(self) -> int:
        return self._good

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def bailed(self) -> bool:
        return self._bailed

    @property
    def pending_todo(self) -> str | None:
        return self._todo

    @property
    def parent(self) -> Session | None:
        """The session this subtest reports to, if it is still alive."""
        return self._parent() if self._parent is not None else None

    def overall_success(self) -> bool:
        """Whether every planned (or, without a plan, every run) test is good.

        A session with a plan it has not run through yet reports False, and so
        does one that bailed out.
        """
        if self._bailed:
            return False
        expected = self._plan if self._plan is not None else self._run
        return self._good == expected

    summary = overall_success

    def _label(self) -> str:
        return self.message or "main"

    def _emit(self, line: str) -> None:
        self.sink.write_line(line)

    def _check_open(self) -> None:
        if self._finished:
            raise AlreadyFinished()

    # --- plan and completion ---

    def set_plan(self, tests: int) -> None:
        """Fix the number of tests and print the plan line."""
        if self._plan is not None:
            raise AlreadyPlanned()
        self._check_open()
        if self._run > 0:
            raise LatePlan()
        tests = _check_count(tests, "plan")

        self._emit(f"1..{tests}")
        self._plan = tests
        self.logger.debug(f"Session '{self._label()}' planned {tests} test(s)")

    def _skip_all(self, reason: str) -> None:
        reason = _one_line(reason)
        self._emit(f"1..0 {Directive.SKIP.marker(reason)}")
        self._plan = 0
        self._finished = True
        self.logger.debug(f"Session '{self._label()}' skipped entirely: {reason}")

    def finalize(self) -> None:
        """Close the session against further tests.

        Prints the plan line now if none was printed at the start, or a
        diagnostic if the plan and the number of run tests disagree. A subtest
        then reports its overall result to its parent.
        """
        self._check_open()

        if self._plan is None:
            self._emit(f"1..{self._run}")
        elif self._plan != self._run:
            self.diag(f"Looks like you planned {self._plan} tests but ran {self._run}")
            self.logger.warning(
                f"Session '{self._label()}' planned {self._plan} test(s) but ran {self._run}"
            )
        for child in list(self._children):
            if not child._injected:
                self.logger.warning(
                    f"Subtest '{child._label()}' of '{self._label()}' never reported its result"
                )

        self._finished = True
        self.logger.debug(
            f"Session '{self._label()}' finished: {self._good}/{self._run} good"
        )
        self._report_to_parent()

    done_testing = finalize

    def close(self) -> None:
        """Finalize if still open and make sure a subtest has reported back.

        Safe to call any number of times; this is what leaving a ``with``
        block runs.
        """
        if not self._finished:
            self.finalize()
        else:
            self._report_to_parent()

    def _report_to_parent(self) -> None:
        if self._parent is None or self._injected:
            return
        self._injected = True

        parent = self._parent()
        if parent is None:
            self.logger.warning(
                f"Subtest '{self._label()}' outlived its parent; result dropped"
            )
            return
        parent._children.discard(self)
        if self._bailed:
            parent._bailed = True
        self.logger.debug(
            f"Subtest '{self._label()}' reports {self.overall_success()} to '{parent._label()}'"
        )
        parent.record(self.overall_success(), self.message)

    # --- the emission primitive ---

    def record(self, success: Any, message: str = "") -> bool:
        """Print an ``ok`` or ``not ok`` line depending on ``success``.

        A pending TODO is attached to this line and cleared, whatever the
        outcome. A failing TODO test still counts as good, since TAP consumers
        do not treat it as a failure.
        """
        self._check_open()

        success = bool(success)
        message = _one_line(message)
        self._run += 1

        line = f"{'ok' if success else 'not ok'} {self._run} - {message}"
        todo = self._todo
        if todo:
            line += todo_suffix(message, todo)
            self._todo = None
        if success or todo:
            self._good += 1

        self._emit(line)
        return success

    ok = record

    def negate(self, failure: Any, message: str = "") -> bool:
        return self.record(not failure, message)

    nok = negate

    def pass_(self, message: str = "") -> bool:
        return self.record(True, message)

    def fail(self, message: str = "") -> bool:
        return self.record(False, message)

    # --- comparisons ---

    def _diag_values(self, *labelled: tuple[str, Any]) -> None:
        for label, value in labelled:
            if can_render(type(value)):
                self.diag(f"{label}: {render(value)}")

    def equals(
        self,
        got: Any,
        expected: Any,
        message: str = "",
        matcher: Matcher = operator.eq,
    ) -> bool:
        """Pass if ``matcher(got, expected)`` holds.

        The matcher defaults to ``==``; supplying one allows comparing values
        of different types. On failure both sides are printed as diagnostics
        when their types can be rendered.
        """
        if self.record(matcher(got, expected), message):
            return True
        self._diag_values(("Got", got), ("Expected", expected))
        return False

    def not_equals(
        self,
        got: Any,
        unexpected: Any,
        message: str = "",
        matcher: Matcher = operator.eq,
    ) -> bool:
        if self.negate(matcher(got, unexpected), message):
            return True
        self._diag_values(("Got", got), ("Unexpected", unexpected))
        return False

    def matches(
        self, value: Any, predicate: Predicate | PatternLike, message: str = ""
    ) -> bool:
        """Pass if ``predicate(value)`` holds.

        A string or compiled regex instead of a callable must match the whole
        of ``str(value)``.
        """
        test = as_predicate(predicate)
        if self.record(test(value), message):
            return True
        self._diag_values(("Got", value))
        pattern = describe(predicate)
        if pattern is not None:
            self.diag(f"Expected to match: {pattern}")
        return False

    def does_not_match(
        self, value: Any, predicate: Predicate | PatternLike, message: str = ""
    ) -> bool:
        test = as_predicate(predicate)
        if self.negate(test(value), message):
            return True
        self._diag_values(("Got", value))
        pattern = describe(predicate)
        if pattern is not None:
            self.diag(f"Expected not to match: {pattern}")
        return False

    # --- exceptions ---

    def survives(self, action: Action, message: str = "") -> bool:
        """Pass if calling ``action`` returns without raising."""
        try:
            action()
        except TapError:
            raise
        except Exception as exc:
            self.fail(message)
            self.diag(f"died: {_describe_error(exc)}")
            return False
        return self.pass_(message)

    def raises(
        self,
        action: Action,
        message: str = "",
        kind: ErrorKind = Exception,
    ) -> bool:
        """Pass if calling ``action`` raises an instance of ``kind``."""
        return self._check_raises(action, message, kind, None)

    def raises_like(
        self,
        action: Action,
        predicate: Predicate | PatternLike,
        message: str = "",
        kind: ErrorKind = Exception,
    ) -> bool:
        """Like :meth:`raises`, and the error's text must satisfy ``predicate``."""
        return self._check_raises(action, message, kind, predicate)

    def _check_raises(
        self,
        action: Action,
        message: str,
        kind: Any,
        predicate: Predicate | PatternLike | None,
    ) -> bool:
        _check_kind(kind)
        test = as_predicate(predicate) if predicate is not None else None

        try:
            action()
        except BaseException as exc:
            # Session misuse propagates unless a TapError kind was asked for
            if isinstance(exc, TapError) and not _names_tap_error(kind):
                raise
            if not isinstance(exc, kind):
                if not isinstance(exc, Exception):
                    raise
                self.fail(message)
                self.diag(f"different error kind occurred: {_describe_error(exc)}")
                return False
            if test is not None and not test(str(exc)):
                self.fail(message)
                self.diag(f"error kind matched but description did not: {str(exc)!r}")
                pattern = describe(predicate)
                if pattern is not None:
                    self.diag(f"Expected to match: {pattern}")
                return False
            return self.pass_(message)

        self.fail(message)
        self.diag("expected an error but none was raised")
        return False

    # --- directives ---

    def mark_todo(self, reason: str | None = None) -> None:
        """Print the next test line with a TODO directive.

        Without a reason the configured default is used; an empty reason
        cancels a pending mark.
        """
        self._check_open()
        if reason is None:
            reason = self.config.todo_reason
        self._todo = _one_line(reason) or None

    TODO = mark_todo

    def skip_one(self, reason: str = "") -> bool:
        """Pass a test carrying the SKIP directive."""
        return self.pass_(skip_message(reason))

    def skip_many(self, how_many: int, reason: str = "") -> None:
        """Skip ``how_many`` tests, numbering each reason ``cur/total``."""
        for numbered in numbered_reasons(_check_count(how_many, "how_many"), reason):
            self.skip_one(numbered)

    def bail(self, reason: str = "") -> None:
        """Print ``Bail out!`` and finish the session.

        The process keeps running; exiting after cleanup is up to the caller.
        A subtest that bails fails its line in the parent and marks the parent
        bailed as well.
        """
        self._check_open()
        reason = _one_line(reason)
        self._emit(f"Bail out! {reason}" if reason else "Bail out!")
        self._finished = True
        self._bailed = True
        self.logger.warning(f"Session '{self._label()}' bailed out: {reason or '-'}")

    BAIL = bail

    def diag(self, message: Any) -> None:
        """Print a diagnostic comment, one ``#`` line per line of text."""
        for line in str(message).splitlines() or [""]:
            self._emit(f"# {line}")

    # --- subtests ---

    def derive(
        self,
        message: str = "",
        plan: int | None = None,
        skip_all: str | None = None,
    ) -> Session:
        """Start a subtest whose overall result becomes one line here.

        The subtest writes to this session's sink, indented one level deeper.
        Use it as a context manager so its result is reported exactly once::

            with t.derive("subtests are nestable", plan=2) as st:
                st.survives(lambda: math.sqrt(2), "sqrt(2) lives")
                st.survives(lambda: math.sqrt(4), "sqrt(4) lives")
        """
        self._check_open()

        child = Session(
            out=IndentedSink(self.sink, self.config.indent),
            config=self.config,
            logger=self.logger,
        )
        child.message = _one_line(message)
        child.depth = self.depth + 1
        child._parent = weakref.ref(self)
        self._children.add(child)

        if skip_all is not None:
            child._skip_all(skip_all)
        elif plan is not None:
            child.set_plan(plan)
        return child

    subtest = derive

