"""Procedural interface over one process-wide default session.

The default session is created on first use with the default configuration
and writes to standard output. Test scripts that never call
:func:`done_testing` still get their plan line: the session is closed when
the interpreter exits. Tooling that wants a differently configured session
installs one with :func:`set_session` before the script runs.

Usage::

    from tapline.facade import *

    plan(2)
    ok(1 < 255, "integer comparison works")
    is_("55", 55, "pluggable comparison", lambda s, i: s == str(i))
"""

from __future__ import annotations

import atexit
from typing import Any

from tapline.session import Session

_session: Session | None = None
_atexit_registered = False


def _close_at_exit() -> None:
    if _session is not None:
        _session.close()


def _register_close_at_exit() -> None:
    global _atexit_registered
    if not _atexit_registered:
        atexit.register(_close_at_exit)
        _atexit_registered = True


def get_session() -> Session:
    """Return the default session, creating it on first use."""
    global _session
    if _session is None:
        _session = Session()
        _register_close_at_exit()
    return _session


def set_session(session: Session | None) -> Session | None:
    """Install ``session`` as the default and return the one it replaces.

    Passing ``None`` drops the default so the next call creates a fresh one.
    """
    global _session
    previous, _session = _session, session
    if session is not None:
        _register_close_at_exit()
    return previous


def plan(tests: int) -> None:
    get_session().set_plan(tests)


def summary() -> bool:
    return get_session().overall_success()


def done_testing() -> None:
    get_session().finalize()


def ok(is_ok: Any, message: str = "") -> bool:
    return get_session().record(is_ok, message)


def nok(is_nok: Any, message: str = "") -> bool:
    return get_session().negate(is_nok, message)


def pass_(message: str = "") -> bool:
    return get_session().pass_(message)


def fail(message: str = "") -> bool:
    return get_session().fail(message)


def is_(got: Any, expected: Any, message: str = "", matcher=None) -> bool:
    if matcher is None:
        return get_session().equals(got, expected, message)
    return get_session().equals(got, expected, message, matcher)


def isnt(got: Any, unexpected: Any, message: str = "", matcher=None) -> bool:
    if matcher is None:
        return get_session().not_equals(got, unexpected, message)
    return get_session().not_equals(got, unexpected, message, matcher)


def like(value: Any, predicate, message: str = "") -> bool:
    return get_session().matches(value, predicate, message)


def unlike(value: Any, predicate, message: str = "") -> bool:
    return get_session().does_not_match(value, predicate, message)


def lives(action, message: str = "") -> bool:
    return get_session().survives(action, message)


def throws(action, message: str = "", kind=Exception) -> bool:
    return get_session().raises(action, message, kind)


def throws_like(action, predicate, message: str = "", kind=Exception) -> bool:
    return get_session().raises_like(action, predicate, message, kind)


def TODO(reason: str | None = None) -> None:
    get_session().mark_todo(reason)


def SKIP(how_many: int | str = "", reason: str = "") -> None:
    """Skip one test (``SKIP("why")``) or several (``SKIP(3, "why")``)."""
    if isinstance(how_many, str):
        get_session().skip_one(how_many)
    else:
        get_session().skip_many(how_many, reason)


def BAIL(reason: str = "") -> None:
    get_session().bail(reason)


def diag(message: Any) -> None:
    get_session().diag(message)


def subtest(message: str = "", plan: int | None = None, skip_all: str | None = None) -> Session:
    return get_session().derive(message, plan=plan, skip_all=skip_all)


__all__ = [
    "plan",
    "summary",
    "done_testing",
    "ok",
    "nok",
    "pass_",
    "fail",
    "is_",
    "isnt",
    "like",
    "unlike",
    "lives",
    "throws",
    "throws_like",
    "TODO",
    "SKIP",
    "BAIL",
    "diag",
    "subtest",
]
