"""Capability probe for rendering values into diagnostic text.

Failed comparisons print what they got and what they expected, but only for
values whose type has a meaningful text form. A plain ``object`` subclass
would print as ``<Foo object at 0x...>``, which says nothing useful, so such
sides are left out of the diagnostics instead.

The probe works on types and never calls the conversion itself. Types that
are not under the caller's control can be given a text form with
:func:`register_renderer`.
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Callable

Renderer = Callable[[Any], str]


@singledispatch
def _registry(value: Any) -> str:
    raise NotImplementedError(f"no renderer registered for {type(value).__name__}")


def register_renderer(cls: type, func: Renderer | None = None):
    """Register ``func`` as the text form of ``cls`` and its subclasses.

    Usable directly or as a decorator::

        @register_renderer(Point)
        def _(p):
            return f"({p.x}, {p.y})"
    """
    if func is None:
        return lambda f: register_renderer(cls, f)
    _registry.register(cls, func)
    return func


def _has_registered_renderer(cls: type) -> bool:
    return _registry.dispatch(cls) is not _registry.dispatch(object)


def _defines_text_form(cls: type) -> bool:
    for klass in cls.__mro__:
        if klass is object:
            return False
        attrs = vars(klass)
        if "__repr__" in attrs or "__str__" in attrs:
            return True
    return False


def can_render(cls: type) -> bool:
    """Return whether values of ``cls`` can be rendered for diagnostics."""
    if not isinstance(cls, type):
        raise TypeError(f"can_render() expects a type, got {cls!r}")
    return _has_registered_renderer(cls) or _defines_text_form(cls)


def render(value: Any) -> str:
    """Return the diagnostic text for ``value``.

    Callers check :func:`can_render` first; values of unrenderable types still
    come back as their default ``repr``.
    """
    cls = type(value)
    if _has_registered_renderer(cls):
        return _registry(value)
    if cls.__repr__ is not object.__repr__:
        return repr(value)
    return str(value)
