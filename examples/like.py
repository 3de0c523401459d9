"""Predicate and pattern assertions."""

from tapline.facade import *


def le5(x):
    return x <= 5


plan(7)

like(-4, le5, "-4 <= 5")
like(5, le5, " 5 <= 5")

like("a 55 ", r"\D \d+\s+", "regex match")
TODO("see diagnostics")
like("a 55 ", r"\d+\s+", "regex non-match")

unlike(0, bool, "0 is falsy")
unlike(0.0, bool, "0.0 is falsy")
TODO("0.1 is actually truthy")
unlike(0.1, bool, "test diags again")
