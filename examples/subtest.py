"""Subtests nest, and each collapses into one line of its parent."""

import math

from tapline.facade import *

plan(4)

ok(1 < 255, "numbers are good")

with subtest("a first subtest") as st:
    st.set_plan(3)

    st.diag("hello from a subtest!")
    st.equals(5 + 50, 55, "arithmetic is good")
    st.equals("55", 55, "incompatible types but fitting matcher",
              matcher=lambda s, i: s == str(i))
    st.skip_one("can't think of anything")

pass_("relaxing in between")

with subtest("exercising exceptions") as st:
    st.raises(lambda: int("01234", 2), "int() takes only bits")

    with st.derive("subtests are nestable", plan=2) as inner:
        inner.survives(lambda: math.sqrt(2), "sqrt( 2) lives")
        inner.mark_todo("negative roots raise in Python")
        inner.survives(lambda: math.sqrt(-2), "sqrt(-2) lives, too")

    st.mark_todo("research correct exception type")
    st.raises(lambda: [].pop(), "popping an empty list leaves domain",
              kind=ArithmeticError)

    st.done_testing()
