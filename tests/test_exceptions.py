"""Tests for survives, raises and raises_like."""

import math

import pytest

from tapline.errors import LatePlan


def boom():
    raise RuntimeError("boom")


def bad_int():
    return int("01234x")


# --- survives ---


def test_survives_pass(tap, sink):
    assert tap.survives(lambda: math.sqrt(2), "sqrt(2) lives") is True
    assert sink.lines == ["ok 1 - sqrt(2) lives"]


def test_survives_fail_names_the_error(tap, sink):
    assert tap.survives(boom, "boom lives") is False
    assert sink.lines == ["not ok 1 - boom lives", "# died: RuntimeError: boom"]


def test_survives_error_without_text(tap, sink):
    def raise_bare():
        raise ValueError

    tap.survives(raise_bare, "bare")
    assert sink.lines[1] == "# died: ValueError"


def test_survives_lets_interrupts_through(tap, sink):
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        tap.survives(interrupt, "interrupted")
    assert sink.lines == []


def test_survives_lets_protocol_errors_through(tap):
    tap.pass_("first")
    with pytest.raises(LatePlan):
        tap.survives(lambda: tap.set_plan(3), "late plan")


# --- raises ---


def test_raises_expected_kind(tap, sink):
    a = [5, 10, 12]
    assert tap.raises(lambda: a[3], "index 3 is out of bounds", kind=IndexError) is True
    assert sink.lines == ["ok 1 - index 3 is out of bounds"]


def test_raises_any_error_by_default(tap):
    assert tap.raises(bad_int, "int() takes only digits") is True


def test_raises_accepts_base_kinds(tap):
    assert tap.raises(lambda: {}["k"], "lookup", kind=LookupError) is True


def test_raises_accepts_tuple_of_kinds(tap):
    assert tap.raises(bad_int, "either", kind=(KeyError, ValueError)) is True


def test_raises_no_error(tap, sink):
    assert tap.raises(lambda: None, "nothing happens") is False
    assert sink.lines == [
        "not ok 1 - nothing happens",
        "# expected an error but none was raised",
    ]


def test_raises_wrong_kind(tap, sink):
    assert tap.raises(lambda: {}["k"], "wrong kind", kind=ValueError) is False
    assert sink.lines == [
        "not ok 1 - wrong kind",
        "# different error kind occurred: KeyError: 'k'",
    ]


def test_raises_wrong_kind_under_todo(tap, sink):
    tap.mark_todo("research correct exception type!")
    tap.raises(lambda: [].pop(), "popping leaves domain", kind=ZeroDivisionError)
    assert sink.lines[0] == (
        "not ok 1 - popping leaves domain # TODO research correct exception type!"
    )
    assert sink.lines[1].startswith("# different error kind occurred: IndexError")
    assert tap.overall_success() is True


def test_raises_catches_interrupts_only_when_asked(tap, sink):
    def interrupt():
        raise KeyboardInterrupt

    assert tap.raises(interrupt, "asked for", kind=KeyboardInterrupt) is True
    with pytest.raises(KeyboardInterrupt):
        tap.raises(interrupt, "not asked for")
    assert sink.lines == ["ok 1 - asked for"]


def test_raises_can_expect_protocol_errors(tap):
    tap.pass_("first")
    assert tap.raises(lambda: tap.set_plan(3), "plan is late", kind=LatePlan) is True


def test_raises_protocol_error_of_other_kind_propagates(tap):
    tap.pass_("first")
    with pytest.raises(LatePlan):
        tap.raises(lambda: tap.set_plan(3), "plan is late", kind=ValueError)


def test_raises_lets_protocol_errors_through_by_default(tap, sink):
    tap.pass_("first")
    with pytest.raises(LatePlan):
        tap.raises(lambda: tap.set_plan(3), "late plan")
    with pytest.raises(LatePlan):
        tap.raises_like(lambda: tap.set_plan(3), "Too late.*", "late plan")
    assert sink.lines == ["ok 1 - first"]


def test_raises_rejects_non_exception_kind(tap, sink):
    with pytest.raises(TypeError):
        tap.raises(lambda: None, "bad kind", kind="ValueError")
    with pytest.raises(TypeError):
        tap.raises(lambda: None, "bad kind", kind=(ValueError, int))
    assert sink.lines == []


# --- raises_like ---


def test_raises_like_pattern(tap, sink):
    assert tap.raises_like(
        bad_int, r"invalid literal.*", "describes the literal", kind=ValueError
    ) is True
    assert sink.lines == ["ok 1 - describes the literal"]


def test_raises_like_predicate(tap):
    assert tap.raises_like(boom, lambda text: "boom" in text, "mentions boom") is True


def test_raises_like_description_mismatch(tap, sink):
    assert tap.raises_like(boom, r"bang", "says bang", kind=RuntimeError) is False
    assert sink.lines == [
        "not ok 1 - says bang",
        "# error kind matched but description did not: 'boom'",
        "# Expected to match: /bang/",
    ]


def test_raises_like_wrong_kind(tap, sink):
    assert tap.raises_like(boom, r"boom", "wrong kind", kind=KeyError) is False
    assert sink.lines == [
        "not ok 1 - wrong kind",
        "# different error kind occurred: RuntimeError: boom",
    ]


def test_raises_like_no_error(tap, sink):
    assert tap.raises_like(lambda: 1, r".*", "nothing") is False
    assert sink.lines[1] == "# expected an error but none was raised"
