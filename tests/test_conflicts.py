"""
Tests for time-overlap detection and professor eligibility.
"""
import pytest

from service.conflicts import ConflictDetector, class_interval, conflicts, parse_time
from service.errors import ValidationError
from tests.helpers import make_class, make_link, make_professor


def test_parse_time_minutes():
    assert parse_time("00:00") == 0
    assert parse_time("09:30") == 570
    assert parse_time("23:59") == 1439


@pytest.mark.parametrize("value", ["9am", "25:00", "", "12:60"])
def test_parse_time_rejects_malformed(value):
    with pytest.raises(ValidationError):
        parse_time(value)


def test_overlapping_classes_conflict():
    a = make_class("a", "monday", "09:00", "10:00")
    b = make_class("b", "monday", "09:30", "10:30")
    assert conflicts(a, b)
    assert conflicts(b, a)


def test_contained_class_conflicts():
    outer = make_class("outer", "monday", "08:00", "12:00")
    inner = make_class("inner", "monday", "10:00", "10:30")
    assert conflicts(outer, inner)


def test_touching_endpoints_do_not_conflict():
    """Half-open intervals: 09:00-10:00 and 10:00-11:00 can share a professor."""
    a = make_class("a", "monday", "09:00", "10:00")
    b = make_class("b", "monday", "10:00", "11:00")
    assert not conflicts(a, b)


def test_different_days_do_not_conflict():
    a = make_class("a", "monday", "09:00", "10:00")
    b = make_class("b", "tuesday", "09:00", "10:00")
    assert not conflicts(a, b)


def test_day_names_are_case_insensitive():
    a = make_class("a", "Monday", "09:00", "10:00")
    b = make_class("b", "monday", "09:30", "10:00")
    assert conflicts(a, b)


def test_empty_interval_is_rejected():
    empty = make_class("empty", "monday", "09:00", "09:00")
    other = make_class("other", "monday", "08:00", "12:00")
    with pytest.raises(ValidationError):
        conflicts(empty, other)


def test_inverted_interval_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        class_interval(make_class("bad", "monday", "11:00", "10:00"))
    assert "classes -> bad" in exc_info.value.errors


def test_unknown_day_is_rejected():
    with pytest.raises(ValidationError):
        class_interval(make_class("bad", "someday"))


def test_eligible_requires_subject_and_link():
    detector = ConflictDetector([make_link("p1", subjects=("math",))])
    professor = make_professor("p1", ("math",))

    assert detector.is_eligible(professor, make_class("c1", subject="math"))
    assert not detector.is_eligible(professor, make_class("c2", subject="physics"))


def test_eligible_requires_link_to_class_section():
    detector = ConflictDetector([make_link("p1", section_id="s1")])
    professor = make_professor("p1", ("math",))

    assert not detector.is_eligible(professor, make_class("c1", section_id="s2"))
    assert not detector.is_eligible(make_professor("p9", ("math",)), make_class("c1"))


def test_has_conflict_checks_confirmed_classes_only():
    detector = ConflictDetector([])
    candidate = make_class("c", "monday", "09:00", "10:00")
    confirmed = [
        make_class("x", "monday", "07:00", "08:00"),
        make_class("y", "monday", "10:00", "11:00"),
    ]
    assert not detector.has_conflict(candidate, confirmed)
    assert detector.has_conflict(candidate, confirmed + [make_class("z", "monday", "09:59", "10:30")])
    # A class never conflicts with itself
    assert not detector.has_conflict(candidate, [candidate])
