"""
Tests for the per-solve capacity tracker.
"""
import pytest

from service.capacity import CapacityTracker
from service.errors import InternalConsistencyError, ValidationError


def test_reserve_up_to_limit():
    tracker = CapacityTracker({"p1": 2})
    assert tracker.try_reserve("p1")
    assert tracker.try_reserve("p1")
    assert not tracker.try_reserve("p1")
    assert tracker.load("p1") == 2
    assert tracker.remaining("p1") == 0


def test_zero_capacity_never_reserves():
    tracker = CapacityTracker({"p1": 0})
    assert not tracker.try_reserve("p1")
    assert tracker.load("p1") == 0


def test_release_frees_a_slot():
    tracker = CapacityTracker({"p1": 1})
    assert tracker.try_reserve("p1")
    tracker.release("p1")
    assert tracker.load("p1") == 0
    assert tracker.try_reserve("p1")


def test_release_without_reservation_is_internal_error():
    tracker = CapacityTracker({"p1": 3})
    with pytest.raises(InternalConsistencyError):
        tracker.release("p1")
    assert tracker.load("p1") == 0


def test_unknown_professor_is_internal_error():
    tracker = CapacityTracker({"p1": 3})
    with pytest.raises(InternalConsistencyError):
        tracker.try_reserve("ghost")


def test_negative_limit_is_validation_error():
    with pytest.raises(ValidationError):
        CapacityTracker({"p1": -1})


def test_loads_returns_a_copy():
    tracker = CapacityTracker({"p1": 2, "p2": 1})
    tracker.try_reserve("p1")
    loads = tracker.loads()
    loads["p1"] = 99
    assert tracker.loads() == {"p1": 1, "p2": 0}
