"""Tests for per-call object identity tracking."""

import pytest

from consolelog.core.tracker import IdentityTracker, object_ref


class Thing:
    pass


class TestIdentityTracker:
    def test_tokens_numbered_in_first_seen_order(self):
        tracker = IdentityTracker()
        a, b, c = Thing(), Thing(), Thing()
        assert tracker.register(a) == "object (Thing) [1]"
        assert tracker.register(b) == "object (Thing) [2]"
        assert tracker.register(c) == "object (Thing) [3]"
        assert tracker.tokens() == [
            "object (Thing) [1]",
            "object (Thing) [2]",
            "object (Thing) [3]",
        ]

    def test_get_and_contains(self):
        tracker = IdentityTracker()
        a, b = Thing(), Thing()
        tracker.register(a)
        assert a in tracker
        assert b not in tracker
        assert tracker.get(a) == "object (Thing) [1]"
        assert tracker.get(b) is None

    def test_identity_not_equality(self):
        tracker = IdentityTracker()
        first, second = [1], [1]
        tracker.register(first)
        assert second not in tracker

    def test_register_twice_fails(self):
        tracker = IdentityTracker()
        a = Thing()
        tracker.register(a)
        with pytest.raises(ValueError):
            tracker.register(a)
        assert len(tracker) == 1

    def test_object_ref_format(self):
        assert object_ref(Thing(), 4) == "object (Thing) [4]"
