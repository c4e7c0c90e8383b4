"""Tests for TrackedList change notification."""

import copy

import pytest

from src.domain.tracking import TrackedList


@pytest.fixture
def counter():
    calls = []
    return calls


@pytest.fixture
def tracked(counter):
    return TrackedList(["a", "b", "c"], listener=lambda: counter.append(1))


class TestTrackedList:
    """Each structural mutation notifies exactly once."""

    @pytest.mark.parametrize("mutate", [
        lambda l: l.append("d"),
        lambda l: l.extend(["d", "e", "f"]),
        lambda l: l.insert(0, "z"),
        lambda l: l.remove("b"),
        lambda l: l.pop(),
        lambda l: l.clear(),
        lambda l: l.sort(reverse=True),
        lambda l: l.reverse(),
        lambda l: l.__setitem__(0, "x"),
        lambda l: l.__setitem__(slice(0, 2), ["x", "y", "z"]),
        lambda l: l.__delitem__(1),
        lambda l: l.__delitem__(slice(0, 2)),
    ])
    def test_mutation_notifies_once(self, tracked, counter, mutate):
        mutate(tracked)
        assert len(counter) == 1

    def test_augmented_assignment_notifies_once(self, tracked, counter):
        tracked += ["d", "e"]
        assert isinstance(tracked, TrackedList)
        assert tracked == ["a", "b", "c", "d", "e"]
        assert len(counter) == 1

    def test_reads_do_not_notify(self, tracked, counter):
        _ = tracked[0], len(tracked), list(tracked), "a" in tracked, tracked.index("b")
        assert counter == []

    def test_without_listener(self):
        tracked = TrackedList()
        tracked.append("a")
        assert tracked == ["a"]

    def test_observe_replaces_listener(self, tracked, counter):
        other = []
        tracked.observe(lambda: other.append(1))
        tracked.append("d")
        assert counter == []
        assert other == [1]

    def test_copy_is_plain_list(self, tracked, counter):
        duplicate = copy.copy(tracked)
        duplicate.append("d")
        assert type(duplicate) is list
        assert counter == []
