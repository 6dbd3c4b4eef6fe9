import pytest

from mockkit.mocking.times import (
    Times,
    at_least,
    at_least_once,
    at_most,
    at_most_once,
    between,
    exactly,
    never,
    once,
)


@pytest.mark.parametrize(
    "times, ok, not_ok",
    [
        (once(), [1], [0, 2]),
        (never(), [0], [1]),
        (exactly(3), [3], [2, 4]),
        (at_least(2), [2, 10], [1]),
        (at_least_once(), [1, 5], [0]),
        (at_most(2), [0, 2], [3]),
        (at_most_once(), [0, 1], [2]),
        (between(1, 3), [1, 3], [0, 4]),
        (between(1, 4, inclusive=False), [2, 3], [1, 4]),
    ],
)
def test_times_bounds(times: Times, ok, not_ok):
    assert all(times.verify(n) for n in ok)
    assert not any(times.verify(n) for n in not_ok)


class TestCoerce:
    def test_none_means_at_least_once(self):
        assert Times.coerce(None) == at_least_once()

    def test_int_means_exactly(self):
        assert Times.coerce(2) == exactly(2)

    def test_times_pass_through(self):
        t = between(1, 2)
        assert Times.coerce(t) is t


def test_invalid_ranges_are_rejected():
    with pytest.raises(ValueError):
        Times(-1, 1, "negative")
    with pytest.raises(ValueError):
        between(3, 1)


def test_descriptions():
    assert str(once()) == "once"
    assert str(exactly(2)) == "exactly 2 times"
    assert str(exactly(1)) == "exactly 1 time"
    assert str(at_least(3)) == "at least 3 times"
    assert once() == exactly(1)
    assert hash(once()) == hash(exactly(1))
