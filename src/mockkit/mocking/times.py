"""
Expected call counts for verification.

    mock.verify("get_student", 1, times=once())
    mock.verify("get_student", 2, times=never())
    mock.verify("process", times=between(1, 3))

A bare int is shorthand for exactly(n).
"""

from __future__ import annotations


class Times:
    """An inclusive [low, high] bound on a call count; high=None means unbounded."""

    def __init__(self, low: int, high: int | None, description: str):
        if low < 0 or (high is not None and high < low):
            raise ValueError(f"invalid call count range: {low}..{high}")
        self.low = low
        self.high = high
        self.description = description

    def verify(self, count: int) -> bool:
        return count >= self.low and (self.high is None or count <= self.high)

    @classmethod
    def coerce(cls, value: "Times | int | None") -> "Times":
        if value is None:
            return cls.at_least_once()
        if isinstance(value, Times):
            return value
        return cls.exactly(value)

    @classmethod
    def exactly(cls, n: int) -> "Times":
        return cls(n, n, f"exactly {n} time{'s' if n != 1 else ''}")

    @classmethod
    def once(cls) -> "Times":
        return cls(1, 1, "once")

    @classmethod
    def never(cls) -> "Times":
        return cls(0, 0, "never")

    @classmethod
    def at_least(cls, n: int) -> "Times":
        return cls(n, None, f"at least {n} time{'s' if n != 1 else ''}")

    @classmethod
    def at_least_once(cls) -> "Times":
        return cls(1, None, "at least once")

    @classmethod
    def at_most(cls, n: int) -> "Times":
        return cls(0, n, f"at most {n} time{'s' if n != 1 else ''}")

    @classmethod
    def at_most_once(cls) -> "Times":
        return cls(0, 1, "at most once")

    @classmethod
    def between(cls, low: int, high: int, *, inclusive: bool = True) -> "Times":
        if inclusive:
            return cls(low, high, f"between {low} and {high} times (inclusive)")
        return cls(low + 1, high - 1, f"between {low} and {high} times (exclusive)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Times):
            return NotImplemented
        return (self.low, self.high) == (other.low, other.high)

    def __hash__(self) -> int:
        return hash((self.low, self.high))

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"<Times {self.description}>"


exactly = Times.exactly
once = Times.once
never = Times.never
at_least = Times.at_least
at_least_once = Times.at_least_once
at_most = Times.at_most
at_most_once = Times.at_most_once
between = Times.between

__all__ = [
    "Times",
    "exactly",
    "once",
    "never",
    "at_least",
    "at_least_once",
    "at_most",
    "at_most_once",
    "between",
]
