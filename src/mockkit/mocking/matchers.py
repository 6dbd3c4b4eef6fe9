"""
Argument matchers.

A matcher decides whether one actual argument is acceptable for a setup or a
verification. Matchers are pure: no side effects, same answer every time.

Plain values are accepted anywhere a matcher is expected and are compared by
equality, so these two setups are the same:

    mock.setup("get_student", 1)
    mock.setup("get_student", eq(1))

Matchers compose with &, | and ~:

    mock.setup("get_student", in_range(1, 10) & ~eq(5))
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable


class Matcher(ABC):
    """Base class for all argument matchers."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """Return True when `value` is acceptable."""

    def __and__(self, other: Any) -> "Matcher":
        return AllOf(self, as_matcher(other))

    def __or__(self, other: Any) -> "Matcher":
        return AnyOf(self, as_matcher(other))

    def __invert__(self) -> "Matcher":
        return Not(self)


class Exact(Matcher):
    """Equal to the expected value."""

    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return value == self.expected

    def __repr__(self) -> str:
        return repr(self.expected)


class Predicate(Matcher):
    """Accepted when `func(value)` is truthy. Exceptions raised by `func` propagate."""

    def __init__(self, func: Callable[[Any], Any], description: str | None = None):
        self.func = func
        self.description = description or getattr(func, "__name__", "predicate")

    def matches(self, value: Any) -> bool:
        return bool(self.func(value))

    def __repr__(self) -> str:
        return f"<where {self.description}>"


class InRange(Matcher):
    """
    Between `low` and `high`.

    - inclusive=True accepts the bounds themselves, False excludes them.
    - key: optional function applied to the value and both bounds before comparing
      (e.g. comparing Money records by amount).
    Values that can't be compared with the bounds (None, other types) don't match.
    """

    def __init__(self, low: Any, high: Any, *, inclusive: bool = True, key: Callable[[Any], Any] | None = None):
        self.low = low
        self.high = high
        self.inclusive = inclusive
        self.key = key

    def matches(self, value: Any) -> bool:
        key = self.key or (lambda v: v)
        try:
            lo, hi, v = key(self.low), key(self.high), key(value)
            if self.inclusive:
                return lo <= v <= hi
            return lo < v < hi
        except (TypeError, AttributeError):
            return False

    def __repr__(self) -> str:
        brackets = "[]" if self.inclusive else "()"
        return f"<in range {brackets[0]}{self.low!r}, {self.high!r}{brackets[1]}>"


class IsIn(Matcher):
    """One of the given values (equality; unhashable values are fine)."""

    def __init__(self, values: Iterable[Any]):
        self.values = tuple(values)

    def matches(self, value: Any) -> bool:
        return value in self.values

    def __repr__(self) -> str:
        return f"<one of {list(self.values)!r}>"


class NotIn(IsIn):
    """None of the given values."""

    def matches(self, value: Any) -> bool:
        return value not in self.values

    def __repr__(self) -> str:
        return f"<none of {list(self.values)!r}>"


class AnyValue(Matcher):
    """Anything at all, or anything of the given type(s)."""

    def __init__(self, of_type: type | tuple[type, ...] | None = None):
        self.of_type = of_type

    def matches(self, value: Any) -> bool:
        return self.of_type is None or isinstance(value, self.of_type)

    def __repr__(self) -> str:
        if self.of_type is None:
            return "<any>"
        return f"<any {getattr(self.of_type, '__name__', self.of_type)}>"


class NotNone(Matcher):
    def matches(self, value: Any) -> bool:
        return value is not None

    def __repr__(self) -> str:
        return "<not None>"


class Regex(Matcher):
    """A string in which `pattern` can be found (re.search semantics)."""

    def __init__(self, pattern: str | re.Pattern, flags: int = 0):
        # compiling up front reports bad patterns at setup time
        self.pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)

    def matches(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None

    def __repr__(self) -> str:
        return f"<regex {self.pattern.pattern!r}>"


class AllOf(Matcher):
    def __init__(self, *matchers: Matcher):
        self.matchers = matchers

    def matches(self, value: Any) -> bool:
        return all(m.matches(value) for m in self.matchers)

    def __repr__(self) -> str:
        return " & ".join(repr(m) for m in self.matchers)


class AnyOf(Matcher):
    def __init__(self, *matchers: Matcher):
        self.matchers = matchers

    def matches(self, value: Any) -> bool:
        return any(m.matches(value) for m in self.matchers)

    def __repr__(self) -> str:
        return " | ".join(repr(m) for m in self.matchers)


class Not(Matcher):
    def __init__(self, matcher: Matcher):
        self.matcher = matcher

    def matches(self, value: Any) -> bool:
        return not self.matcher.matches(value)

    def __repr__(self) -> str:
        return f"~{self.matcher!r}"


def as_matcher(value: Any) -> Matcher:
    """Return `value` itself if it is a Matcher, otherwise an Exact matcher for it."""
    return value if isinstance(value, Matcher) else Exact(value)


# ---------------------------------------------------------------------------
# Factory helpers (the names tests actually use)
# ---------------------------------------------------------------------------

def eq(expected: Any) -> Matcher:
    return Exact(expected)


def where(func: Callable[[Any], Any], description: str | None = None) -> Matcher:
    return Predicate(func, description)


def in_range(low: Any, high: Any, *, inclusive: bool = True, key: Callable[[Any], Any] | None = None) -> Matcher:
    return InRange(low, high, inclusive=inclusive, key=key)


def one_of(*values: Any) -> Matcher:
    return IsIn(values)


def none_of(*values: Any) -> Matcher:
    return NotIn(values)


def any_value(of_type: type | tuple[type, ...] | None = None) -> Matcher:
    return AnyValue(of_type)


def not_none() -> Matcher:
    return NotNone()


def regex(pattern: str | re.Pattern, flags: int = 0) -> Matcher:
    return Regex(pattern, flags)


__all__ = [
    "Matcher",
    "Exact",
    "Predicate",
    "InRange",
    "IsIn",
    "NotIn",
    "AnyValue",
    "NotNone",
    "Regex",
    "AllOf",
    "AnyOf",
    "Not",
    "as_matcher",
    "eq",
    "where",
    "in_range",
    "one_of",
    "none_of",
    "any_value",
    "not_none",
    "regex",
]
