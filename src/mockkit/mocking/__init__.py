"""
Mock Engine public API.

Usage:
    from mockkit.mocking import Mock, once, never, any_value, one_of
"""

from .contract import CapabilityContract, Operation, extension_point
from .invocation import Invocation
from .matchers import (
    Matcher,
    any_value,
    eq,
    in_range,
    none_of,
    not_none,
    one_of,
    regex,
    where,
)
from .mock import Mock, MockBehavior, MockState, ProtectedMock, get_mock, mock_of
from .setup import Setup, SetupHandle
from .times import (
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

__all__ = [
    "CapabilityContract",
    "Operation",
    "extension_point",
    "Invocation",
    "Matcher",
    "any_value",
    "eq",
    "in_range",
    "none_of",
    "not_none",
    "one_of",
    "regex",
    "where",
    "Mock",
    "MockBehavior",
    "MockState",
    "ProtectedMock",
    "get_mock",
    "mock_of",
    "Setup",
    "SetupHandle",
    "Times",
    "at_least",
    "at_least_once",
    "at_most",
    "at_most_once",
    "between",
    "exactly",
    "never",
    "once",
]
