"""
mockkit: a small mocking engine and a pytest training collection.

    from mockkit import Mock, once
    from mockkit.services import StudentServiceContract

    mock = Mock(StudentServiceContract)
    mock.setup("get_student", 1).returns(Student("John", 25))
    mock.object.get_student(1)
    mock.verify("get_student", 1, times=once())
"""

from .exceptions import (
    ArityMismatch,
    MockError,
    NotAMockError,
    UnexpectedInvocation,
    UnknownOperation,
    VerificationFailed,
)
from .mocking import (
    CapabilityContract,
    Mock,
    MockBehavior,
    MockState,
    Operation,
    Times,
    any_value,
    at_least,
    at_least_once,
    at_most,
    at_most_once,
    between,
    eq,
    exactly,
    extension_point,
    get_mock,
    in_range,
    mock_of,
    never,
    none_of,
    not_none,
    once,
    one_of,
    regex,
    where,
)
from .recording import record_exception, record_exception_async

__all__ = [
    "ArityMismatch",
    "MockError",
    "NotAMockError",
    "UnexpectedInvocation",
    "UnknownOperation",
    "VerificationFailed",
    "CapabilityContract",
    "Mock",
    "MockBehavior",
    "MockState",
    "Operation",
    "Times",
    "any_value",
    "at_least",
    "at_least_once",
    "at_most",
    "at_most_once",
    "between",
    "eq",
    "exactly",
    "extension_point",
    "get_mock",
    "in_range",
    "mock_of",
    "never",
    "none_of",
    "not_none",
    "once",
    "one_of",
    "regex",
    "where",
    "record_exception",
    "record_exception_async",
]
