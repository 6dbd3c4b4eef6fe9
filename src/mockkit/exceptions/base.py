"""
Exceptions raised by the Mock Engine.

Every engine-detected problem is raised synchronously at the point it is found:
a misconfigured setup fails at setup time, an unexpected call fails at call time,
a failed verification fails at verify time. Nothing here is retried or swallowed.

Errors injected by a `raises(...)` behavior are NOT part of this hierarchy; they
propagate to the caller exactly as the real operation would have raised them.
"""

from typing import Any, Iterable


class MockError(Exception):
    """
    Base exception for all mock engine errors.

    - message: human-friendly description of what went wrong
    - operation: name of the contract operation involved (if any)
    - error_code: canonical short code (e.g. 'arity_mismatch') used by reports and tests
    """

    error_code: str = "mock_error"

    def __init__(self, message: str, *, operation: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.operation:
            parts.append(f"operation: {self.operation}")
        parts.extend(self._context_parts())
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def _context_parts(self) -> list[str]:
        """Extra `key: value` fragments appended to str(); subclasses extend this."""
        return []

    def to_payload(self) -> dict[str, Any]:
        """
        Return a JSON-serializable dict describing the failure.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "verification_failed",
                "operation": "get_student",     # optional
            }
        """
        payload: dict[str, Any] = {"detail": self.message, "code": self.error_code}
        if self.operation:
            payload["operation"] = self.operation
        return payload


class ArityMismatch(MockError):
    """Raised at setup/verify time when the matcher count differs from the operation's parameter count."""

    error_code = "arity_mismatch"

    def __init__(self, operation: str, *, expected: int, actual: int):
        super().__init__(
            f"{operation}() takes {expected} argument matcher(s) but {actual} were given",
            operation=operation,
        )
        self.expected = expected
        self.actual = actual

    def _context_parts(self) -> list[str]:
        return [f"expected: {self.expected}", f"actual: {self.actual}"]

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload.update(expected=self.expected, actual=self.actual)
        return payload


class UnknownOperation(MockError):
    """Raised when a setup or verification names an operation the contract does not expose."""

    error_code = "unknown_operation"

    def __init__(self, operation: str, *, contract: str, hint: str | None = None):
        message = f"{contract} has no mockable operation named {operation!r}"
        if hint:
            message = f"{message}; {hint}"
        super().__init__(message, operation=operation)
        self.contract = contract


class UnexpectedInvocation(MockError):
    """Raised by a strict mock when a call matches no setup."""

    error_code = "unexpected_invocation"

    def __init__(self, operation: str, *, call: str):
        super().__init__(
            f"Unexpected call {call}: strict mocks require a matching setup for every call",
            operation=operation,
        )
        self.call = call


class VerificationFailed(MockError, AssertionError):
    """
    Raised by the verify* family when the recorded calls do not satisfy the expectation.

    Inherits from AssertionError so pytest reports it as a regular test failure
    (with the message) instead of an error.

    - expected: description of the expected condition (e.g. "exactly 2 times")
    - actual: the observed count (or number of offending items for verify_all/verify_no_other_calls)
    - details: one line per unmatched setup / unverified call / recorded call, for diagnosis
    """

    error_code = "verification_failed"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        expected: str,
        actual: int,
        details: Iterable[str] | None = None,
    ):
        super().__init__(message, operation=operation)
        self.expected = expected
        self.actual = actual
        self.details = list(details) if details else []

    def __str__(self) -> str:
        text = super().__str__()
        if self.details:
            lines = "\n".join(f"  - {line}" for line in self.details)
            return f"{text}\n{lines}"
        return text

    def _context_parts(self) -> list[str]:
        return [f"expected: {self.expected}", f"actual: {self.actual}"]

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload.update(expected=self.expected, actual=self.actual)
        if self.details:
            payload["details"] = list(self.details)
        return payload


class NotAMockError(MockError):
    """Raised by get_mock() when the object was not produced by a Mock."""

    error_code = "not_a_mock"

    def __init__(self, obj: object):
        super().__init__(f"{type(obj).__name__} instance is not a mock proxy")


__all__ = [
    "MockError",
    "ArityMismatch",
    "UnknownOperation",
    "UnexpectedInvocation",
    "VerificationFailed",
    "NotAMockError",
]
