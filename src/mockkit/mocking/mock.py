"""
The Mock Engine.

A Mock is bound to a capability contract and owns three things:
  - an ordered list of setups (registration order)
  - an append-only invocation log
  - a proxy object (`mock.object`) whose methods route every call to `dispatch()`

Typical test flow (Arrange / Act / Assert):

    mock = Mock(StudentServiceContract)
    mock.setup("get_student", 1).returns(Student("John", 25))      # arrange

    student = mock.object.get_student(1)                            # act

    assert student.name == "John"                                   # assert
    mock.verify("get_student", 1, times=once())

Matching rule: setups are scanned newest first and the first one whose
matchers all accept the call's arguments wins. A later, broader setup therefore
shadows an earlier, narrower one for the arguments they share.

Unmatched calls:
  - call_base=True and the base class implements the operation: run it
  - strict behavior: raise UnexpectedInvocation
  - otherwise: return the operation's zero value (None for records/Optionals)
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Any, Callable

from mockkit.config.settings import get_settings
from mockkit.exceptions.base import (
    ArityMismatch,
    NotAMockError,
    UnexpectedInvocation,
    UnknownOperation,
    VerificationFailed,
)

from .contract import CapabilityContract, Operation
from .invocation import RAISED, RETURNED, Invocation
from .matchers import Matcher, as_matcher
from .setup import Setup, SetupHandle
from .times import Times

logger = logging.getLogger(__name__)

# class attribute linking a proxy class back to its Mock (see get_mock)
_MOCK_ATTR = "_mockkit_mock"


class MockBehavior(str, enum.Enum):
    LOOSE = "loose"
    STRICT = "strict"


class MockState(str, enum.Enum):
    CONFIGURING = "configuring"   # no call dispatched yet
    ACTIVE = "active"             # at least one call dispatched
    VERIFIED = "verified"         # at least one verify* call made


OperationRef = str | Callable[..., Any]


def _operation_name(operation: OperationRef) -> str:
    if isinstance(operation, str):
        return operation
    name = getattr(operation, "__name__", None)
    if name is None:
        raise TypeError(f"expected an operation name or function, got {operation!r}")
    return name


class Mock:
    """
    A test double for a capability contract.

    Args:
        target: a CapabilityContract, or a class to derive one from
        behavior: MockBehavior (or "loose"/"strict"). Defaults to the contract's
            `strict` flag, then to Settings.MOCK_DEFAULT_BEHAVIOR.
        call_base: run the base class implementation for calls no setup matches
        name: label used in logs and error messages

    Thread safety: dispatch, setup registration and verification serialize on an
    internal RLock. A mock shared by several tests (fixture scope) keeps its
    invocation log and sequence positions until reset_calls()/reset().
    """

    def __init__(
        self,
        target: CapabilityContract | type,
        *,
        behavior: MockBehavior | str | None = None,
        call_base: bool = False,
        name: str | None = None,
    ):
        if isinstance(target, CapabilityContract):
            self.contract = target
        elif isinstance(target, type):
            self.contract = CapabilityContract.from_class(target)
        else:
            raise TypeError(f"Mock() expects a CapabilityContract or a class, got {target!r}")

        self.behavior = self._resolve_behavior(behavior)
        self.call_base = call_base
        self.name = name or f"Mock<{self.contract.name}>"
        self.state = MockState.CONFIGURING

        self._lock = threading.RLock()
        self._setups: list[Setup] = []
        self._invocations: list[Invocation] = []
        self._proxy: Any = None

        logger.debug(
            "mock.create",
            extra={
                "mock_name": self.name,
                "contract": self.contract.name,
                "behavior": self.behavior.value,
                "call_base": call_base,
                "operations": sorted(op.name for op in self.contract),
            },
        )

    def _resolve_behavior(self, behavior: MockBehavior | str | None) -> MockBehavior:
        if behavior is not None:
            return MockBehavior(behavior)
        if self.contract.strict is not None:
            return MockBehavior.STRICT if self.contract.strict else MockBehavior.LOOSE
        return MockBehavior.STRICT if get_settings().MOCK_STRICT_BY_DEFAULT else MockBehavior.LOOSE

    # =================================================================================================================
    # Read-only views
    # =================================================================================================================

    @property
    def strict(self) -> bool:
        return self.behavior is MockBehavior.STRICT

    @property
    def setups(self) -> tuple[Setup, ...]:
        with self._lock:
            return tuple(self._setups)

    @property
    def invocations(self) -> tuple[Invocation, ...]:
        with self._lock:
            return tuple(self._invocations)

    @property
    def object(self) -> Any:
        """The proxy implementing the contract. Created on first access, then reused."""
        with self._lock:
            if self._proxy is None:
                self._proxy = _build_proxy(self)
            return self._proxy

    # =================================================================================================================
    # Setup
    # =================================================================================================================

    def setup(self, operation: OperationRef, *matchers: Any) -> SetupHandle:
        """
        Register a setup for a public operation. One matcher (or plain value)
        per parameter, optional parameters included.

        Raises:
            UnknownOperation: not in the contract, or an extension point (use protected())
            ArityMismatch: wrong number of matchers
        """
        return self._register(self._resolve(operation, hook=False), matchers, sequence=False)

    def setup_sequence(self, operation: OperationRef, *matchers: Any) -> SetupHandle:
        """Register a sequence setup: each returns()/raises() adds the next call's step."""
        return self._register(self._resolve(operation, hook=False), matchers, sequence=True)

    def protected(self) -> "ProtectedMock":
        """Access setups/verification for extension points (non-public hooks)."""
        return ProtectedMock(self)

    def _resolve(self, operation: OperationRef, *, hook: bool) -> Operation:
        name = _operation_name(operation)
        op = self.contract.get(name)
        if op.hook and not hook:
            raise UnknownOperation(name, contract=self.contract.name,
                                   hint="it is an extension point, use mock.protected()")
        if hook and not op.hook:
            raise UnknownOperation(name, contract=self.contract.name,
                                   hint="it is not an extension point, use mock.setup()/mock.verify()")
        return op

    def _coerce_matchers(self, op: Operation, matchers: tuple) -> tuple[Matcher, ...]:
        if len(matchers) != op.arity:
            raise ArityMismatch(op.name, expected=op.arity, actual=len(matchers))
        return tuple(as_matcher(m) for m in matchers)

    def _register(self, op: Operation, matchers: tuple, *, sequence: bool) -> SetupHandle:
        coerced = self._coerce_matchers(op, matchers)
        with self._lock:
            setup = Setup(op, coerced, index=len(self._setups), sequence=sequence)
            self._setups.append(setup)
        logger.debug(
            "mock.setup",
            extra={
                "mock_name": self.name,
                "operation": op.name,
                "matchers": [repr(m) for m in coerced],
                "sequence": sequence,
                "setup_index": setup.index,
            },
        )
        return SetupHandle(setup, self._lock)

    # =================================================================================================================
    # Dispatch
    # =================================================================================================================

    def dispatch(self, operation: OperationRef, args: tuple = (), kwargs: dict | None = None, *, instance: Any = None) -> Any:
        """
        Route one call through the setups.

        The call is recorded first, then matched (newest setup first) and its
        behavior step consumed, all under the lock. The step itself (callbacks,
        computed return, raise, base call) runs outside the lock so callbacks
        may call back into the mock.
        """
        op = self.contract.get(_operation_name(operation))
        values = op.bind(tuple(args), dict(kwargs or {}))

        with self._lock:
            invocation = Invocation(op.name, values, sequence=len(self._invocations), keywords=dict(kwargs or {}))
            self._invocations.append(invocation)
            if self.state is MockState.CONFIGURING:
                self.state = MockState.ACTIVE
            setup = self._find_setup(op.name, values)
            step = setup.consume() if setup is not None else None
            invocation.setup = setup

        if setup is None:
            return self._dispatch_unmatched(op, invocation, args, kwargs or {}, instance)

        logger.debug(
            "mock.dispatch.matched",
            extra={
                "mock_name": self.name,
                "operation": op.name,
                "call": op.format_call(values),
                "setup_index": setup.index,
                "invocation": invocation.sequence,
            },
        )
        return self._complete(invocation, lambda: setup.run(step, values))

    def _find_setup(self, name: str, values: tuple) -> Setup | None:
        for setup in reversed(self._setups):
            if setup.operation.name == name and setup.accepts(values):
                return setup
        return None

    def _dispatch_unmatched(self, op: Operation, invocation: Invocation, args: tuple, kwargs: dict, instance: Any) -> Any:
        call = op.format_call(invocation.arguments)
        base_impl = self.contract.base_implementation(op.name) if self.call_base else None

        logger.debug(
            "mock.dispatch.unmatched",
            extra={
                "mock_name": self.name,
                "operation": op.name,
                "call": call,
                "fallback": "base" if base_impl else ("error" if self.strict else "default"),
                "invocation": invocation.sequence,
            },
        )

        if base_impl is not None:
            target = instance if instance is not None else self.object
            return self._complete(invocation, lambda: base_impl(target, *args, **kwargs))

        if self.strict:
            error = UnexpectedInvocation(op.name, call=f"{self.name}.{call}")
            invocation.outcome = RAISED
            invocation.error = error
            logger.info(
                "mock.dispatch.unexpected",
                extra={"mock_name": self.name, "operation": op.name, "call": call},
            )
            raise error

        invocation.outcome = RETURNED
        return op.default_value()

    @staticmethod
    def _complete(invocation: Invocation, produce: Callable[[], Any]) -> Any:
        try:
            result = produce()
        except Exception as exc:
            invocation.outcome = RAISED
            invocation.error = exc
            raise
        invocation.outcome = RETURNED
        return result

    # =================================================================================================================
    # Verification
    # =================================================================================================================

    def verify(self, operation: OperationRef, *matchers: Any, times: Times | int | None = None) -> None:
        """
        Check how many recorded calls of a public operation match `matchers`
        (every call of the operation when no matchers are given).

        times defaults to at_least_once(); an int means exactly(n).
        On success the counted calls are marked verified (see verify_no_other_calls).

        Raises:
            VerificationFailed: the count does not satisfy `times`
        """
        self._verify(self._resolve(operation, hook=False), matchers, times)

    def _verify(self, op: Operation, matchers: tuple, times: Times | int | None) -> None:
        coerced = self._coerce_matchers(op, matchers) if matchers else None
        expected = Times.coerce(times)
        pattern = f"{op.name}({', '.join(repr(m) for m in coerced)})" if coerced else f"{op.name}(...)"

        with self._lock:
            self.state = MockState.VERIFIED
            performed = [inv for inv in self._invocations if inv.operation == op.name]
            matching = [inv for inv in performed if inv.matches(coerced)]
            count = len(matching)
            if expected.verify(count):
                for inv in matching:
                    inv.verified = True
                details = None
            else:
                details = [str(inv) for inv in performed] or ["no calls to this operation were recorded"]

        if details is not None:
            logger.info(
                "mock.verify.failed",
                extra={
                    "mock_name": self.name,
                    "operation": op.name,
                    "expected": str(expected),
                    "actual": count,
                },
            )
            raise VerificationFailed(
                f"Expected {self.name}.{pattern} to be called {expected}, but it was called {count} time(s)",
                operation=op.name,
                expected=str(expected),
                actual=count,
                details=details,
            )

        logger.debug(
            "mock.verify.success",
            extra={"mock_name": self.name, "operation": op.name, "expected": str(expected), "actual": count},
        )

    def verify_all(self) -> None:
        """
        Check that every verifiable() setup matched at least one recorded call.
        On success the calls handled by verifiable setups are marked verified.
        """
        with self._lock:
            self.state = MockState.VERIFIED
            matched = {id(inv.setup) for inv in self._invocations if inv.setup is not None}
            missing = [s for s in self._setups if s.is_verifiable and id(s) not in matched]
            if not missing:
                for inv in self._invocations:
                    if inv.setup is not None and inv.setup.is_verifiable:
                        inv.verified = True

        if missing:
            logger.info(
                "mock.verify.failed",
                extra={"mock_name": self.name, "check": "verify_all", "unmatched_setups": len(missing)},
            )
            raise VerificationFailed(
                f"{self.name} has {len(missing)} verifiable setup(s) that were never matched",
                expected="every verifiable setup matched at least once",
                actual=len(missing),
                details=[repr(s) for s in missing],
            )

        logger.debug("mock.verify.success", extra={"mock_name": self.name, "check": "verify_all"})

    def verify_no_other_calls(self) -> None:
        """Check that every recorded call was covered by a successful verify()/verify_all()."""
        with self._lock:
            self.state = MockState.VERIFIED
            unverified = [inv for inv in self._invocations if not inv.verified]

        if unverified:
            logger.info(
                "mock.verify.failed",
                extra={"mock_name": self.name, "check": "verify_no_other_calls", "unverified_calls": len(unverified)},
            )
            raise VerificationFailed(
                f"{self.name} received {len(unverified)} call(s) that were not verified",
                expected="no unverified calls",
                actual=len(unverified),
                details=[str(inv) for inv in unverified],
            )

        logger.debug("mock.verify.success", extra={"mock_name": self.name, "check": "verify_no_other_calls"})

    # =================================================================================================================
    # Reset
    # =================================================================================================================

    def reset_calls(self) -> None:
        """Forget recorded calls; setups (and their sequence positions) are kept."""
        with self._lock:
            self._invocations.clear()
        logger.debug("mock.reset", extra={"mock_name": self.name, "scope": "calls"})

    def reset(self) -> None:
        """Forget setups and recorded calls; the mock is back to CONFIGURING."""
        with self._lock:
            self._invocations.clear()
            self._setups.clear()
            self.state = MockState.CONFIGURING
        logger.debug("mock.reset", extra={"mock_name": self.name, "scope": "all"})

    def __repr__(self) -> str:
        return f"<{self.name} {self.behavior.value} setups={len(self._setups)} calls={len(self._invocations)}>"


class ProtectedMock:
    """
    Setup/verify access to a mock's extension points.

        mock = Mock(StudentService, call_base=True)
        mock.protected().setup("_process_core").returns(1)
        mock.object.process()
        mock.protected().verify("_process_core", times=once())
    """

    def __init__(self, mock: Mock):
        self._mock = mock

    def setup(self, operation: str, *matchers: Any) -> SetupHandle:
        return self._mock._register(self._mock._resolve(operation, hook=True), matchers, sequence=False)

    def setup_sequence(self, operation: str, *matchers: Any) -> SetupHandle:
        return self._mock._register(self._mock._resolve(operation, hook=True), matchers, sequence=True)

    def verify(self, operation: str, *matchers: Any, times: Times | int | None = None) -> None:
        self._mock._verify(self._mock._resolve(operation, hook=True), matchers, times)


# =====================================================================================================================
# Proxy construction
# =====================================================================================================================

def _make_dispatcher(op: Operation) -> Callable[..., Any]:
    def dispatcher(self, *args, **kwargs):
        return getattr(type(self), _MOCK_ATTR).dispatch(op.name, args, kwargs, instance=self)

    dispatcher.__name__ = op.name
    dispatcher.__qualname__ = op.name
    dispatcher.__doc__ = op.doc
    return dispatcher


def _build_proxy(mock: Mock) -> Any:
    """
    Build a one-off class implementing the contract and return an instance of it.

    For class-derived contracts the proxy subclasses the contract's class, so
    isinstance() checks in code under test keep working. The base __init__ is
    never run; a mock has no real state.
    """
    contract = mock.contract
    base = contract.base or object
    namespace: dict[str, Any] = {op.name: _make_dispatcher(op) for op in contract}
    namespace[_MOCK_ATTR] = mock
    namespace["__repr__"] = lambda self: f"<proxy of {mock.name}>"
    namespace["__module__"] = __name__
    proxy_cls = type(f"{contract.name}Proxy", (base,), namespace)
    # abstract properties, static and class methods are not operations; nothing is left to implement
    proxy_cls.__abstractmethods__ = frozenset()
    return object.__new__(proxy_cls)


def mock_of(target: CapabilityContract | type, **kwargs: Any) -> Any:
    """Create a mock and return just its proxy: a fake that does nothing until configured."""
    return Mock(target, **kwargs).object


def get_mock(proxy: Any) -> Mock:
    """Return the Mock behind a proxy created by Mock.object / mock_of()."""
    mock = getattr(type(proxy), _MOCK_ATTR, None)
    if not isinstance(mock, Mock):
        raise NotAMockError(proxy)
    return mock


__all__ = [
    "Mock",
    "MockBehavior",
    "MockState",
    "ProtectedMock",
    "mock_of",
    "get_mock",
]
