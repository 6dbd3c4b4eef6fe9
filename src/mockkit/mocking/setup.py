"""
Setups: registered expectations mapping a call pattern to a behavior.

A Setup owns an ordered list of behavior steps. How the list is consumed
depends on the kind of setup:

  regular setup    every matching call replays the configured step forever
                   (a later returns()/raises() replaces it)
  sequence setup   each matching call consumes the next step; once the list
                   is exhausted the setup stops matching, so the call falls
                   through to older setups or to the not-configured default

`returns_sequence()` turns a regular setup into a sequence setup;
`Mock.setup_sequence()` creates one directly, and then each `returns()` /
`raises()` appends a step.

Callbacks and computed returns receive the call's arguments bound to the
operation's parameters, defaults applied, in declaration order.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

from .contract import Operation
from .matchers import Matcher

ErrorSpec = type[BaseException] | BaseException


class Step:
    """One behavior: return a value, compute a value, or raise."""

    RETURN = "return"
    COMPUTE = "compute"
    RAISE = "raise"

    def __init__(self, kind: str, payload: Any):
        self.kind = kind
        self.payload = payload

    def produce(self, values: tuple) -> Any:
        if self.kind == Step.RETURN:
            return self.payload
        if self.kind == Step.COMPUTE:
            return self.payload(*values)
        error = self.payload
        if isinstance(error, type):
            error = error()
        raise error

    def __repr__(self) -> str:
        if self.kind == Step.RAISE:
            name = self.payload.__name__ if isinstance(self.payload, type) else type(self.payload).__name__
            return f"raises {name}"
        if self.kind == Step.COMPUTE:
            return f"returns {getattr(self.payload, '__name__', 'computed value')}(...)"
        return f"returns {self.payload!r}"


class Setup:
    """
    One registered expectation.

    Attributes:
      - operation: the contract Operation this setup applies to
      - matchers: one Matcher per parameter
      - sequence: True for sequence setups (exhaustible)
      - index: registration order within the owning mock
      - is_verifiable: required by Mock.verify_all()
      - match_count: how many calls this setup has handled

    All mutation happens under the owning mock's lock.
    """

    def __init__(self, operation: Operation, matchers: tuple[Matcher, ...], *, index: int, sequence: bool = False):
        self.operation = operation
        self.matchers = matchers
        self.index = index
        self.sequence = sequence
        self.steps: list[Step] = []
        self.position = 0
        self.before: Callable[..., Any] | None = None
        self.after: Callable[..., Any] | None = None
        self.is_verifiable = False
        self.match_count = 0

    @property
    def exhausted(self) -> bool:
        return self.sequence and self.position >= len(self.steps)

    def accepts(self, values: tuple) -> bool:
        if self.exhausted:
            return False
        return all(m.matches(v) for m, v in zip(self.matchers, values))

    def add_step(self, step: Step) -> None:
        if self.sequence:
            self.steps.append(step)
        else:
            self.steps = [step]

    def consume(self) -> Step | None:
        """
        Take the step for the current call. None means "no behavior configured":
        the call still counts as matched and returns the operation's default.
        """
        self.match_count += 1
        if not self.steps:
            return None
        if self.sequence:
            step = self.steps[self.position]
            self.position += 1
            return step
        return self.steps[-1]

    def run(self, step: Step | None, values: tuple) -> Any:
        """Apply a consumed step: before-callback, result, after-callback (only on success)."""
        if self.before is not None:
            self.before(*values)
        if step is None:
            result = self.operation.default_value()
        else:
            result = step.produce(values)
        if self.after is not None:
            self.after(*values)
        return result

    def __repr__(self) -> str:
        pattern = f"{self.operation.name}({', '.join(repr(m) for m in self.matchers)})"
        kind = "sequence setup" if self.sequence else "setup"
        steps = ", then ".join(repr(s) for s in self.steps) or "default value"
        return f"<{kind} #{self.index} {pattern}: {steps} (matched {self.match_count}x)>"


class SetupHandle:
    """
    Fluent API returned by Mock.setup()/setup_sequence().

        mock.setup("get_student", 1).returns(john)
        mock.setup("get_student", 2).raises(IndexError)
        mock.setup_sequence("get_student", 1).returns(john).returns(jane)
        mock.setup("process").callback(before=count_before, after=count_after).returns(1)
        mock.setup("get_student", 99).returns(john).verifiable()
    """

    def __init__(self, setup: Setup, lock: threading.RLock):
        self._setup = setup
        self._lock = lock

    @property
    def setup(self) -> Setup:
        return self._setup

    def returns(self, value: Any) -> "SetupHandle":
        """Return `value` (appended as the next step when sequencing)."""
        with self._lock:
            self._setup.add_step(Step(Step.RETURN, value))
        return self

    def returns_using(self, func: Callable[..., Any]) -> "SetupHandle":
        """Return `func(*arguments)` computed at call time."""
        with self._lock:
            self._setup.add_step(Step(Step.COMPUTE, func))
        return self

    def returns_sequence(self, *values: Any) -> "SetupHandle":
        """
        Return each value once, in order. After the last one the setup stops
        matching and later calls fall through (default value, or an error on
        strict mocks).

        On a regular setup this replaces any step set by returns()/raises();
        on a sequence setup the values are appended.
        """
        with self._lock:
            if not self._setup.sequence:
                self._setup.sequence = True
                self._setup.steps = []
                self._setup.position = 0
            for value in values:
                self._setup.add_step(Step(Step.RETURN, value))
        return self

    def raises(self, error: ErrorSpec) -> "SetupHandle":
        """
        Raise `error` instead of returning. An exception class is instantiated
        (without arguments) on every call; an instance is raised as-is.
        """
        if not (isinstance(error, BaseException) or (isinstance(error, type) and issubclass(error, BaseException))):
            raise TypeError(f"raises() expects an exception class or instance, got {error!r}")
        with self._lock:
            self._setup.add_step(Step(Step.RAISE, error))
        return self

    def callback(
        self,
        before: Callable[..., Any] | None = None,
        after: Callable[..., Any] | None = None,
    ) -> "SetupHandle":
        """
        `before(*arguments)` runs right before the result is produced;
        `after(*arguments)` runs only when the call did not raise.
        Passing None leaves an existing callback untouched.
        """
        with self._lock:
            if before is not None:
                self._setup.before = before
            if after is not None:
                self._setup.after = after
        return self

    def verifiable(self) -> "SetupHandle":
        """Require this setup to be matched at least once by Mock.verify_all()."""
        with self._lock:
            self._setup.is_verifiable = True
        return self

    def __repr__(self) -> str:
        return repr(self._setup)
