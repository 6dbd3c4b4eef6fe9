"""
Capability contracts: the set of operations a mock can stand in for.

A contract is either declared explicitly:

    contract = CapabilityContract("Prices", [
        Operation("get_price", ["sku"], returns=float),
        Operation("refresh", []),
    ])

or derived from a class (usually an ABC or Protocol-like base class):

    contract = CapabilityContract.from_class(StudentServiceContract)

A derived contract contains every public method of the class plus every method
marked with @extension_point. Non-public methods are otherwise invisible to the
mock: a class that wants subclasses (and therefore mocks) to intercept an
internal step must say so explicitly.
"""

from __future__ import annotations

import inspect
import typing
from typing import Any, Callable, Iterable, Iterator

from mockkit.exceptions.base import UnknownOperation

_NOT_SET = object()

# Zero values handed back by loose mocks when no setup matches a call.
# Anything not listed here (records, Optional[...], unions, None) defaults to None.
_ZERO_FACTORIES: dict[type, Callable[[], Any]] = {
    int: int,
    float: float,
    complex: complex,
    bool: bool,
    str: str,
    bytes: bytes,
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
}

EXTENSION_POINT_ATTR = "__mock_extension_point__"


def extension_point(func: Callable) -> Callable:
    """
    Mark a non-public method as interceptable by mocks.

        class StudentService:
            def process(self) -> int:
                return self._process_core() + 1

            @extension_point
            def _process_core(self) -> int:
                return 0
    """
    setattr(func, EXTENSION_POINT_ATTR, True)
    return func


def zero_value_factory(return_type: Any) -> Callable[[], Any]:
    """Return a factory producing the 'not configured' value for a declared return type."""
    origin = typing.get_origin(return_type) or return_type
    if isinstance(origin, type):
        return _ZERO_FACTORIES.get(origin, lambda: None)
    return lambda: None


class Operation:
    """
    One mockable operation: name, ordered parameters, declared return type.

    Parameters may be given as plain names or as `inspect.Parameter` objects
    (which keeps defaults and keyword-only markers). Every parameter, including
    *args / **kwargs collectors, takes exactly one matcher slot.
    """

    def __init__(
        self,
        name: str,
        parameters: Iterable[str | inspect.Parameter] = (),
        *,
        returns: Any = None,
        default: Any = _NOT_SET,
        hook: bool = False,
        doc: str | None = None,
    ):
        self.name = name
        self.parameters: tuple[inspect.Parameter, ...] = tuple(
            p if isinstance(p, inspect.Parameter)
            else inspect.Parameter(p, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            for p in parameters
        )
        # raises ValueError for duplicate names or bad ordering, like a def would
        self.signature = inspect.Signature(self.parameters)
        self.returns = returns
        self.hook = hook
        self.doc = doc
        if default is _NOT_SET:
            self._default_factory = zero_value_factory(returns)
        else:
            self._default_factory = lambda: default

    @classmethod
    def from_function(cls, func: Callable, *, hook: bool = False) -> "Operation":
        """Build an Operation from a method defined on a class (the `self` parameter is dropped)."""
        sig = inspect.signature(func)
        params = list(sig.parameters.values())[1:]
        try:
            hints = typing.get_type_hints(func)
        except (NameError, TypeError):
            # forward references that can't be resolved: fall back to "unknown" (None default)
            hints = {}
        returns = hints.get("return")
        params = [p.replace(annotation=inspect.Parameter.empty) for p in params]
        return cls(func.__name__, params, returns=returns, hook=hook, doc=inspect.getdoc(func))

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def default_value(self) -> Any:
        return self._default_factory()

    def bind(self, args: tuple, kwargs: dict) -> tuple:
        """
        Normalize a call's arguments into one value per parameter (defaults applied).
        Raises TypeError exactly like calling a real function with bad arguments would.
        """
        try:
            bound = self.signature.bind(*args, **kwargs)
        except TypeError as exc:
            raise TypeError(f"{self.name}(): {exc}") from None
        bound.apply_defaults()
        return tuple(bound.arguments.values())

    def format_call(self, values: Iterable[Any]) -> str:
        return f"{self.name}({', '.join(repr(v) for v in values)})"

    def __repr__(self) -> str:
        kind = "hook" if self.hook else "operation"
        return f"<{kind} {self.name}{self.signature}>"


class CapabilityContract:
    """
    A named, immutable set of Operations.

    - name: used in mock names, log lines and error messages
    - strict: True/False forces the behavior of mocks built from this contract
      when they do not choose one themselves; None defers to settings
    - base: the class the contract was derived from (proxies subclass it)
    """

    def __init__(
        self,
        name: str,
        operations: Iterable[Operation],
        *,
        strict: bool | None = None,
        base: type | None = None,
    ):
        self.name = name
        self.strict = strict
        self.base = base
        self._operations: dict[str, Operation] = {}
        for op in operations:
            if op.name in self._operations:
                raise ValueError(f"{name} declares operation {op.name!r} twice")
            self._operations[op.name] = op

    @classmethod
    def from_class(cls, target: type, *, strict: bool | None = None) -> "CapabilityContract":
        """
        Derive a contract from a class.

        Included:
          - public methods (own and inherited)
          - methods marked with @extension_point (as hooks)
          - abstract non-public methods (as hooks; a proxy has to implement them)
        Skipped: dunder methods, static/class methods, properties.
        """
        operations = []
        for attr_name in dir(target):
            if attr_name.startswith("__") and attr_name.endswith("__"):
                continue
            raw = inspect.getattr_static(target, attr_name)
            if isinstance(raw, (staticmethod, classmethod, property)):
                continue
            if not inspect.isfunction(raw):
                continue
            private = attr_name.startswith("_")
            marked = getattr(raw, EXTENSION_POINT_ATTR, False)
            abstract = getattr(raw, "__isabstractmethod__", False)
            if private and not (marked or abstract):
                continue
            operations.append(Operation.from_function(raw, hook=private))
        return cls(target.__name__, operations, strict=strict, base=target)

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations.values())

    def get(self, name: str) -> Operation:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperation(name, contract=self.name) from None

    def base_implementation(self, name: str) -> Callable | None:
        """The base class's own implementation of `name`, or None when there is nothing concrete to call."""
        if self.base is None:
            return None
        impl = getattr(self.base, name, None)
        if impl is None or getattr(impl, "__isabstractmethod__", False):
            return None
        return impl

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"<CapabilityContract {self.name}: {', '.join(self._operations)}>"
