from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .setup import Setup


PENDING = "pending"
RETURNED = "returned"
RAISED = "raised"


@dataclass
class Invocation:
    """
    One observed call, appended to the mock's log before its behavior runs.

    `arguments` holds one value per parameter (defaults applied), so
    verification matchers line up with setup matchers. `keywords` keeps the
    keyword arguments exactly as the caller passed them.
    """

    operation: str
    arguments: tuple
    sequence: int
    keywords: dict = field(default_factory=dict)
    timestamp: float = field(default_factory=time.monotonic)
    outcome: str = PENDING
    setup: "Setup | None" = None
    verified: bool = False
    error: BaseException | None = None

    @property
    def matched(self) -> bool:
        return self.setup is not None

    @property
    def succeeded(self) -> bool:
        return self.outcome == RETURNED

    def matches(self, matchers: tuple | None) -> bool:
        if matchers is None:
            return True
        return all(m.matches(v) for m, v in zip(matchers, self.arguments))

    def __str__(self) -> str:
        args = ", ".join(repr(a) for a in self.arguments)
        status = "verified" if self.verified else "unverified"
        return f"#{self.sequence} {self.operation}({args}) [{self.outcome}, {status}]"


__all__ = ["Invocation", "PENDING", "RETURNED", "RAISED"]
