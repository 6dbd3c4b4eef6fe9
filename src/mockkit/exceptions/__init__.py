
# mockkit/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py      # Engine errors (ArityMismatch, UnexpectedInvocation, VerificationFailed, ...)

from .base import (
    MockError,
    ArityMismatch,
    UnknownOperation,
    UnexpectedInvocation,
    VerificationFailed,
    NotAMockError,
)

__all__ = [
    "MockError",
    "ArityMismatch",
    "UnknownOperation",
    "UnexpectedInvocation",
    "VerificationFailed",
    "NotAMockError",
]
