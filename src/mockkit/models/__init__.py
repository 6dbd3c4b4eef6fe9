r"""
Centralized access to the in-memory records used by the training tests.

Usage:
    from mockkit.models import Student, Teacher, Money
"""

from .student import Student
from .teacher import Teacher
from .money import Money, money_key

__all__ = [
    "Student",
    "Teacher",
    "Money",
    "money_key",
]
