"""
Student service contract and its default implementation.

`StudentServiceContract` is the capability contract the training tests mock.
`StudentService` is a concrete implementation whose public `process()` delegates
to an overridable internal step, `_process_core()`. That step is marked as an
extension point so a mock built with `call_base=True` can intercept it while
`process()` itself runs for real.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mockkit.mocking.contract import extension_point
from mockkit.models.student import Student


class StudentServiceContract(ABC):
    """Operations a student service offers."""

    @abstractmethod
    def get_student(self, student_id: int) -> Student | None:
        """Return the student with this id, or None when there is none."""

    @abstractmethod
    def process(self) -> int:
        """Run a processing pass and return the number of students handled."""


class StudentService(StudentServiceContract):
    def get_student(self, student_id: int) -> Student | None:
        return None

    def process(self) -> int:
        return self._process_core() + 1

    @extension_point
    def _process_core(self) -> int:
        return 0
