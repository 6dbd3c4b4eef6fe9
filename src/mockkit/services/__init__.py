"""
Service layer: the contracts the mocks stand in for.

Usage:
    from mockkit.services import StudentServiceContract, StudentService
"""

from .student_service import StudentServiceContract, StudentService

__all__ = [
    "StudentServiceContract",
    "StudentService",
]
