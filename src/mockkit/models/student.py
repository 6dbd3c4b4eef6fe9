from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """
    A student record. Frozen dataclass, so two students with the same
    name and age compare equal (value semantics) and can live in sets.
    """

    name: str
    age: int
