from dataclasses import dataclass


@dataclass(frozen=True)
class Teacher:
    """
    A teacher record. Shares `name` and `age` with Student but is a different
    type: equal field values never make a Teacher equal to a Student.
    """

    name: str
    age: int
    employee_id: str
