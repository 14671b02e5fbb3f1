from dataclasses import dataclass


@dataclass(frozen=True)
class Teacher:
    id: str
    name: str
