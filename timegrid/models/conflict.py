from dataclasses import dataclass
from typing import Tuple


TEACHER_DOUBLE_BOOKING = "teacher-double-booking"
LAB_SPLIT = "lab-split"
HOURS_EXCEEDED = "hours-exceeded"

CONFLICT_KINDS = (TEACHER_DOUBLE_BOOKING, LAB_SPLIT, HOURS_EXCEEDED)


@dataclass(frozen=True)
class Conflict:
    kind: str
    message: str
    slots: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"type": self.kind, "message": self.message, "slots": list(self.slots)}
