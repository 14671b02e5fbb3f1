from dataclasses import dataclass


def slot_id_for(day: int, period: int) -> str:
    return f"{day}-{period}"


@dataclass(frozen=True)
class TimetableSlot:
    id: str
    day: int  # 0-4, Monday first
    period: int  # 0-indexed
    subject_id: str | None = None

    @classmethod
    def empty(cls, day: int, period: int) -> "TimetableSlot":
        return cls(slot_id_for(day, period), day, period, None)

    @property
    def key(self) -> tuple[int, int]:
        return (self.day, self.period)

    def with_subject(self, subject_id: str | None) -> "TimetableSlot":
        return TimetableSlot(self.id, self.day, self.period, subject_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "subjectId": self.subject_id,
            "day": self.day,
            "period": self.period,
            "isLunchBreak": False,
        }
