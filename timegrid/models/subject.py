from dataclasses import dataclass


SUBJECT_COLORS = [
    "hsl(210, 70%, 75%)",
    "hsl(150, 60%, 70%)",
    "hsl(45, 80%, 75%)",
    "hsl(340, 65%, 75%)",
    "hsl(270, 55%, 75%)",
    "hsl(180, 50%, 70%)",
    "hsl(30, 75%, 70%)",
    "hsl(200, 65%, 70%)",
]

LAB_DURATIONS = (2, 3)


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    teacher_id: str
    hours_per_week: int
    is_lab: bool = False
    lab_duration: int = 2  # consecutive periods, only meaningful for labs
    color: str = SUBJECT_COLORS[0]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "teacherId": self.teacher_id,
            "hoursPerWeek": self.hours_per_week,
            "isLab": self.is_lab,
            "labDuration": self.lab_duration,
            "color": self.color,
        }
