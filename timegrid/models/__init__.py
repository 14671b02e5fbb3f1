# Re-export common types
from .config import DAYS, TimetableConfig, validate_config
from .conflict import Conflict
from .slot import TimetableSlot
from .subject import Subject
from .teacher import Teacher
from .timetable import Timetable, initialize

__all__ = [
    "DAYS",
    "Subject",
    "Teacher",
    "TimetableSlot",
    "TimetableConfig",
    "Conflict",
    "Timetable",
    "initialize",
    "validate_config",
]
