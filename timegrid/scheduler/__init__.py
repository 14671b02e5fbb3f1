from .placement import click_slot, drop_on_slot, hours_placed
from .repair import extract_slot_array, sanitize_slots
from .timing import format_time_range, time_range_for_period

__all__ = [
    "click_slot",
    "drop_on_slot",
    "hours_placed",
    "extract_slot_array",
    "sanitize_slots",
    "format_time_range",
    "time_range_for_period",
]
