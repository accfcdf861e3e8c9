"""Daily booking slots and availability.

A catering day has exactly two slots. Any stored booking occupies its slot
for that date regardless of status.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class TimeSlot(str, Enum):
    """Fixed daily booking windows."""

    MORNING = "morning"
    AFTERNOON = "afternoon"


ALL_SLOTS: tuple[TimeSlot, ...] = (TimeSlot.MORNING, TimeSlot.AFTERNOON)

SLOT_LABELS: dict[TimeSlot, str] = {
    TimeSlot.MORNING: "8:00 AM - 2:00 PM",
    TimeSlot.AFTERNOON: "3:00 PM - 11:00 PM",
}


def available_slots(booked: Iterable[TimeSlot | str | None]) -> list[TimeSlot]:
    """Return the slots not present in ``booked``, in day order."""

    taken = {TimeSlot(slot) for slot in booked if slot}
    return [slot for slot in ALL_SLOTS if slot not in taken]


def slot_label(slot: TimeSlot | str | None) -> str:
    """Return the printable time range for ``slot``."""

    if not slot:
        return "Time not specified"
    try:
        return SLOT_LABELS[TimeSlot(slot)]
    except ValueError:
        return "Time not specified"


def conflict_message(slot: TimeSlot | str, event_date: object) -> str:
    value = slot.value if isinstance(slot, TimeSlot) else slot
    return f"The {value} time slot is already booked for {event_date}"
