"""Domain models and helpers."""

from .errors import (
    CateringError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from .slots import ALL_SLOTS, TimeSlot, available_slots, slot_label
from .status import BookingStatus, PaymentStatus, Role, owner_can_set

__all__ = [
    "ALL_SLOTS",
    "BookingStatus",
    "CateringError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "PaymentStatus",
    "Role",
    "TimeSlot",
    "ValidationError",
    "available_slots",
    "owner_can_set",
    "slot_label",
]
