"""Booking and payment status enumerations."""

from __future__ import annotations

from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle states for a catering booking."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    """Payment states recorded on a receipt."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class Role(str, Enum):
    """Roles carried in access tokens."""

    CUSTOMER = "customer"
    ADMIN = "admin"


# Statuses a booking owner may set without admin rights.
OWNER_SETTABLE: frozenset[BookingStatus] = frozenset({BookingStatus.CANCELLED})


def owner_can_set(status: BookingStatus) -> bool:
    """Return ``True`` if a non-admin owner may move a booking to ``status``."""

    return status in OWNER_SETTABLE
