"""Validity rules for offers and promo codes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from .errors import ValidationError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
FAR_FUTURE = datetime(2099, 12, 31, tzinfo=timezone.utc)


class _Windowed(Protocol):
    active: bool
    start_at: datetime | None
    end_at: datetime | None


class _Limited(_Windowed, Protocol):
    usage_limit: int | None
    usage_count: int


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes and convert aware ones to UTC.

    SQLite hands back naive values; everything is stored as UTC.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def check_window(stored: _Windowed, changes: dict) -> None:
    """Raise when ``changes`` applied over ``stored`` would end before it starts."""

    start = as_utc(changes.get("start_at", stored.start_at))
    end = as_utc(changes.get("end_at", stored.end_at))
    if start is not None and end is not None and end < start:
        raise ValidationError("end_at must not be before start_at")


def offer_is_live(offer: _Windowed, now: datetime | None = None) -> bool:
    """Return ``True`` when ``offer`` is active and ``now`` is inside its window."""

    if not offer.active:
        return False
    now = as_utc(now) or utcnow()
    start = as_utc(offer.start_at) or EPOCH
    end = as_utc(offer.end_at) or FAR_FUTURE
    return start <= now <= end


def promo_rejection(promo: _Limited, now: datetime | None = None) -> str | None:
    """Return the first reason ``promo`` cannot be used, or ``None``.

    Checks run in order: active flag, validity window, usage limit.
    """

    if not promo.active:
        return "Promo code is no longer active"
    now = as_utc(now) or utcnow()
    start = as_utc(promo.start_at)
    end = as_utc(promo.end_at)
    if start is not None and start > now:
        return "Promo code is not yet active"
    if end is not None and end < now:
        return "Promo code has expired"
    if promo.usage_limit and promo.usage_count >= promo.usage_limit:
        return "Promo code usage limit reached"
    return None
