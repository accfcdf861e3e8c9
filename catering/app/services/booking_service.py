"""Booking creation and slot availability."""

from __future__ import annotations

import logging
import secrets
import string
import time
from datetime import date

from ..auth import Identity
from ..domain.errors import ValidationError
from ..domain.promotions import promo_rejection
from ..domain.receipts import (
    apply_percent_discount,
    line_total,
    lines_subtotal,
    to_money,
)
from ..domain.slots import available_slots
from ..models import Booking
from ..repos import BookingsRepo, MenuRepo, PromoCodesRepo
from ..schemas import BookingCreate

logger = logging.getLogger("api.bookings")

_REF_ALPHABET = string.ascii_uppercase + string.digits


def new_booking_ref() -> str:
    """Return a reference such as ``BK-1718000000000-7QX2M``."""

    suffix = "".join(secrets.choice(_REF_ALPHABET) for _ in range(5))
    return f"BK-{int(time.time() * 1000)}-{suffix}"


async def check_availability(repo: BookingsRepo, event_date: date) -> dict:
    """Return booked and free slots for ``event_date``."""

    booked = await repo.booked_slots(event_date)
    return {
        "date": event_date.isoformat(),
        "booked_slots": [slot.value for slot in booked],
        "available_slots": [slot.value for slot in available_slots(booked)],
    }


async def _price_lines(menu: MenuRepo, payload: BookingCreate) -> list[dict]:
    """Snapshot name and unit price for every requested line."""

    items = await menu.get_items(line.menu_item_id for line in payload.items)
    lines = []
    for line in payload.items:
        item = items.get(line.menu_item_id)
        if item is None:
            raise ValidationError(f"Menu item {line.menu_item_id} does not exist")
        if not item.is_available:
            raise ValidationError(f"{item.name} is not available")
        lines.append(
            {
                "menu_item_id": item.id,
                "name": item.name,
                "quantity": line.quantity,
                "unit_price": to_money(item.price_per_serving),
                "line_total": line_total(item.price_per_serving, line.quantity),
            }
        )
    return lines


async def create_booking(
    identity: Identity,
    payload: BookingCreate,
    bookings: BookingsRepo,
    menu: MenuRepo,
    promos: PromoCodesRepo,
) -> Booking:
    """Price, discount and reserve a booking for ``identity``.

    The promo redemption and the booking insert share one transaction, so a
    slot conflict never consumes a promo use.
    """

    lines = await _price_lines(menu, payload)
    subtotal = lines_subtotal(lines)

    promo_code = None
    percent = None
    if payload.promo_code:
        promo = await promos.find_by_code(payload.promo_code)
        if promo is None:
            raise ValidationError("Invalid promo code")
        reason = promo_rejection(promo)
        if reason:
            raise ValidationError(reason)
        if not await promos.redeem(promo.id):
            raise ValidationError("Promo code usage limit reached")
        promo_code = promo.code
        percent = promo.discount_percent

    discount = apply_percent_discount(subtotal, percent)
    fields = {
        "booking_ref": new_booking_ref(),
        "user_id": identity.id,
        "customer_name": payload.customer_name or identity.username,
        "customer_email": payload.customer_email or identity.email,
        "customer_phone": payload.customer_phone,
        "occasion": payload.occasion,
        "event_date": payload.event_date,
        "time_slot": payload.time_slot,
        "venue": payload.venue,
        "num_guests": payload.num_guests,
        "special_instructions": payload.special_instructions,
        "promo_code": promo_code,
        "discount_percent": percent,
        "subtotal": subtotal,
        "discount_amount": discount,
        "total_amount": subtotal - discount,
        "status": "pending",
    }
    booking = await bookings.reserve(fields, lines)
    logger.info(
        "booking %s reserved %s %s",
        booking.booking_ref,
        booking.event_date,
        booking.time_slot,
    )
    return booking
