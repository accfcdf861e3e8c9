"""Booking routes: availability, reservation and lifecycle."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from .auth import Identity, ensure_owner_or_admin, require_member
from .deps import (
    get_bookings_repo,
    get_menu_repo,
    get_promo_codes_repo,
    get_receipts_repo,
)
from .domain.errors import ConflictError, ForbiddenError
from .domain.status import BookingStatus, owner_can_set
from .repos import BookingsRepo, MenuRepo, PromoCodesRepo, ReceiptsRepo
from .routes_metrics import (
    booking_conflicts_total,
    bookings_created_total,
    promo_redemptions_total,
)
from .schemas import BookingCreate, BookingOut, BookingStatusUpdate
from .services import booking_service
from .utils.responses import ok

router = APIRouter(prefix="/bookings", tags=["bookings"])

logger = logging.getLogger("api.bookings")


def _out(booking) -> dict:
    return BookingOut.model_validate(booking).model_dump(mode="json")


@router.get("")
async def list_bookings(
    event_date: Optional[date] = Query(default=None, alias="date"),
    booking_status: Optional[BookingStatus] = Query(default=None, alias="status"),
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
) -> dict:
    """Admins see every booking and may filter; customers see their own."""

    if identity.is_admin:
        rows = await bookings.list_bookings(
            event_date=event_date,
            status=booking_status.value if booking_status else None,
        )
    else:
        rows = await bookings.list_bookings(user_id=identity.id)
    return ok([_out(row) for row in rows])


@router.get("/availability/{event_date}")
async def availability(
    event_date: date, bookings: BookingsRepo = Depends(get_bookings_repo)
) -> dict:
    return ok(await booking_service.check_availability(bookings, event_date))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    menu: MenuRepo = Depends(get_menu_repo),
    promos: PromoCodesRepo = Depends(get_promo_codes_repo),
) -> dict:
    try:
        booking = await booking_service.create_booking(
            identity, payload, bookings, menu, promos
        )
    except ConflictError:
        booking_conflicts_total.inc()
        raise
    bookings_created_total.inc()
    if booking.promo_code:
        promo_redemptions_total.inc()
    return ok(_out(booking))


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
) -> dict:
    booking = await bookings.get(booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    return ok(_out(booking))


@router.patch("/{booking_id}/status")
async def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
) -> dict:
    """Change the booking status; owners may only cancel."""

    booking = await bookings.get(booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    if not identity.is_admin and not owner_can_set(payload.status):
        raise ForbiddenError("Only administrators can set this status")
    booking = await bookings.update_status(booking_id, payload.status.value)
    logger.info("booking %s status=%s", booking.booking_ref, booking.status)
    return ok(_out(booking))


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
) -> dict:
    booking = await bookings.get(booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    if await receipts.get_by_booking(booking_id) is not None:
        raise ConflictError("Booking has a receipt and cannot be deleted")
    await bookings.delete(booking_id)
    return ok({"id": booking_id, "deleted": True})
