"""Receipt generation and the data shown on printed receipts."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from config import Settings

from ..auth import Identity, ensure_owner_or_admin
from ..domain.receipts import compute_receipt, to_money
from ..domain.slots import slot_label
from ..domain.status import PaymentStatus
from ..models import Booking, Receipt, User
from ..repos import BookingsRepo, ReceiptsRepo

logger = logging.getLogger("api.receipts")

PLACEHOLDER = "N/A"


async def generate_receipt(
    identity: Identity,
    booking_id: int,
    payment_method: str,
    payment_status: PaymentStatus,
    bookings: BookingsRepo,
    receipts: ReceiptsRepo,
) -> Receipt:
    """Issue the receipt for ``booking_id`` from its stored total."""

    booking = await bookings.get(booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    amounts = compute_receipt(booking.total_amount)
    receipt = await receipts.create(
        booking.id, amounts, payment_method, payment_status.value
    )
    logger.info(
        "receipt %s issued for booking %s total=%s",
        receipt.receipt_number,
        booking.booking_ref,
        amounts.total,
    )
    return receipt


def preview_receipt(booking: Booking) -> Receipt:
    """Unsaved receipt for printing a booking that has not been billed yet.

    It has no number and takes its payment status from the booking status.
    """

    amounts = compute_receipt(booking.total_amount)
    return Receipt(
        receipt_number=None,
        booking_id=booking.id,
        subtotal=amounts.subtotal,
        tax_rate=amounts.tax_rate,
        tax_amount=amounts.tax_amount,
        total_amount=amounts.total,
        payment_method="Cash/Card",
        payment_status=booking.status,
        issued_date=date.today(),
    )


def _text(value: object) -> str:
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def _money(value: object, symbol: str) -> str:
    return f"{symbol}{to_money(value or 0):,.2f}"


def build_receipt_context(
    receipt: Receipt, booking: Booking, user: User | None, settings: Settings
) -> dict:
    """Flatten receipt, booking and customer data for the receipt template.

    Missing values are replaced with ``N/A``; no amounts are recomputed.
    """

    symbol = settings.currency_symbol
    if user is not None:
        full_name = f"{user.first_name} {user.last_name}".strip()
        email, phone = user.email, user.phone_number
    else:
        full_name, email, phone = "", None, None
    items = [
        {
            "name": _text(line.name),
            "qty": line.quantity,
            "unit_price": _money(line.unit_price, symbol),
            "line_total": _money(line.line_total, symbol),
        }
        for line in booking.items
    ]
    rate = Decimal(str(receipt.tax_rate)) * 100
    return {
        "business": {
            "name": settings.business_name,
            "tagline": settings.business_tagline,
            "address": settings.business_address,
            "phone": settings.business_phone,
            "email": settings.business_email,
        },
        "receipt": {
            "number": _text(receipt.receipt_number),
            "issued_date": _text(receipt.issued_date),
            "booking_ref": _text(booking.booking_ref),
            "payment_method": _text(receipt.payment_method),
            "payment_status": _text(receipt.payment_status).title(),
        },
        "customer": {
            "name": _text(full_name or booking.customer_name),
            "email": _text(booking.customer_email or email),
            "phone": _text(booking.customer_phone or phone),
        },
        "event": {
            "occasion": _text(booking.occasion),
            "date": _text(booking.event_date),
            "slot": slot_label(booking.time_slot),
            "venue": _text(booking.venue),
            "guests": _text(booking.num_guests),
        },
        "items": items,
        "totals": {
            "subtotal": _money(receipt.subtotal, symbol),
            "discount": (
                _money(booking.discount_amount, symbol)
                if booking.discount_amount
                else None
            ),
            "tax_label": f"VAT ({rate.normalize():f}%)",
            "tax": _money(receipt.tax_amount, symbol),
            "total": _money(receipt.total_amount, symbol),
        },
    }
