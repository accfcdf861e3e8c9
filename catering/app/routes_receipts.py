"""Receipt routes including the printable receipt document."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from config import get_settings

from .auth import Identity, ensure_owner_or_admin, require_admin, require_member
from .deps import get_bookings_repo, get_receipts_repo, get_users_repo
from .pdf.render import render_receipt
from .repos import BookingsRepo, ReceiptsRepo, UsersRepo
from .routes_metrics import receipt_pdfs_rendered_total, receipts_generated_total
from .schemas import PaymentStatusUpdate, ReceiptGenerate, ReceiptOut
from .services import receipt_service
from .utils.responses import ok

router = APIRouter(prefix="/receipts", tags=["receipts"])


def _out(receipt) -> dict:
    return ReceiptOut.model_validate(receipt).model_dump(mode="json")


def _document(context: dict, stem: str) -> Response:
    content, mimetype = render_receipt(context)
    receipt_pdfs_rendered_total.labels(mimetype=mimetype).inc()
    extension = "pdf" if mimetype == "application/pdf" else "html"
    filename = f"{stem}.{extension}"
    return Response(
        content,
        media_type=mimetype,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def _owned_receipt(receipt_id, identity, receipts, bookings):
    receipt = await receipts.get(receipt_id)
    booking = await bookings.get(receipt.booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    return receipt, booking


@router.get("")
async def list_receipts(
    identity: Identity = Depends(require_member),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
) -> dict:
    user_id = None if identity.is_admin else identity.id
    return ok([_out(r) for r in await receipts.list_receipts(user_id=user_id)])


@router.post("/generate", status_code=status.HTTP_201_CREATED)
async def generate_receipt(
    payload: ReceiptGenerate,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
) -> dict:
    """Issue the single receipt for a booking."""

    receipt = await receipt_service.generate_receipt(
        identity,
        payload.booking_id,
        payload.payment_method,
        payload.payment_status,
        bookings,
        receipts,
    )
    receipts_generated_total.inc()
    return ok(_out(receipt))


@router.get("/booking/{booking_id}")
async def get_receipt_for_booking(
    booking_id: int,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
) -> dict:
    booking = await bookings.get(booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    receipt = await receipts.get_by_booking(booking_id)
    if receipt is None:
        return ok(None)
    return ok(_out(receipt))


@router.get("/booking/{booking_id}/pdf")
async def booking_receipt_pdf(
    booking_id: int,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    users: UsersRepo = Depends(get_users_repo),
) -> Response:
    """Print a booking as a receipt without issuing one."""

    booking = await bookings.get(booking_id)
    ensure_owner_or_admin(identity, booking.user_id)
    user = await users.get(booking.user_id)
    context = receipt_service.build_receipt_context(
        receipt_service.preview_receipt(booking), booking, user, get_settings()
    )
    return _document(context, f"booking-receipt-{booking.booking_ref}")


@router.get("/{receipt_id}")
async def get_receipt(
    receipt_id: int,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
) -> dict:
    receipt, _ = await _owned_receipt(receipt_id, identity, receipts, bookings)
    return ok(_out(receipt))


@router.patch("/{receipt_id}/payment-status")
async def update_payment_status(
    receipt_id: int,
    payload: PaymentStatusUpdate,
    _: Identity = Depends(require_admin),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
) -> dict:
    receipt = await receipts.update_payment_status(
        receipt_id, payload.payment_status.value
    )
    return ok(_out(receipt))


@router.get("/{receipt_id}/pdf")
async def receipt_pdf(
    receipt_id: int,
    identity: Identity = Depends(require_member),
    bookings: BookingsRepo = Depends(get_bookings_repo),
    receipts: ReceiptsRepo = Depends(get_receipts_repo),
    users: UsersRepo = Depends(get_users_repo),
) -> Response:
    """Return a PDF (or HTML fallback) for ``receipt_id``."""

    receipt, booking = await _owned_receipt(receipt_id, identity, receipts, bookings)
    user = await users.get(booking.user_id)
    context = receipt_service.build_receipt_context(
        receipt, booking, user, get_settings()
    )
    return _document(context, f"receipt-{receipt.receipt_number}")
