"""SQLAlchemy implementation of receipt repository."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import ConflictError, NotFoundError
from ..domain.receipts import ReceiptAmounts
from ..models import Booking, Receipt
from ..repos.receipts_repo import ReceiptsRepo
from ..utils.receipt_counter import build_series, next_receipt_number


class ReceiptsRepoSQL(ReceiptsRepo):
    """Concrete ReceiptsRepo bound to one ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_receipts(self, user_id: int | None = None) -> list[Receipt]:
        stmt = select(Receipt)
        if user_id is not None:
            stmt = stmt.join(Booking, Booking.id == Receipt.booking_id).where(
                Booking.user_id == user_id
            )
        stmt = stmt.order_by(Receipt.created_at.desc(), Receipt.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, receipt_id: int) -> Receipt:
        receipt = await self.session.get(Receipt, receipt_id)
        if receipt is None:
            raise NotFoundError("Receipt not found")
        return receipt

    async def get_by_booking(self, booking_id: int) -> Receipt | None:
        return await self.session.scalar(
            select(Receipt).where(Receipt.booking_id == booking_id)
        )

    async def create(
        self,
        booking_id: int,
        amounts: ReceiptAmounts,
        payment_method: str,
        payment_status: str,
        issued: date | None = None,
    ) -> Receipt:
        """Allocate a number and insert the receipt in one transaction."""
        issued = issued or date.today()
        if await self.get_by_booking(booking_id) is not None:
            raise ConflictError("Receipt already exists for this booking")
        number = await next_receipt_number(self.session, build_series(issued))
        receipt = Receipt(
            receipt_number=number,
            booking_id=booking_id,
            subtotal=amounts.subtotal,
            tax_rate=amounts.tax_rate,
            tax_amount=amounts.tax_amount,
            total_amount=amounts.total,
            payment_method=payment_method,
            payment_status=payment_status,
            issued_date=issued,
        )
        self.session.add(receipt)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Receipt already exists for this booking") from exc
        return receipt

    async def update_payment_status(
        self, receipt_id: int, payment_status: str
    ) -> Receipt:
        receipt = await self.get(receipt_id)
        receipt.payment_status = payment_status
        await self.session.commit()
        return receipt
