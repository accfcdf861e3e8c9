"""SQLAlchemy implementation of the bookings repository.

Slot reservation relies on the ``uq_bookings_date_slot`` unique constraint:
the availability check gives a friendly early error, and the constraint
decides any race between concurrent requests.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import ConflictError, NotFoundError
from ..domain.slots import TimeSlot, conflict_message
from ..models import Booking, BookingItem
from ..repos.bookings_repo import BookingsRepo


def _is_slot_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "uq_bookings_date_slot" in message or "bookings.event_date" in message


class BookingsRepoSQL(BookingsRepo):
    """Concrete BookingsRepo bound to one ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_bookings(
        self,
        user_id: int | None = None,
        event_date: date | None = None,
        status: str | None = None,
    ) -> list[Booking]:
        stmt = select(Booking)
        if user_id is not None:
            stmt = stmt.where(Booking.user_id == user_id)
        if event_date is not None:
            stmt = stmt.where(Booking.event_date == event_date)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = stmt.order_by(Booking.event_date, Booking.time_slot, Booking.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, booking_id: int) -> Booking:
        booking = await self.session.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    async def booked_slots(self, event_date: date) -> list[TimeSlot]:
        result = await self.session.execute(
            select(Booking.time_slot).where(Booking.event_date == event_date)
        )
        return [TimeSlot(slot) for slot in result.scalars().all()]

    async def reserve(self, fields: dict, items: list[dict]) -> Booking:
        """Insert the booking and commit; a taken slot raises ``ConflictError``.

        Anything already pending on the session (such as a promo redemption)
        commits or rolls back together with the booking.
        """
        slot = TimeSlot(fields["time_slot"])
        if slot in await self.booked_slots(fields["event_date"]):
            await self.session.rollback()
            raise ConflictError(conflict_message(slot, fields["event_date"]))

        booking = Booking(**{**fields, "time_slot": slot.value})
        booking.items = [BookingItem(**line) for line in items]
        self.session.add(booking)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if _is_slot_violation(exc):
                raise ConflictError(
                    conflict_message(slot, fields["event_date"])
                ) from exc
            raise
        return booking

    async def update_status(self, booking_id: int, status: str) -> Booking:
        booking = await self.get(booking_id)
        booking.status = status
        await self.session.commit()
        return booking

    async def delete(self, booking_id: int) -> None:
        booking = await self.get(booking_id)
        await self.session.delete(booking)
        await self.session.commit()
