"""Repository interface for bookings."""

from abc import ABC, abstractmethod


class BookingsRepo(ABC):
    """Contract for booking persistence and slot reservation."""

    @abstractmethod
    async def list_bookings(self, user_id=None, event_date=None, status=None):
        """Return bookings, optionally restricted to one owner, date or status."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, booking_id):
        """Return one booking with its items or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def booked_slots(self, event_date):
        """Return the slots already taken on ``event_date``."""
        raise NotImplementedError

    @abstractmethod
    async def reserve(self, fields, items):
        """Insert a booking and its items.

        Raises ``ConflictError`` if the date/slot pair is already taken, even
        when a concurrent request wins the race after the availability check.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_status(self, booking_id, status):
        """Set the booking status."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, booking_id):
        """Delete a booking and its items."""
        raise NotImplementedError
