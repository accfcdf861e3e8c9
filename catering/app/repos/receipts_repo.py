"""Repository interface for receipt operations."""

from abc import ABC, abstractmethod


class ReceiptsRepo(ABC):
    """Contract for receipt generation and retrieval."""

    @abstractmethod
    async def list_receipts(self, user_id=None):
        """Return receipts, newest first, optionally for one booking owner."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, receipt_id):
        """Return one receipt or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_booking(self, booking_id):
        """Return the receipt issued for ``booking_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, booking_id, amounts, payment_method, payment_status):
        """Persist a receipt with a freshly allocated number."""
        raise NotImplementedError

    @abstractmethod
    async def update_payment_status(self, receipt_id, payment_status):
        """Set the payment status of a receipt."""
        raise NotImplementedError
