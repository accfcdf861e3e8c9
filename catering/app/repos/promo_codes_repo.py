"""Repository interface for promo codes."""

from abc import ABC, abstractmethod


class PromoCodesRepo(ABC):
    """Contract for promo code persistence and redemption."""

    @abstractmethod
    async def list_codes(self):
        """Return every promo code."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, promo_id):
        """Return one promo code or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_code(self, code):
        """Return the promo code matching ``code`` case-insensitively, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, fields):
        """Insert a promo code; raise ``ConflictError`` if the code exists."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, promo_id, fields):
        """Apply ``fields`` to a promo code."""
        raise NotImplementedError

    @abstractmethod
    async def set_active(self, promo_id, active):
        """Set the active flag."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, promo_id):
        """Delete and return a promo code."""
        raise NotImplementedError

    @abstractmethod
    async def redeem(self, promo_id):
        """Increment the usage counter unless the limit is already reached.

        Returns ``True`` when a use was recorded.
        """
        raise NotImplementedError
