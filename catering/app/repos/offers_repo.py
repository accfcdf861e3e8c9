"""Repository interface for promotional offers."""

from abc import ABC, abstractmethod


class OffersRepo(ABC):
    """Contract for offer persistence."""

    @abstractmethod
    async def list_offers(self):
        """Return every offer, newest first."""
        raise NotImplementedError

    @abstractmethod
    async def list_active(self, now=None):
        """Return offers that are active and inside their window at ``now``."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, offer_id):
        """Return one offer or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, fields):
        """Insert an offer."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, offer_id, fields):
        """Apply ``fields`` to an offer; the id never changes."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, offer_id):
        """Delete and return an offer."""
        raise NotImplementedError
