"""Repository interface for menu operations."""

from abc import ABC, abstractmethod


class MenuRepo(ABC):
    """Contract for menu-related persistence operations."""

    @abstractmethod
    async def list_items(self, category=None, available=None):
        """Return menu items ordered by category then name."""
        raise NotImplementedError

    @abstractmethod
    async def list_categories(self):
        """Return the sorted distinct categories."""
        raise NotImplementedError

    @abstractmethod
    async def get_item(self, item_id):
        """Return one item or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def get_items(self, item_ids):
        """Return a mapping of id to item for the ids that exist."""
        raise NotImplementedError

    @abstractmethod
    async def create_item(self, fields):
        """Insert a menu item."""
        raise NotImplementedError

    @abstractmethod
    async def update_item(self, item_id, fields):
        """Apply only the provided ``fields`` to a menu item."""
        raise NotImplementedError

    @abstractmethod
    async def delete_item(self, item_id):
        """Delete and return a menu item."""
        raise NotImplementedError

    @abstractmethod
    async def toggle_availability(self, item_id):
        """Flip the availability flag of a menu item."""
        raise NotImplementedError
