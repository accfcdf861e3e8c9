"""Repository interface for user accounts."""

from abc import ABC, abstractmethod


class UsersRepo(ABC):
    """Contract for user persistence."""

    @abstractmethod
    async def get(self, user_id):
        """Return the user with ``user_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_login(self, login):
        """Return the user whose email or username equals ``login``."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, fields):
        """Insert a user; raise ``ConflictError`` on duplicate email/username."""
        raise NotImplementedError
