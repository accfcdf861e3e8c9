"""SQLAlchemy implementation of the users repository."""

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import ConflictError
from ..models import User
from ..repos.users_repo import UsersRepo


class UsersRepoSQL(UsersRepo):
    """Concrete UsersRepo bound to one ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_login(self, login: str) -> User | None:
        value = login.strip().lower()
        stmt = select(User).where(
            or_(func.lower(User.email) == value, func.lower(User.username) == value)
        )
        return await self.session.scalar(stmt)

    async def create(self, fields: dict) -> User:
        """Insert a user after checking email and username are free."""
        email = fields["email"].strip().lower()
        username = fields["username"].strip()
        clash = await self.session.scalar(
            select(User.id).where(
                or_(
                    func.lower(User.email) == email,
                    func.lower(User.username) == username.lower(),
                )
            )
        )
        if clash is not None:
            raise ConflictError("Email or username already registered")
        user = User(**{**fields, "email": email, "username": username})
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Email or username already registered") from exc
        return user
