"""SQLAlchemy implementation of menu repository."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import NotFoundError
from ..models import MenuItem
from ..repos.menu_repo import MenuRepo


class MenuRepoSQL(MenuRepo):
    """Concrete MenuRepo using SQLAlchemy with an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_items(
        self, category: str | None = None, available: bool | None = None
    ) -> list[MenuItem]:
        """Return menu items filtered by category and availability."""
        stmt = select(MenuItem)
        if category:
            stmt = stmt.where(func.lower(MenuItem.category) == category.strip().lower())
        if available is not None:
            stmt = stmt.where(MenuItem.is_available == available)
        stmt = stmt.order_by(MenuItem.category, MenuItem.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_categories(self) -> list[str]:
        result = await self.session.execute(
            select(MenuItem.category).distinct().order_by(MenuItem.category)
        )
        return list(result.scalars().all())

    async def get_item(self, item_id: int) -> MenuItem:
        item = await self.session.get(MenuItem, item_id)
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    async def get_items(self, item_ids: Iterable[int]) -> dict[int, MenuItem]:
        ids = set(item_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(MenuItem).where(MenuItem.id.in_(ids)))
        return {item.id: item for item in result.scalars().all()}

    async def create_item(self, fields: dict) -> MenuItem:
        item = MenuItem(**fields)
        self.session.add(item)
        await self.session.commit()
        return item

    async def update_item(self, item_id: int, fields: dict) -> MenuItem:
        """Apply only the provided fields; untouched columns keep their values."""
        item = await self.get_item(item_id)
        for key, value in fields.items():
            setattr(item, key, value)
        await self.session.commit()
        return item

    async def delete_item(self, item_id: int) -> MenuItem:
        item = await self.get_item(item_id)
        await self.session.delete(item)
        await self.session.commit()
        return item

    async def toggle_availability(self, item_id: int) -> MenuItem:
        item = await self.get_item(item_id)
        item.is_available = not item.is_available
        await self.session.commit()
        return item
