"""Menu item routes; reads are public, changes require an administrator."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status

from .auth import Identity, require_admin
from .deps import get_menu_repo
from .repos import MenuRepo
from .schemas import MenuItemCreate, MenuItemOut, MenuItemUpdate
from .utils.responses import ok

router = APIRouter(prefix="/menu", tags=["menu"])


def _out(item) -> dict:
    return MenuItemOut.model_validate(item).model_dump(mode="json")


@router.get("")
async def list_menu(
    category: Optional[str] = None,
    available: Optional[bool] = None,
    menu: MenuRepo = Depends(get_menu_repo),
) -> dict:
    """Return menu items ordered by category then name."""

    items = await menu.list_items(category=category, available=available)
    return ok([_out(item) for item in items])


@router.get("/categories/list")
async def list_categories(menu: MenuRepo = Depends(get_menu_repo)) -> dict:
    return ok(await menu.list_categories())


@router.get("/{item_id}")
async def get_menu_item(item_id: int, menu: MenuRepo = Depends(get_menu_repo)) -> dict:
    return ok(_out(await menu.get_item(item_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    payload: MenuItemCreate,
    _: Identity = Depends(require_admin),
    menu: MenuRepo = Depends(get_menu_repo),
) -> dict:
    item = await menu.create_item(payload.model_dump())
    return ok(_out(item))


@router.put("/{item_id}")
async def update_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    _: Identity = Depends(require_admin),
    menu: MenuRepo = Depends(get_menu_repo),
) -> dict:
    """Apply a partial update; omitted fields keep their stored values."""

    item = await menu.update_item(item_id, payload.model_dump(exclude_unset=True))
    return ok(_out(item))


@router.patch("/{item_id}/availability")
async def toggle_menu_item(
    item_id: int,
    _: Identity = Depends(require_admin),
    menu: MenuRepo = Depends(get_menu_repo),
) -> dict:
    return ok(_out(await menu.toggle_availability(item_id)))


@router.delete("/{item_id}")
async def delete_menu_item(
    item_id: int,
    _: Identity = Depends(require_admin),
    menu: MenuRepo = Depends(get_menu_repo),
) -> dict:
    item = await menu.delete_item(item_id)
    return ok({"id": item.id, "deleted": True})
