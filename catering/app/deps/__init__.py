"""FastAPI dependencies wiring repositories to the request session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..repos import (
    BookingsRepo,
    MenuRepo,
    OffersRepo,
    PromoCodesRepo,
    ReceiptsRepo,
    UsersRepo,
)
from ..repos_sqlalchemy import (
    BookingsRepoSQL,
    MenuRepoSQL,
    OffersRepoSQL,
    PromoCodesRepoSQL,
    ReceiptsRepoSQL,
    UsersRepoSQL,
)


def get_users_repo(session: AsyncSession = Depends(get_session)) -> UsersRepo:
    return UsersRepoSQL(session)


def get_menu_repo(session: AsyncSession = Depends(get_session)) -> MenuRepo:
    return MenuRepoSQL(session)


def get_offers_repo(session: AsyncSession = Depends(get_session)) -> OffersRepo:
    return OffersRepoSQL(session)


def get_promo_codes_repo(
    session: AsyncSession = Depends(get_session),
) -> PromoCodesRepo:
    return PromoCodesRepoSQL(session)


def get_bookings_repo(session: AsyncSession = Depends(get_session)) -> BookingsRepo:
    return BookingsRepoSQL(session)


def get_receipts_repo(session: AsyncSession = Depends(get_session)) -> ReceiptsRepo:
    return ReceiptsRepoSQL(session)


__all__ = [
    "get_bookings_repo",
    "get_menu_repo",
    "get_offers_repo",
    "get_promo_codes_repo",
    "get_receipts_repo",
    "get_users_repo",
]
