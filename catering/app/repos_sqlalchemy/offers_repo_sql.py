"""SQLAlchemy implementation of the offers repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import NotFoundError
from ..domain.promotions import check_window, offer_is_live
from ..models import Offer
from ..repos.offers_repo import OffersRepo


class OffersRepoSQL(OffersRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_offers(self) -> list[Offer]:
        result = await self.session.execute(
            select(Offer).order_by(Offer.created_at.desc(), Offer.id.desc())
        )
        return list(result.scalars().all())

    async def list_active(self, now: datetime | None = None) -> list[Offer]:
        # Window bounds default to epoch / far future, so filter in Python
        # rather than comparing nullable timestamps in SQL.
        result = await self.session.execute(
            select(Offer).where(Offer.active == True).order_by(Offer.id)  # noqa: E712
        )
        return [o for o in result.scalars().all() if offer_is_live(o, now)]

    async def get(self, offer_id: int) -> Offer:
        offer = await self.session.get(Offer, offer_id)
        if offer is None:
            raise NotFoundError("Offer not found")
        return offer

    async def create(self, fields: dict) -> Offer:
        offer = Offer(**fields)
        self.session.add(offer)
        await self.session.commit()
        return offer

    async def update(self, offer_id: int, fields: dict) -> Offer:
        offer = await self.get(offer_id)
        check_window(offer, fields)
        for key, value in fields.items():
            if key != "id":
                setattr(offer, key, value)
        await self.session.commit()
        return offer

    async def delete(self, offer_id: int) -> Offer:
        offer = await self.get(offer_id)
        await self.session.delete(offer)
        await self.session.commit()
        return offer
