"""SQLAlchemy implementation of the promo codes repository."""

from __future__ import annotations

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import ConflictError, NotFoundError
from ..domain.promotions import check_window
from ..models import PromoCode
from ..repos.promo_codes_repo import PromoCodesRepo


def normalize_code(code: str) -> str:
    return code.strip().upper()


class PromoCodesRepoSQL(PromoCodesRepo):
    """Concrete PromoCodesRepo; codes are compared upper-cased."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_codes(self) -> list[PromoCode]:
        result = await self.session.execute(select(PromoCode).order_by(PromoCode.id))
        return list(result.scalars().all())

    async def get(self, promo_id: int) -> PromoCode:
        promo = await self.session.get(PromoCode, promo_id)
        if promo is None:
            raise NotFoundError("Promo code not found")
        return promo

    async def find_by_code(self, code: str) -> PromoCode | None:
        stmt = select(PromoCode).where(func.upper(PromoCode.code) == normalize_code(code))
        return await self.session.scalar(stmt)

    async def create(self, fields: dict) -> PromoCode:
        code = normalize_code(fields["code"])
        if await self.find_by_code(code) is not None:
            raise ConflictError("Promo code already exists")
        promo = PromoCode(**{**fields, "code": code})
        self.session.add(promo)
        await self._commit_unique()
        return promo

    async def update(self, promo_id: int, fields: dict) -> PromoCode:
        promo = await self.get(promo_id)
        check_window(promo, fields)
        if "code" in fields:
            code = normalize_code(fields["code"])
            existing = await self.find_by_code(code)
            if existing is not None and existing.id != promo_id:
                raise ConflictError("Promo code already exists")
            fields = {**fields, "code": code}
        for key, value in fields.items():
            setattr(promo, key, value)
        await self._commit_unique()
        return promo

    async def set_active(self, promo_id: int, active: bool) -> PromoCode:
        promo = await self.get(promo_id)
        promo.active = active
        await self.session.commit()
        return promo

    async def delete(self, promo_id: int) -> PromoCode:
        promo = await self.get(promo_id)
        await self.session.delete(promo)
        await self.session.commit()
        return promo

    async def redeem(self, promo_id: int) -> bool:
        """Count one use in the caller's transaction; never exceeds the limit."""
        stmt = (
            update(PromoCode)
            .where(
                PromoCode.id == promo_id,
                or_(
                    PromoCode.usage_limit.is_(None),
                    PromoCode.usage_limit == 0,
                    PromoCode.usage_count < PromoCode.usage_limit,
                ),
            )
            .values(usage_count=PromoCode.usage_count + 1)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def _commit_unique(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Promo code already exists") from exc
