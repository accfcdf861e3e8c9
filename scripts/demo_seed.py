#!/usr/bin/env python3
"""Seed demo data: a small catering menu, one offer and one promo code.

Pass ``--reset`` to purge existing menu items, offers and promo codes before
seeding. Bookings and receipts are never touched.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from catering.app.db import create_schema, dispose, get_sessionmaker
from catering.app.models import MenuItem, Offer, PromoCode

MENU_ITEMS = [
    ("Lechon Kawali", "Pork", Decimal("180.00")),
    ("Chicken Cordon Bleu", "Chicken", Decimal("150.00")),
    ("Beef Caldereta", "Beef", Decimal("200.00")),
    ("Pancit Canton", "Noodles", Decimal("90.00")),
    ("Buko Pandan", "Dessert", Decimal("60.00")),
]


async def _reset(session: AsyncSession) -> None:
    """Remove existing menu items, offers and promo codes."""

    for model in (MenuItem, Offer, PromoCode):
        await session.execute(delete(model))
    await session.commit()


async def _seed(session: AsyncSession) -> dict[str, object]:
    """Insert demo data and return created identifiers."""

    items = []
    for name, category, price in MENU_ITEMS:
        item = MenuItem(name=name, category=category, price_per_serving=price)
        session.add(item)
        await session.flush()
        items.append({"id": item.id, "name": name})

    offer = Offer(
        title="Wedding Package",
        description="Full-service catering for weddings",
        benefits="Free dessert station for 100+ guests",
    )
    promo = PromoCode(code="WELCOME10", discount_percent=10, usage_limit=50)
    session.add_all([offer, promo])
    await session.commit()
    return {"items": items, "offer_id": offer.id, "promo_code": promo.code}


async def main(reset: bool) -> None:
    await create_schema()
    try:
        async with get_sessionmaker()() as session:
            if reset:
                await _reset(session)
            data = await _seed(session)
    finally:
        await dispose()
    print(json.dumps(data))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo catering data")
    parser.add_argument(
        "--reset", action="store_true", help="Purge existing data before seeding"
    )
    args = parser.parse_args()
    asyncio.run(main(args.reset))
