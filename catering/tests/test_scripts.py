import pytest
from sqlalchemy import select

from catering.app.auth import verify_password
from catering.app.models import MenuItem, PromoCode
from scripts.create_admin import create_admin
from scripts.demo_seed import _reset, _seed


def test_create_admin_can_log_in(harness):
    async def _create():
        async with harness.sessionmaker() as session:
            return await create_admin(session, "owner", "Owner@Example.com", "Owner#2024")

    user = harness.run(_create)
    assert user.role == "admin"
    assert user.email == "owner@example.com"

    resp = harness.client.post(
        "/auth/login", json={"login": "owner", "password": "Owner#2024"}
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "admin"


def test_create_admin_enforces_policy(harness):
    async def _create():
        async with harness.sessionmaker() as session:
            return await create_admin(session, "owner", "owner@example.com", "weak")

    with pytest.raises(ValueError):
        harness.run(_create)


def test_demo_seed_and_reset(harness):
    async def _run():
        async with harness.sessionmaker() as session:
            data = await _seed(session)
            await _reset(session)
            await _seed(session)
            items = (await session.execute(select(MenuItem))).scalars().all()
            promos = (await session.execute(select(PromoCode))).scalars().all()
            return data, len(items), [p.code for p in promos]

    data, item_count, codes = harness.run(_run)
    assert len(data["items"]) == 5
    assert item_count == 5
    assert codes == ["WELCOME10"]


def test_seeded_promo_applies(harness):
    async def _run():
        async with harness.sessionmaker() as session:
            await _seed(session)

    harness.run(_run)
    resp = harness.client.post("/promo-codes/validate", json={"code": "welcome10"})
    assert resp.status_code == 200
    assert resp.json()["data"]["discount_percent"] == 10


def test_password_hash_is_not_plaintext(harness):
    async def _create():
        async with harness.sessionmaker() as session:
            return await create_admin(session, "root", "root@example.com", "Root#2024x")

    user = harness.run(_create)
    assert user.password_hash != "Root#2024x"
    assert verify_password("Root#2024x", user.password_hash)
