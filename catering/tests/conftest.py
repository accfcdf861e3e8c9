"""Test configuration for API tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import catering.app.db as app_db
from catering.app.auth import Identity, create_access_token, hash_password
from catering.app.domain.status import Role
from catering.app.main import app
from catering.app.repos_sqlalchemy import UsersRepoSQL

PASSWORD = "Passw0rd!"


@dataclass
class Harness:
    """Running app bound to a fresh in-memory database."""

    client: TestClient
    sessionmaker: async_sessionmaker[AsyncSession]

    def run(self, fn: Callable, *args):
        """Run an async callable on the client's event loop."""
        return self.client.portal.call(fn, *args)

    def add_user(self, username: str, role: Role = Role.CUSTOMER) -> Identity:
        async def _create() -> Identity:
            async with self.sessionmaker() as session:
                user = await UsersRepoSQL(session).create(
                    {
                        "username": username,
                        "email": f"{username}@example.com",
                        "first_name": username.title(),
                        "last_name": "Tester",
                        "phone_number": "09171234567",
                        "password_hash": hash_password(PASSWORD),
                        "role": role.value,
                    }
                )
                return Identity(
                    id=user.id, email=user.email, role=role, username=user.username
                )

        return self.run(_create)


def auth_headers(identity: Identity) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(identity)}"}


@pytest.fixture
def harness():
    factory, engine = app_db.create_test_session()

    async def _session():
        async with factory() as session:
            yield session

    app.dependency_overrides[app_db.get_session] = _session
    with TestClient(app) as client:
        client.portal.call(app_db.create_schema, engine)
        yield Harness(client=client, sessionmaker=factory)
        client.portal.call(engine.dispose)
    app.dependency_overrides.clear()


@pytest.fixture
def client(harness):
    return harness.client


@pytest.fixture
def admin(harness) -> Identity:
    return harness.add_user("admin", Role.ADMIN)


@pytest.fixture
def customer(harness) -> Identity:
    return harness.add_user("alice")


@pytest.fixture
def other_customer(harness) -> Identity:
    return harness.add_user("bob")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def other_headers(other_customer):
    return auth_headers(other_customer)


@pytest.fixture
def menu_item(client, admin_headers) -> dict:
    resp = client.post(
        "/menu",
        json={
            "name": "Beef Caldereta",
            "category": "Beef",
            "price_per_serving": 250,
            "description": "Slow-cooked beef stew",
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201
    return resp.json()["data"]
