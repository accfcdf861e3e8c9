from datetime import timedelta

import jwt
import pytest

from catering.app.auth import (
    Identity,
    create_access_token,
    decode_access_token,
    hash_password,
    validate_password_strength,
    verify_password,
)
from catering.app.domain.status import Role
from config import get_settings


def _identity(**overrides) -> Identity:
    data = {
        "id": 7,
        "email": "carol@example.com",
        "role": Role.CUSTOMER,
        "username": "carol",
    }
    data.update(overrides)
    return Identity(**data)


def test_token_roundtrip_claims():
    token = create_access_token(_identity(role=Role.ADMIN))
    payload = jwt.decode(token, options={"verify_signature": False})
    assert payload["sub"] == "7"
    assert payload["iss"] == "dsis-catering"
    assert payload["aud"] == "dsis-users"
    identity = decode_access_token(token)
    assert identity.id == 7
    assert identity.is_admin


def test_decode_rejects_wrong_audience():
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": "1",
            "email": "a@b.c",
            "role": "customer",
            "username": "a",
            "aud": "someone-else",
            "iss": settings.jwt_issuer,
            "exp": 9999999999,
        },
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token)


def test_password_hash_verify():
    hashed = hash_password("S3cret!pass")
    assert hashed != "S3cret!pass"
    assert verify_password("S3cret!pass", hashed)
    assert not verify_password("wrong", hashed)


def test_password_strength_rules():
    result = validate_password_strength("abc")
    assert not result.is_valid
    assert len(result.errors) == 4
    assert result.strength == "weak"

    result = validate_password_strength("Abc12345!")
    assert result.is_valid
    assert result.errors == []
    assert result.strength == "strong"

    assert validate_password_strength("abcdefgh1").strength == "medium"


def test_register_and_login(client):
    resp = client.post(
        "/auth/register",
        json={
            "username": "dina",
            "email": "Dina@Example.com",
            "password": "Abc12345!",
            "first_name": "Dina",
        },
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["role"] == "customer"
    assert data["user"]["email"] == "dina@example.com"

    for login in ("dina", "DINA@example.com"):
        resp = client.post("/auth/login", json={"login": login, "password": "Abc12345!"})
        assert resp.status_code == 200
        token = resp.json()["data"]["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["username"] == "dina"


def test_register_rejects_weak_password(client):
    resp = client.post(
        "/auth/register",
        json={"username": "weak", "email": "weak@example.com", "password": "abc"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert "uppercase" in body["error"]["hint"]


def test_register_duplicate_is_conflict(client, customer):
    resp = client.post(
        "/auth/register",
        json={"username": "someone", "email": customer.email, "password": "Passw0rd!"},
    )
    assert resp.status_code == 409


def test_login_wrong_password(client, customer):
    resp = client.post("/auth/login", json={"login": "alice", "password": "Nope1234!"})
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid credentials"


def test_missing_expired_and_invalid_tokens(client, customer):
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Access token required"

    expired = create_access_token(customer, expires_delta=timedelta(seconds=-5))
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Token expired"

    resp = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Invalid token"


def test_customer_cannot_use_admin_routes(client, customer_headers):
    resp = client.get("/promo-codes", headers=customer_headers)
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Insufficient privileges"


def test_password_strength_endpoint(client):
    resp = client.post("/auth/password-strength", json={"password": "abc"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["is_valid"] is False
    assert data["strength"] == "weak"
