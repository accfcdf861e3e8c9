"""Registration, login and identity routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from .auth import (
    Identity,
    Token,
    create_access_token,
    get_current_identity,
    hash_password,
    validate_password_strength,
    verify_password,
)
from .deps import get_users_repo
from .domain.errors import NotFoundError, ValidationError
from .domain.status import Role
from .repos import UsersRepo
from .schemas import LoginRequest, PasswordCheckRequest, RegisterRequest, UserOut
from .utils.responses import ok

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger("api.auth")


def _issue(user) -> dict:
    identity = Identity(
        id=user.id, email=user.email, role=Role(user.role), username=user.username
    )
    token = Token(access_token=create_access_token(identity), role=identity.role)
    data = token.model_dump(mode="json")
    data["user"] = UserOut.model_validate(user).model_dump(mode="json")
    return data


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest, users: UsersRepo = Depends(get_users_repo)
) -> dict:
    """Create a customer account and return an access token."""

    check = validate_password_strength(payload.password)
    if not check.is_valid:
        raise ValidationError(
            "Password does not meet requirements", hint="; ".join(check.errors)
        )
    fields = payload.model_dump(exclude={"password"})
    fields["password_hash"] = hash_password(payload.password)
    fields["role"] = Role.CUSTOMER.value
    user = await users.create(fields)
    logger.info("user registered", extra={"user": user.id})
    return ok(_issue(user))


@router.post("/login")
async def login(
    payload: LoginRequest, request: Request, users: UsersRepo = Depends(get_users_repo)
) -> dict:
    """Authenticate with e-mail or username and password."""

    user = await users.get_by_login(payload.login)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.user_id = user.id
    return ok(_issue(user))


@router.get("/me")
async def me(
    identity: Identity = Depends(get_current_identity),
    users: UsersRepo = Depends(get_users_repo),
) -> dict:
    user = await users.get(identity.id)
    if user is None:
        raise NotFoundError("User not found")
    return ok(UserOut.model_validate(user).model_dump(mode="json"))


@router.post("/password-strength")
async def password_strength(payload: PasswordCheckRequest) -> dict:
    """Report which password rules ``payload.password`` fails."""

    return ok(validate_password_strength(payload.password).model_dump())
