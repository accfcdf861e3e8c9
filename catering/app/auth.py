# auth.py

"""Token issuing, password hashing and role checks for FastAPI routes."""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, VerifyMismatchError
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from config import get_settings

from .domain.errors import ForbiddenError
from .domain.status import Role

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'
_SPECIAL_RE = re.compile("[" + re.escape(SPECIAL_CHARS) + "]")

ph = PasswordHasher()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


class Token(BaseModel):
    """JWT access token returned after authentication."""

    access_token: str
    token_type: str = "bearer"
    role: Role


class Identity(BaseModel):
    """Authenticated caller resolved from a verified access token."""

    id: int
    email: str
    role: Role
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class PasswordStrength(BaseModel):
    """Outcome of the password policy check."""

    is_valid: bool
    errors: list[str]
    strength: str


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""

    try:
        return ph.verify(hashed_password, plain_password)
    except VerifyMismatchError:
        return False
    except VerificationError as exc:  # pragma: no cover - unexpected
        logger.error("argon2 verification error: %s", exc)
        raise


def password_score(password: str) -> int:
    score = 0
    if len(password) >= MIN_PASSWORD_LENGTH:
        score += 1
    if len(password) >= 12:
        score += 1
    if re.search(r"[A-Z]", password):
        score += 1
    if re.search(r"[a-z]", password):
        score += 1
    if re.search(r"\d", password):
        score += 1
    if _SPECIAL_RE.search(password):
        score += 1
    return score


def strength_label(password: str) -> str:
    """Grade ``password`` as ``weak``, ``medium`` or ``strong``."""

    score = password_score(password)
    if score < 3:
        return "weak"
    if score < 5:
        return "medium"
    return "strong"


def validate_password_strength(password: str) -> PasswordStrength:
    """Apply the password policy and report every failed rule.

    The strength grade is computed independently of validity, so a password
    may be invalid yet graded ``medium``.
    """

    errors = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        errors.append("Password must contain at least one number")
    if not _SPECIAL_RE.search(password):
        errors.append("Password must contain at least one special character")
    return PasswordStrength(
        is_valid=not errors, errors=errors, strength=strength_label(password)
    )


def create_access_token(
    identity: Identity, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT carrying the identity claims."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": str(identity.id),
        "email": identity.email,
        "role": identity.role.value,
        "username": identity.username,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "exp": expire,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Identity:
    """Verify ``token`` and return its identity.

    Raises :class:`jwt.ExpiredSignatureError` for expired tokens and
    :class:`jwt.InvalidTokenError` for anything else that fails verification.
    """

    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": ["exp", "sub"]},
    )
    try:
        return Identity(
            id=int(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
            username=payload["username"],
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("malformed claims") from exc


def get_current_identity(
    request: Request, token: Optional[str] = Depends(oauth2_scheme)
) -> Identity:
    """Resolve the caller from a bearer token or raise ``HTTPException``."""

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        identity = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token"
        )
    request.state.user_id = identity.id
    return identity


def role_required(*roles: Role):
    """Dependency factory enforcing that the caller has one of ``roles``."""

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient privileges"
            )
        return identity

    return dependency


require_admin = role_required(Role.ADMIN)
require_member = role_required(Role.CUSTOMER, Role.ADMIN)


def ensure_owner_or_admin(identity: Identity, owner_id: int) -> None:
    """Raise :class:`ForbiddenError` unless ``identity`` owns the record or is admin."""

    if not identity.is_admin and identity.id != owner_id:
        raise ForbiddenError("Access denied")
