# File: brandsense/core/security.py

"""
Security helpers for the Brand Sense API.

Passwords are hashed with bcrypt through passlib and access tokens are
HS256 JWTs signed with ``settings.secret_key``. The small validators used by
the auth and project routes live here as well.
"""

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext
from pydantic_core import PydanticCustomError
from pydantic.networks import validate_email

from brandsense.core.config import settings


ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes

MIN_PASSWORD_LENGTH = 8

FREE_EMAIL_DOMAINS = frozenset(
    {
        "gmail.com",
        "yahoo.com",
        "hotmail.com",
        "outlook.com",
        "live.com",
        "aol.com",
        "icloud.com",
        "mail.com",
        "protonmail.com",
        "yandex.com",
        "zoho.com",
    }
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Raised when an access token cannot be decoded or has expired."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token for a user id.

    The token carries a ``jti`` so a single token can be revoked on sign-out.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: dict[str, Any] = {
        "sub": subject,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e

    if not payload.get("sub") or not payload.get("jti"):
        raise TokenError("Invalid token")
    return payload


def is_valid_email(email: str) -> bool:
    if not EMAIL_RE.match(email or ""):
        return False
    # Same check EmailStr applies when the user is serialized back
    try:
        validate_email(email)
    except PydanticCustomError:
        return False
    return True


def is_valid_password(password: str) -> bool:
    return len(password or "") >= MIN_PASSWORD_LENGTH


def is_corporate_email(email: str) -> bool:
    domain = email.rsplit("@", 1)[-1].strip().lower()
    return domain not in FREE_EMAIL_DOMAINS


def is_valid_uuid(value: str) -> bool:
    return bool(UUID_RE.match(value or ""))
