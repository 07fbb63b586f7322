# File: brandsense/services/auth_service.py

"""
Authentication service.

Contains:
  - Sign up with email / password validation
  - Sign in and last-login bookkeeping
  - Password change
  - Token revocation and lookup of the user behind a token
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from brandsense.core.security import (
    MIN_PASSWORD_LENGTH,
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    is_corporate_email,
    is_valid_email,
    is_valid_password,
    verify_password,
)
from brandsense.models.revoked_token import RevokedToken
from brandsense.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    stmt = select(User).where(func.lower(User.email) == normalize_email(email))
    return db.scalars(stmt).first()


def sign_up(db: Session, *, email: str, password: str, full_name: str) -> User:
    email = normalize_email(email)
    full_name = (full_name or "").strip()

    missing = [
        field
        for field, value in (("email", email), ("password", password), ("fullName", full_name))
        if not value
    ]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    if not is_valid_email(email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide a valid email address.",
        )

    if not is_valid_password(password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    if not is_corporate_email(email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please use your corporate email address. Personal email addresses are not allowed.",
        )

    if get_user_by_email(db, email) is not None:
        logger.warning("Sign up attempt with existing email: %s", email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This email is already registered. Please sign in instead.",
        )

    user = User(email=email, hashed_password=hash_password(password), full_name=full_name)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User created: %s", user.email)
    return user


def sign_in(db: Session, *, email: str, password: str) -> tuple[User, str]:
    """
    Verify credentials and return the user with a fresh access token.
    """
    if not normalize_email(email) or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: email, password",
        )

    user = get_user_by_email(db, email)
    if user is None:
        logger.warning("Sign in attempt for non-existent user: %s", normalize_email(email))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No account found with this email. Please sign up first.",
        )

    if not verify_password(password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    logger.info("User signed in: %s", user.email)
    return user, create_access_token(user.id)


def change_password(db: Session, user: User, *, current_password: str, new_password: str) -> None:
    if not current_password or not new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: currentPassword, newPassword",
        )

    if not is_valid_password(new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    if current_password == new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from current password",
        )

    if not verify_password(current_password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    user.hashed_password = hash_password(new_password)
    db.commit()
    logger.info("Password updated for user: %s", user.email)


def revoke_token(db: Session, token: str) -> None:
    payload = decode_access_token(token)
    if db.get(RevokedToken, payload["jti"]) is not None:
        return
    db.add(
        RevokedToken(
            jti=payload["jti"],
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    )
    db.commit()


def get_user_for_token(db: Session, token: str) -> Optional[User]:
    """
    Resolve the user behind an access token.

    Returns None for malformed, expired or revoked tokens and for tokens whose
    user no longer exists.
    """
    try:
        payload = decode_access_token(token)
    except TokenError as e:
        logger.info("Rejected access token: %s", e)
        return None

    if db.get(RevokedToken, payload["jti"]) is not None:
        return None

    return db.get(User, payload["sub"])
