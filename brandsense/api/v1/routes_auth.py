# File: brandsense/api/v1/routes_auth.py

"""
Auth API routes: sign up, sign in, sign out, session lookup and password
change. Tokens are bearer JWTs issued by ``/signin``.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brandsense.api.deps import get_bearer_token, get_current_user, get_db
from brandsense.core.logging import log_response
from brandsense.models.user import User
from brandsense.schemas.user import (
    ChangePasswordRequest,
    MessageResponse,
    SessionResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserRead,
)
from brandsense.services import auth_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
def signup(payload: SignUpRequest, db: Session = Depends(get_db)):
    user = auth_service.sign_up(
        db,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
    )
    log_response(logger, 201, f"User created: {user.email}")
    return SignUpResponse(message="Account created successfully", user=UserRead.model_validate(user))


@router.post("/signin", response_model=SignInResponse, summary="Sign in with email and password")
def signin(payload: SignInRequest, db: Session = Depends(get_db)):
    user, token = auth_service.sign_in(db, email=payload.email, password=payload.password)
    log_response(logger, 200, f"Sign in successful: {user.email}")
    return SignInResponse(
        message="Sign in successful",
        access_token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/signout", response_model=MessageResponse, summary="Revoke the current access token")
def signout(
    token: str = Depends(get_bearer_token),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    auth_service.revoke_token(db, token)
    log_response(logger, 200, f"Signed out: {user.email}")
    return MessageResponse(message="Signed out successfully")


@router.get("/session", response_model=SessionResponse, summary="Current user")
def session(user: User = Depends(get_current_user)):
    return SessionResponse(user=UserRead.model_validate(user))


@router.post("/change-password", response_model=MessageResponse, summary="Change password")
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    auth_service.change_password(
        db,
        user,
        current_password=payload.current_password,
        new_password=payload.new_password,
    )
    log_response(logger, 200, f"Password updated: {user.email}")
    return MessageResponse(message="Password updated successfully")
