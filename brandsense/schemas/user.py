# File: brandsense/schemas/user.py

from typing import Optional

from pydantic import EmailStr

from brandsense.schemas.base import APIModel


class SignUpRequest(APIModel):
    email: str
    password: str
    full_name: str


class SignInRequest(APIModel):
    email: str
    password: str


class ChangePasswordRequest(APIModel):
    current_password: str
    new_password: str


class UserRead(APIModel):
    id: str
    email: EmailStr
    full_name: str
    position: Optional[str] = None
    company: Optional[str] = None


class SignUpResponse(APIModel):
    success: bool = True
    message: str
    user: UserRead


class SignInResponse(APIModel):
    success: bool = True
    message: str
    access_token: str
    user: UserRead


class SessionResponse(APIModel):
    success: bool = True
    user: UserRead


class MessageResponse(APIModel):
    success: bool = True
    message: str
