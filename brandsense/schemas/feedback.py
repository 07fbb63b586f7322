# File: brandsense/schemas/feedback.py

from typing import Optional

from brandsense.schemas.base import APIModel


class FeedbackCreate(APIModel):
    feedback: str
    rating: int
    user_email: Optional[str] = None
    user_name: Optional[str] = None
