# File: brandsense/services/feedback_service.py

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from brandsense.core.config import get_settings
from brandsense.models.feedback import Feedback
from brandsense.schemas.feedback import FeedbackCreate
from brandsense.services.email_service import EmailService, render_feedback_email

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 10


def submit_feedback(
    db: Session,
    payload: FeedbackCreate,
    email_service: Optional[EmailService] = None,
) -> Feedback:
    """
    Store a feedback entry and forward it by email when mail is configured.

    A failed email never fails the submission; the stored row is the record.
    """
    text = (payload.feedback or "").strip()
    if not text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: feedback, rating",
        )

    if not MIN_RATING <= payload.rating <= MAX_RATING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Rating must be between {MIN_RATING} and {MAX_RATING}",
        )

    entry = Feedback(
        feedback=text,
        rating=payload.rating,
        user_email=payload.user_email,
        user_name=payload.user_name,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Feedback received from %s: %s/10", payload.user_email or "anonymous", payload.rating)

    email_service = email_service or EmailService()
    if email_service.enabled:
        result = email_service.send(
            to=get_settings().feedback_recipient,
            subject=f"Brand Sense Feedback - Rating: {payload.rating}/10",
            html_body=render_feedback_email(
                feedback=text,
                rating=payload.rating,
                user_email=payload.user_email,
                user_name=payload.user_name,
            ),
        )
        if not result.success:
            logger.warning("Feedback %s stored but not emailed: %s", entry.id, result.error)

    return entry
