# File: brandsense/api/v1/routes_feedback.py

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brandsense.api.deps import get_db
from brandsense.core.logging import log_response
from brandsense.schemas.feedback import FeedbackCreate
from brandsense.schemas.user import MessageResponse
from brandsense.services.feedback_service import submit_feedback

router = APIRouter(tags=["feedback"])
logger = logging.getLogger(__name__)


@router.post("", response_model=MessageResponse, summary="Send product feedback")
def send_feedback(payload: FeedbackCreate, db: Session = Depends(get_db)):
    entry = submit_feedback(db, payload)
    log_response(logger, 200, f"Feedback stored: {entry.id}")
    return MessageResponse(message="Feedback received successfully")
