# File: brandsense/services/project_service.py

"""
Project CRUD scoped to the signed-in user.
"""

import logging
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from brandsense.core.config import settings
from brandsense.core.security import is_valid_uuid
from brandsense.models.project import STATUS_PROCESSING, Project
from brandsense.models.user import User
from brandsense.schemas.project import ProjectBase

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_project_fields(payload: ProjectBase) -> dict[str, Any]:
    """
    Check the required fields and return the trimmed column values.
    """
    name = (payload.name or "").strip()
    market = (payload.market or "").strip()
    language = (payload.language or "").strip()

    missing = [field for field, value in (("name", name), ("market", market), ("language", language)) if not value]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    if len(name) < MIN_NAME_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Brand name must be at least {MIN_NAME_LENGTH} characters",
        )

    if len(name) > MAX_NAME_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Brand name must be less than {MAX_NAME_LENGTH} characters",
        )

    return {
        "name": name,
        "market": market,
        "language": language,
        "industry": _clean_optional(payload.industry),
        "website_url": _clean_optional(payload.website_url),
        "description": _clean_optional(payload.description),
    }


def list_projects(db: Session, user: User) -> list[Project]:
    stmt = (
        select(Project)
        .where(Project.user_id == user.id)
        .order_by(Project.created_at.desc())
    )
    return list(db.scalars(stmt).all())


def get_owned_project(db: Session, user: User, project_id: str) -> Project:
    if not is_valid_uuid(project_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid UUID: {project_id}",
        )

    stmt = select(Project).where(Project.id == project_id, Project.user_id == user.id)
    project = db.scalars(stmt).first()
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return project


def create_project(db: Session, user: User, payload: ProjectBase) -> Project:
    fields = validate_project_fields(payload)
    project = Project(
        user_id=user.id,
        timeframe=settings.default_timeframe,
        ai_model=settings.openai_model,
        data_status=STATUS_PROCESSING,
        **fields,
    )
    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info("Project created: %s (%s) for user %s", project.name, project.id, user.id)
    return project


def update_project(db: Session, user: User, project_id: str, payload: ProjectBase) -> Project:
    project = get_owned_project(db, user, project_id)
    fields = validate_project_fields(payload)
    for column, value in fields.items():
        setattr(project, column, value)
    db.commit()
    db.refresh(project)

    logger.info("Project updated: %s (%s)", project.name, project.id)
    return project


def delete_project(db: Session, user: User, project_id: str) -> str:
    """
    Hard delete. The stored analysis payload goes with the project.

    Returns the deleted project's name.
    """
    project = get_owned_project(db, user, project_id)
    name = project.name
    db.delete(project)
    db.commit()

    logger.info("Project deleted: %s (%s)", name, project_id)
    return name


def mark_processing(db: Session, project: Project) -> Project:
    project.data_status = STATUS_PROCESSING
    db.commit()
    db.refresh(project)
    return project


def get_project_payload(project: Project) -> Optional[dict[str, Any]]:
    return project.data.payload if project.data is not None else None
