# File: brandsense/api/v1/routes_project.py

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from brandsense.api.deps import get_current_user, get_db, get_session_factory
from brandsense.core.logging import log_response
from brandsense.models.user import User
from brandsense.schemas.project import (
    ProjectCreate,
    ProjectDeleteResponse,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectRead,
    ProjectUpdate,
)
from brandsense.schemas.user import MessageResponse
from brandsense.services import project_service
from brandsense.services.analysis_service import SessionFactory, run_project_analysis

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List the caller's projects, newest first",
)
def list_projects(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    projects = project_service.list_projects(db, user)
    log_response(logger, 200, f"Fetched {len(projects)} projects for user {user.id}")
    return ProjectListResponse(projects=[ProjectRead.model_validate(p) for p in projects])


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project and start its analysis",
)
def create_project(
    payload: ProjectCreate,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    session_factory: SessionFactory = Depends(get_session_factory),
):
    """
    The project is created in the ``processing`` state and analysed after the
    response is sent; clients poll ``GET /projects/{id}`` for completion.
    """
    project = project_service.create_project(db, user, payload)
    background_tasks.add_task(run_project_analysis, project.id, session_factory)
    log_response(logger, 201, f"Project created: {project.id}")
    return ProjectMutationResponse(
        message="Project created successfully. Analysis is now processing.",
        project=ProjectRead.model_validate(project),
    )


@router.get(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Get a project with its analysis payload",
)
def get_project(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = project_service.get_owned_project(db, user, project_id)
    return ProjectDetailResponse(
        project=ProjectRead.model_validate(project),
        data=project_service.get_project_payload(project),
    )


@router.put(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Update project fields",
)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = project_service.update_project(db, user, project_id, payload)
    log_response(logger, 200, f"Project updated: {project.id}")
    return ProjectMutationResponse(
        message="Project updated successfully",
        project=ProjectRead.model_validate(project),
    )


@router.delete(
    "/{project_id}",
    response_model=ProjectDeleteResponse,
    summary="Delete a project and its analysis data",
)
def delete_project(
    project_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    name = project_service.delete_project(db, user, project_id)
    log_response(logger, 200, f"Project deleted: {project_id}")
    return ProjectDeleteResponse(
        message="Project deleted successfully",
        project_id=project_id,
        project_name=name,
    )


@router.post(
    "/{project_id}/refresh",
    response_model=MessageResponse,
    summary="Re-run the analysis for a project",
)
def refresh_project(
    project_id: str,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    session_factory: SessionFactory = Depends(get_session_factory),
):
    project = project_service.get_owned_project(db, user, project_id)
    project_service.mark_processing(db, project)
    background_tasks.add_task(run_project_analysis, project.id, session_factory)
    log_response(logger, 200, f"Refresh started: {project.id}")
    return MessageResponse(message="Refresh in progress")
