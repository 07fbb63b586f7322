# File: brandsense/schemas/project.py

from datetime import datetime
from typing import Any, Optional

from brandsense.schemas.base import APIModel


class ProjectBase(APIModel):
    name: str
    market: str
    language: str
    industry: Optional[str] = None
    website_url: Optional[str] = None
    description: Optional[str] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(ProjectBase):
    pass


class ProjectRead(ProjectBase):
    id: str
    timeframe: str
    ai_model: str
    data_status: str
    last_refreshed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(APIModel):
    success: bool = True
    projects: list[ProjectRead]


class ProjectDetailResponse(APIModel):
    project: ProjectRead
    data: Optional[dict[str, Any]] = None


class ProjectMutationResponse(APIModel):
    success: bool = True
    message: str
    project: ProjectRead


class ProjectDeleteResponse(APIModel):
    success: bool = True
    message: str
    project_id: str
    project_name: str
