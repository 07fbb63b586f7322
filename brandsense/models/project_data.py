# File: brandsense/models/project_data.py

"""
Analysis payload for a project: brandIdentity, sentimentAnalysis and
keywordAnalysis stored as one JSON document.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brandsense.models.base import Base, utcnow

if TYPE_CHECKING:
    from brandsense.models.project import Project


class ProjectData(Base):
    __tablename__ = "project_data"

    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    project: Mapped["Project"] = relationship(back_populates="data")
