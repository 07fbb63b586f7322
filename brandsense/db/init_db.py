"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata
before ``create_all`` runs.
"""

from typing import Optional

from sqlalchemy.engine import Engine

from brandsense.db.session import engine as default_engine
from brandsense.models.base import Base

from brandsense.models import analysis_cache, feedback, project, project_data, revoked_token, user  # noqa: F401


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=bind or default_engine)
