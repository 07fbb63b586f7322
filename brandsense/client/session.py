# File: brandsense/client/session.py

"""
Session validation on dashboard start.

Flow:
  1. Check the cached projects format
  2. Check that an access token exists
  3. Validate the token against the backend (project list)
  4. Sync projects from the backend, which is the source of truth
  5. Decide the initial screen
"""

import logging
from dataclasses import dataclass
from typing import Any

from brandsense.client.api import ApiError, BrandSenseClient
from brandsense.client.cache import LocalCache
from brandsense.core.security import is_valid_uuid

logger = logging.getLogger(__name__)

SCREEN_LANDING = "landing"
SCREEN_DASHBOARD = "dashboard"
SCREEN_CREATE_PROJECT = "create-project"


@dataclass
class ValidationResult:
    is_valid: bool
    screen: str


def is_valid_project(project: Any) -> bool:
    return (
        isinstance(project, dict)
        and isinstance(project.get("id"), str)
        and is_valid_uuid(project["id"])
        and isinstance(project.get("name"), str)
        and isinstance(project.get("market"), str)
        and isinstance(project.get("language"), str)
    )


def validate_user_session(cache: LocalCache, client: BrandSenseClient) -> ValidationResult:
    if not cache.validate_projects_format():
        logger.warning("Invalid project format detected, clearing all storage")
        cache.clear_all()
        return ValidationResult(False, SCREEN_LANDING)

    token = cache.get_access_token()
    if not token:
        logger.info("No access token found")
        return ValidationResult(False, SCREEN_LANDING)

    client.access_token = token
    try:
        backend_projects = client.list_projects()
    except ApiError as e:
        if e.is_unauthorized:
            logger.info("Invalid or expired token, clearing session")
        else:
            logger.error("Session validation failed: %s", e)
        cache.clear_all()
        return ValidationResult(False, SCREEN_LANDING)

    if not isinstance(backend_projects, list):
        logger.error("Backend returned invalid projects data")
        cache.clear_all()
        return ValidationResult(False, SCREEN_LANDING)

    valid = [p for p in backend_projects if is_valid_project(p)]
    if len(valid) != len(backend_projects):
        logger.warning("%s projects failed validation", len(backend_projects) - len(valid))

    cache.clear_all_and_restore_auth(token)
    if not valid:
        logger.info("No projects found, starting onboarding")
        return ValidationResult(True, SCREEN_CREATE_PROJECT)

    cache.sync_projects_from_backend([to_cached_project(p) for p in valid])
    logger.info("Synced %s projects from backend", len(valid))
    return ValidationResult(True, SCREEN_DASHBOARD)


def to_cached_project(project: dict[str, Any], data: Any = None) -> dict[str, Any]:
    """Convert a backend project to the cached form (payload loaded on demand)."""
    cached = dict(project)
    cached.setdefault("timeframe", "Last 3 months")
    cached.setdefault("aiModel", "gpt-4o")
    cached.setdefault("dataStatus", "pending")
    cached.setdefault("lastRefreshedAt", None)
    cached["data"] = data
    return cached
