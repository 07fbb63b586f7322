# File: brandsense/client/cache.py

"""
Local dashboard cache.

A single JSON file standing in for the browser's localStorage. Keys match
the web dashboard so a cache can be inspected the same way:

    access_token, user_email, user_fullName, user_profile,
    dashboard_projects, dashboard_selectedProjectId

Cached projects use the API's camelCase project shape plus a ``data`` key
holding the analysis payload (or None).
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from brandsense.core.security import is_valid_uuid

logger = logging.getLogger(__name__)

DEFAULT_CACHE_PATH = Path.home() / ".brandsense" / "cache.json"

KEY_ACCESS_TOKEN = "access_token"
KEY_USER_EMAIL = "user_email"
KEY_USER_FULL_NAME = "user_fullName"
KEY_USER_PROFILE = "user_profile"
KEY_PROJECTS = "dashboard_projects"
KEY_SELECTED_PROJECT_ID = "dashboard_selectedProjectId"

SUGGEST_REFRESH_AFTER_DAYS = 7

Project = dict[str, Any]


class CacheCorruptedError(Exception):
    """The cache file exists but is not a JSON object."""


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class LocalCache:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_CACHE_PATH

    # -----------------------------
    # RAW STORAGE
    # -----------------------------
    def _read_raw(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CacheCorruptedError(f"Unreadable cache file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CacheCorruptedError(f"Cache file {self.path} is not a JSON object")
        return data

    def _read(self) -> dict[str, Any]:
        try:
            return self._read_raw()
        except CacheCorruptedError as e:
            logger.error("%s", e)
            return {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".cache-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> Any:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    # -----------------------------
    # PROJECTS
    # -----------------------------
    def load_projects(self) -> list[Project]:
        projects = self.get_item(KEY_PROJECTS)
        return projects if isinstance(projects, list) else []

    def save_projects(self, projects: list[Project]) -> None:
        self.set_item(KEY_PROJECTS, projects)

    def get_project(self, project_id: str) -> Optional[Project]:
        for project in self.load_projects():
            if isinstance(project, dict) and project.get("id") == project_id:
                return project
        return None

    def save_project(self, project: Project) -> None:
        projects = self.load_projects()
        for i, existing in enumerate(projects):
            if isinstance(existing, dict) and existing.get("id") == project["id"]:
                projects[i] = project
                break
        else:
            projects.append(project)
        self.save_projects(projects)

    def delete_project(self, project_id: str) -> None:
        projects = [p for p in self.load_projects() if not (isinstance(p, dict) and p.get("id") == project_id)]
        self.save_projects(projects)
        if self.get_selected_project_id() == project_id:
            self.clear_selected_project()

    def update_project_status(self, project_id: str, status: str, error: Optional[str] = None) -> None:
        project = self.get_project(project_id)
        if project is None:
            return
        project["dataStatus"] = status
        if error:
            project["error"] = error
        else:
            project.pop("error", None)
        self.save_project(project)

    def update_project_data(self, project_id: str, data: Optional[dict[str, Any]]) -> None:
        project = self.get_project(project_id)
        if project is None:
            return
        project["data"] = data
        project["lastRefreshedAt"] = now_iso()
        project["dataStatus"] = "ready"
        project.pop("error", None)
        self.save_project(project)

    def mark_project_refreshing(self, project_id: str) -> bool:
        project = self.get_project(project_id)
        if project is None:
            return False
        project["dataStatus"] = "processing"
        project["lastRefreshedAt"] = now_iso()
        self.save_project(project)
        return True

    # -----------------------------
    # SELECTED PROJECT
    # -----------------------------
    def get_selected_project_id(self) -> Optional[str]:
        return self.get_item(KEY_SELECTED_PROJECT_ID)

    def set_selected_project(self, project_id: str) -> None:
        self.set_item(KEY_SELECTED_PROJECT_ID, project_id)

    def clear_selected_project(self) -> None:
        self.remove_item(KEY_SELECTED_PROJECT_ID)

    def get_selected_project(self) -> Optional[Project]:
        project_id = self.get_selected_project_id()
        return self.get_project(project_id) if project_id else None

    # -----------------------------
    # USER / AUTH
    # -----------------------------
    def get_access_token(self) -> Optional[str]:
        return self.get_item(KEY_ACCESS_TOKEN)

    def set_access_token(self, token: str) -> None:
        self.set_item(KEY_ACCESS_TOKEN, token)

    def get_user_profile(self) -> Optional[dict[str, Any]]:
        profile = self.get_item(KEY_USER_PROFILE)
        return profile if isinstance(profile, dict) else None

    def save_user_profile(self, profile: dict[str, Any]) -> None:
        data = self._read()
        data[KEY_USER_PROFILE] = profile
        data[KEY_USER_EMAIL] = profile.get("email")
        data[KEY_USER_FULL_NAME] = profile.get("fullName")
        self._write(data)

    # -----------------------------
    # SESSION HELPERS
    # -----------------------------
    def clear_all(self) -> None:
        self._write({})

    def clear_all_and_restore_auth(self, access_token: str) -> None:
        """Wipe everything except the token and user identity."""
        data = self._read()
        kept = {
            key: data[key]
            for key in (KEY_USER_EMAIL, KEY_USER_FULL_NAME, KEY_USER_PROFILE)
            if data.get(key) is not None
        }
        kept[KEY_ACCESS_TOKEN] = access_token
        self._write(kept)

    def sync_projects_from_backend(self, projects: list[Project]) -> None:
        if not projects:
            return
        data = self._read()
        data[KEY_PROJECTS] = projects
        data[KEY_SELECTED_PROJECT_ID] = projects[0]["id"]
        self._write(data)

    def validate_projects_format(self) -> bool:
        """
        True when the cache is readable and every stored project has a UUID id.
        An empty cache is valid.
        """
        try:
            data = self._read_raw()
        except CacheCorruptedError:
            return False

        projects = data.get(KEY_PROJECTS)
        if projects is None:
            return True
        if not isinstance(projects, list):
            return False
        return all(
            isinstance(p, dict) and isinstance(p.get("id"), str) and is_valid_uuid(p["id"])
            for p in projects
        )


def should_suggest_refresh(project: Project, now: Optional[datetime] = None) -> bool:
    """True when the last refresh is at least a week old."""
    last_refresh = parse_timestamp(project.get("lastRefreshedAt"))
    if last_refresh is None:
        return False
    now = now or datetime.now(timezone.utc)
    return (now - last_refresh).days >= SUGGEST_REFRESH_AFTER_DAYS
