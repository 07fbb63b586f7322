# File: brandsense/client/dashboard.py

"""
Dashboard state machine.

Ties the API client, the local cache and the poller together. The backend
is the source of truth for projects; the cache holds the selected project
and loaded payloads between invocations.
"""

import logging
from typing import Any, Optional

from brandsense.client.api import PROJECT_FIELDS, ApiError, BrandSenseClient
from brandsense.client.cache import LocalCache, now_iso
from brandsense.client.poller import AnalysisPoller, PollResult
from brandsense.client.reports import ReportView, build_report
from brandsense.client.session import to_cached_project
from brandsense.core.security import is_valid_uuid

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "delete"


class DashboardError(Exception):
    """A dashboard action could not run in the current state."""


class Dashboard:
    def __init__(
        self,
        cache: LocalCache,
        client: BrandSenseClient,
        poller: Optional[AnalysisPoller] = None,
    ):
        self.cache = cache
        self.client = client
        self.poller = poller or AnalysisPoller(client)
        if client.access_token is None:
            client.access_token = cache.get_access_token()

    # -----------------------------
    # AUTH
    # -----------------------------
    def sign_up(self, email: str, password: str, full_name: str) -> dict[str, Any]:
        return self.client.sign_up(email, password, full_name)["user"]

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        body = self.client.sign_in(email, password)
        self.cache.clear_all()
        self.cache.set_access_token(body["accessToken"])
        self.cache.save_user_profile(body["user"])
        logger.info("Signed in as %s", body["user"]["email"])
        return body["user"]

    def sign_out(self) -> None:
        try:
            if self.client.access_token:
                self.client.sign_out()
        except ApiError as e:
            # The token may already be expired or revoked
            logger.warning("Sign out request failed: %s", e)
        finally:
            self.client.access_token = None
            self.cache.clear_all()

    def change_password(self, current_password: str, new_password: str) -> str:
        self.require_token()
        return self.client.change_password(current_password, new_password)["message"]

    def send_feedback(self, feedback: str, rating: int) -> str:
        profile = self.cache.get_user_profile() or {}
        body = self.client.send_feedback(
            feedback,
            rating,
            user_email=profile.get("email"),
            user_name=profile.get("fullName"),
        )
        return body["message"]

    def require_token(self) -> str:
        token = self.cache.get_access_token()
        if not token:
            raise DashboardError("Not signed in. Run `brandsense signin` first.")
        self.client.access_token = token
        return token

    # -----------------------------
    # PROJECTS
    # -----------------------------
    def sync_projects(self) -> list[dict[str, Any]]:
        self.require_token()
        backend = self.client.list_projects()
        cached_by_id = {p.get("id"): p for p in self.cache.load_projects() if isinstance(p, dict)}

        projects = []
        for project in backend:
            previous = cached_by_id.get(project["id"]) or {}
            projects.append(to_cached_project(project, data=previous.get("data")))
        self.cache.save_projects(projects)

        selected = self.cache.get_selected_project_id()
        if projects and not any(p["id"] == selected for p in projects):
            self.cache.set_selected_project(projects[0]["id"])
        elif not projects:
            self.cache.clear_selected_project()
        return projects

    def select_project(self, project_id: str) -> dict[str, Any]:
        project = self.cache.get_project(project_id)
        if project is None:
            raise DashboardError(f"Unknown project: {project_id}")
        self.cache.set_selected_project(project_id)
        return project

    def _drop_project(self, project_id: str) -> None:
        self.cache.delete_project(project_id)
        remaining = self.cache.load_projects()
        if remaining and self.cache.get_selected_project_id() is None:
            self.cache.set_selected_project(remaining[0]["id"])

    def fetch_project_data(self, project_id: str) -> Optional[dict[str, Any]]:
        """
        Load the payload for a project into the cache.

        Projects that no longer exist on the backend (or carry a malformed
        id) are dropped from the cache and the next one is selected.
        """
        self.require_token()
        if not is_valid_uuid(project_id):
            logger.error("Invalid project id format: %s", project_id)
            self._drop_project(project_id)
            return None

        try:
            body = self.client.get_project(project_id)
        except ApiError as e:
            if e.is_not_found or e.is_uuid_error:
                logger.warning("Project %s is gone, removing it from the cache", project_id)
                self._drop_project(project_id)
                return None
            raise

        project, data = body["project"], body.get("data")
        cached = self.cache.get_project(project_id) or {}
        merged = to_cached_project(project, data=data if data is not None else cached.get("data"))
        if data is not None:
            merged["lastRefreshedAt"] = project.get("lastRefreshedAt") or now_iso()
        self.cache.save_project(merged)
        return data

    def create_project(self, **fields: Any) -> dict[str, Any]:
        self.require_token()
        project = self.client.create_project(**fields)
        self.cache.save_project(to_cached_project(project))
        self.cache.set_selected_project(project["id"])
        return project

    def update_project(self, project_id: str, **fields: Any) -> dict[str, Any]:
        """
        Change some project fields and keep the rest.

        The backend replaces every editable field on update, so the given
        fields are laid over the current project before sending.
        """
        self.require_token()
        cached = self.cache.get_project(project_id)
        current = cached or self.client.get_project(project_id)["project"]
        body = {arg: current.get(key) for arg, key in PROJECT_FIELDS.items()}
        body.update(fields)

        project = self.client.update_project(project_id, **body)
        self.cache.save_project(to_cached_project(project, data=(cached or {}).get("data")))
        return project

    def delete_project(self, project_id: str, confirmation: str) -> str:
        if confirmation != DELETE_CONFIRMATION:
            raise DashboardError(f'Type "{DELETE_CONFIRMATION}" to confirm')
        self.require_token()
        body = self.client.delete_project(project_id)
        self._drop_project(project_id)
        return body.get("projectName", "")

    def refresh(self, project_id: str, on_tick=None) -> PollResult:
        self.require_token()
        self.cache.mark_project_refreshing(project_id)
        self.client.refresh_project(project_id)

        result = self.poller.wait_until_settled(project_id, on_tick=on_tick)
        self._store_poll_result(project_id, result)
        return result

    def wait_for_analysis(self, project_id: str, on_tick=None) -> PollResult:
        self.require_token()
        result = self.poller.wait_until_settled(project_id, on_tick=on_tick)
        self._store_poll_result(project_id, result)
        return result

    def _store_poll_result(self, project_id: str, result: PollResult) -> None:
        if result.project is None:
            return
        cached = self.cache.get_project(project_id) or {}
        merged = to_cached_project(result.project, data=result.data or cached.get("data"))
        self.cache.save_project(merged)

    def recover(self) -> int:
        """Wipe the cache (keeping auth) and reload the project list."""
        token = self.require_token()
        self.cache.clear_all_and_restore_auth(token)

        projects = [to_cached_project(p) for p in self.client.list_projects()]
        if projects:
            self.cache.sync_projects_from_backend(projects)
        logger.info("Recovered %s projects", len(projects))
        return len(projects)

    # -----------------------------
    # REPORTS
    # -----------------------------
    def report(self, kind: str) -> ReportView:
        project = self.cache.get_selected_project()
        if project is None:
            raise DashboardError("No project selected")

        if project.get("data") is None and project.get("dataStatus") == "ready":
            self.fetch_project_data(project["id"])
            project = self.cache.get_project(project["id"]) or project

        view = build_report(kind, project)
        if view.mismatched_brand:
            logger.error(
                "Cached data for %s references %s; run `brandsense recover`",
                project.get("name"),
                view.mismatched_brand,
            )
        return view
