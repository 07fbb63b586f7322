# File: brandsense/client/api.py

"""
HTTP client for the Brand Sense API.

Every call returns the decoded JSON body. Non-2xx responses raise
``ApiError`` with the HTTP status and the server's ``detail``; transport
failures raise ``ApiError`` with ``status_code=None``.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
API_PREFIX = "/api/v1"


class ApiError(Exception):
    def __init__(self, status_code: Optional[int], detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_uuid_error(self) -> bool:
        return "uuid" in self.detail.lower()


def _validation_message(item: Any) -> str:
    if not isinstance(item, dict):
        return str(item)
    loc = item.get("loc") or []
    msg = item.get("msg", "Invalid value")
    return f"{loc[-1]}: {msg}" if loc else str(msg)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error") or body.get("message")
        if isinstance(detail, list):
            # FastAPI validation errors
            return "; ".join(_validation_message(item) for item in detail)
        if detail:
            return str(detail)
    return response.reason_phrase


class BrandSenseClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        access_token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "BrandSenseClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -----------------------------
    # TRANSPORT
    # -----------------------------
    def _headers(self, auth: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth and self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        auth: bool = True,
        prefix: str = API_PREFIX,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{prefix}{path}"
        try:
            response = self._http.request(method, url, json=json, headers=self._headers(auth))
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ApiError(None, f"Network error: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            logger.warning("%s %s -> %s %s", method, path, response.status_code, detail)
            raise ApiError(response.status_code, detail)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(response.status_code, "Response was not valid JSON") from e

    # -----------------------------
    # HEALTH
    # -----------------------------
    def health(self) -> dict[str, Any]:
        return self._request("GET", "/healthz", auth=False, prefix="")

    # -----------------------------
    # AUTH
    # -----------------------------
    def sign_up(self, email: str, password: str, full_name: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/auth/signup",
            json={"email": email, "password": password, "fullName": full_name},
            auth=False,
        )

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        body = self._request(
            "POST",
            "/auth/signin",
            json={"email": email, "password": password},
            auth=False,
        )
        self.access_token = body.get("accessToken")
        return body

    def sign_out(self) -> dict[str, Any]:
        body = self._request("POST", "/auth/signout")
        self.access_token = None
        return body

    def session(self) -> dict[str, Any]:
        return self._request("GET", "/auth/session")

    def change_password(self, current_password: str, new_password: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/auth/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    # -----------------------------
    # PROJECTS
    # -----------------------------
    def list_projects(self) -> list[dict[str, Any]]:
        return self._request("GET", "/projects").get("projects", [])

    def get_project(self, project_id: str) -> dict[str, Any]:
        """Returns ``{"project": {...}, "data": {...} | None}``."""
        return self._request("GET", f"/projects/{project_id}")

    def create_project(self, **fields: Any) -> dict[str, Any]:
        return self._request("POST", "/projects", json=_project_body(fields))["project"]

    def update_project(self, project_id: str, **fields: Any) -> dict[str, Any]:
        return self._request("PUT", f"/projects/{project_id}", json=_project_body(fields))["project"]

    def delete_project(self, project_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}")

    def refresh_project(self, project_id: str) -> dict[str, Any]:
        return self._request("POST", f"/projects/{project_id}/refresh")

    # -----------------------------
    # FEEDBACK
    # -----------------------------
    def send_feedback(
        self,
        feedback: str,
        rating: int,
        user_email: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/feedback",
            json={
                "feedback": feedback,
                "rating": rating,
                "userEmail": user_email,
                "userName": user_name,
            },
            auth=False,
        )


# keyword argument -> wire field
PROJECT_FIELDS = {
    "name": "name",
    "market": "market",
    "language": "language",
    "industry": "industry",
    "website_url": "websiteUrl",
    "description": "description",
}


def _project_body(fields: dict[str, Any]) -> dict[str, Any]:
    unknown = set(fields) - set(PROJECT_FIELDS)
    if unknown:
        raise TypeError(f"Unknown project fields: {', '.join(sorted(unknown))}")
    return {PROJECT_FIELDS[k]: v for k, v in fields.items()}
