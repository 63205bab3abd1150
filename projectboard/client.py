# projectboard/client.py
"""
HTTP client for the project board and an in-memory list view on top of it.

The view fetches the whole project list plus the category and skill lists
once, then applies the four filter criteria locally. Every mutation made
through the view is followed by a full refetch.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from projectboard.core.logging_config import get_logger
from projectboard.models.project import ProjectCreate, ProjectFilter, ProjectUpdate
from projectboard.services.filtering import ALL, filter_projects

logger = get_logger(__name__)

REQUIRED_DRAFT_FIELDS = ("title", "description", "category", "studentName", "contactInfo")


class BoardClientError(Exception):
    """A request failed; ``status_code`` is None for transport errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProjectDraft(ProjectCreate):
    def missing_fields(self) -> List[str]:
        data = self.model_dump(by_alias=True)
        return [f for f in REQUIRED_DRAFT_FIELDS if not str(data.get(f) or "").strip()]

    def is_submittable(self) -> bool:
        return not self.missing_fields()


class ProjectBoardClient:
    def __init__(
        self,
        base_url: str = "",
        *,
        http: Optional[httpx.Client] = None,
        timeout: float = 20,
        token: Optional[str] = None,
    ):
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._owns_http = http is None
        self.token = token
        self.admin: Optional[Dict[str, Any]] = None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ProjectBoardClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ---------- transport ----------

    def _headers(self, auth: bool) -> Dict[str, str]:
        if auth and self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, *, auth: bool = False, **kwargs) -> Any:
        try:
            r = self._http.request(method, path, headers=self._headers(auth), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise BoardClientError(f"Request failed: {e}") from e

        if r.is_error:
            try:
                detail = r.json().get("detail") or r.text
            except ValueError:
                detail = r.text
            logger.error(f"{method} {path} -> {r.status_code}: {detail}")
            raise BoardClientError(str(detail), status_code=r.status_code)
        return r.json()

    # ---------- projects ----------

    def list_projects(self, criteria: Optional[ProjectFilter] = None) -> List[Dict[str, Any]]:
        params = {}
        if criteria is not None:
            params = {
                k: v for k, v in criteria.model_dump().items()
                if v and v != ALL
            }
        return self._request("GET", "/projects", params=params)

    def create_project(self, draft: ProjectCreate) -> Dict[str, Any]:
        body = draft.model_dump(mode="json", by_alias=True, exclude_none=True)
        return self._request("POST", "/projects", json=body)

    def update_project(self, project_id: str, changes: ProjectUpdate) -> Dict[str, Any]:
        body = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return self._request("PUT", f"/projects/{project_id}", json=body, auth=True)

    def delete_project(self, project_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}", auth=True)

    # ---------- reference data ----------

    def categories(self) -> List[str]:
        return self._request("GET", "/categories")

    def skills(self) -> List[str]:
        return self._request("GET", "/skills")

    # ---------- admin ----------

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/admin/login", json={"email": email, "password": password})
        self.token = data["access_token"]
        self.admin = data["user"]
        return data

    def logout(self) -> None:
        self.token = None
        self.admin = None

    def request_admin(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/admin/request",
            json={"name": name, "email": email, "password": password},
        )

    def pending_requests(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/admin/requests", auth=True)

    def approve_request(self, request_id: str) -> Dict[str, Any]:
        return self._request("PUT", f"/admin/requests/{request_id}/approve", auth=True)


class ProjectListView:
    """Full project collection held in memory with a derived, filtered view."""

    def __init__(self, client: ProjectBoardClient, criteria: Optional[ProjectFilter] = None):
        self.client = client
        self.criteria = criteria or ProjectFilter()
        self.projects: List[Dict[str, Any]] = []
        self.categories: List[str] = []
        self.skills: List[str] = []
        self.visible: List[Dict[str, Any]] = []

    def refresh(self) -> None:
        """
        Refetch projects, categories and skills.

        On failure the previous data is kept and the BoardClientError is
        re-raised so the caller can show it.
        """
        projects = self.client.list_projects()
        categories = self.client.categories()
        skills = self.client.skills()
        self.projects = projects if isinstance(projects, list) else []
        self.categories = categories if isinstance(categories, list) else []
        self.skills = skills if isinstance(skills, list) else []
        self._recompute()

    def set_filter(self, **changes: Optional[str]) -> List[Dict[str, Any]]:
        self.criteria = self.criteria.model_copy(update=changes)
        self._recompute()
        return self.visible

    def reset_filter(self) -> List[Dict[str, Any]]:
        self.criteria = ProjectFilter()
        self._recompute()
        return self.visible

    def _recompute(self) -> None:
        self.visible = filter_projects(self.projects, self.criteria)

    # mutations refetch the whole list afterwards

    def submit(self, draft: ProjectDraft) -> Dict[str, Any]:
        missing = draft.missing_fields()
        if missing:
            raise BoardClientError(f"Missing required fields: {', '.join(missing)}", status_code=422)
        created = self.client.create_project(draft)
        self.refresh()
        return created

    def edit(self, project_id: str, changes: ProjectUpdate) -> Dict[str, Any]:
        updated = self.client.update_project(project_id, changes)
        self.refresh()
        return updated

    def remove(self, project_id: str) -> None:
        self.client.delete_project(project_id)
        self.refresh()
