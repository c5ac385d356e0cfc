from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import httpx
from app.models.schema import Resume, Template, UpdateResumeRequest
import app.config as cfg

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response (or transport failure, status_code None) from the resume API."""

    def __init__(self, status_code: Optional[int], detail: str):
        super().__init__(f"{status_code}: {detail}" if status_code else detail)
        self.status_code = status_code
        self.detail = detail


class ResumeApiClient:
    """Typed wrapper over the HTTP surface.

    Accepts any httpx.Client, so tests can hand in FastAPI's TestClient.
    """

    def __init__(self, http: Optional[httpx.Client] = None, base_url: Optional[str] = None, timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url or cfg.API_URL, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("api: %s %s failed: %s", method, path, e)
            raise ApiError(None, str(e)) from e
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            raise ApiError(resp.status_code, str(detail))
        return resp

    def create_resume(self, user_id: str, template_id: str, title: Optional[str] = None) -> Resume:
        body: Dict[str, Any] = {"userId": user_id, "templateId": template_id}
        if title is not None:
            body["title"] = title
        data = self._request("POST", "/resumes", json=body).json()
        return Resume.model_validate(data["resume"])

    def get_resume(self, resume_id: int) -> Resume:
        return Resume.model_validate(self._request("GET", f"/resumes/{resume_id}").json())

    def list_resumes(self, user_id: str) -> List[Resume]:
        data = self._request("GET", "/resumes", params={"userId": user_id}).json()
        return [Resume.model_validate(r) for r in data["resumes"]]

    def update_resume(self, resume_id: int, changes: Dict[str, Any]) -> Resume:
        """PUT only the given top-level fields (snake_case names, whole sub-documents)."""
        body = UpdateResumeRequest(**changes).model_dump(by_alias=True, include=set(changes), exclude_none=True, mode="json")
        data = self._request("PUT", f"/resumes/{resume_id}", json=body).json()
        return Resume.model_validate(data["resume"])

    def list_templates(self) -> List[Template]:
        data = self._request("GET", "/templates").json()
        return [Template.model_validate(t) for t in data["templates"]]

    def get_suggestions(self, kind: str, industry: Optional[str] = None, job_title: Optional[str] = None) -> List[str]:
        params = {"type": kind}
        if industry:
            params["industry"] = industry
        if job_title:
            params["jobTitle"] = job_title
        return self._request("GET", "/suggestions", params=params).json()["suggestions"]

    def close(self) -> None:
        self.http.close()
