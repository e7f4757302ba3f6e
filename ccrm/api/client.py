"""
HTTP client for a running CCRM REST API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.exceptions import CCRMException

logger = logging.getLogger(__name__)


class ServiceError(CCRMException):
    """Raised when the records service answers with an error status."""

    def __init__(self, message: str, status_code: int, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code=str(status_code), details=details)
        self.status_code = status_code


class RecordsClient:
    """Thin wrapper over the REST endpoints.

    ``session`` may be any object with a requests-style ``request`` method.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", session=None, timeout: float = 5.0):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self._base_url}{path}"
        kwargs: Dict[str, Any] = {"timeout": self._timeout} if isinstance(self._session, requests.Session) else {}
        if payload is not None:
            kwargs["json"] = payload
        response = self._session.request(method, url, **kwargs)
        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.warning("%s %s failed with %d: %s", method, path, response.status_code, detail)
            raise ServiceError(str(detail), response.status_code, details={"path": path})
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def health(self) -> Dict[str, str]:
        return self._request("GET", "/health")

    def create_student(self, student_id: str, full_name: str, email: str, reg_no: str) -> Dict[str, Any]:
        return self._request("POST", "/students", {
            "student_id": student_id,
            "full_name": full_name,
            "email": email,
            "reg_no": reg_no,
        })

    def create_course(self, code: str, title: str, credits: int, semester: str, department: str,
                      instructor: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        payload = {
            "code": code,
            "title": title,
            "credits": credits,
            "semester": semester,
            "department": department,
        }
        if instructor:
            payload["instructor"] = instructor
        return self._request("POST", "/courses", payload)

    def enroll(self, student_id: str, course_code: str) -> Dict[str, Any]:
        return self._request("POST", "/enrollments", {"student_id": student_id, "course_code": course_code})

    def unenroll(self, student_id: str, course_code: str) -> None:
        self._request("DELETE", f"/enrollments/{student_id}/{course_code}")

    def record_grade(self, student_id: str, course_code: str, grade: str) -> Dict[str, Any]:
        return self._request("PUT", f"/enrollments/{student_id}/{course_code}/grade", {"grade": grade})

    def transcript(self, student_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/students/{student_id}/transcript")

    def list_students(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/students")

    def credit_distribution(self) -> Dict[str, int]:
        return self._request("GET", "/reports/credit-distribution")["distribution"]
