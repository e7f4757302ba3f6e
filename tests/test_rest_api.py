"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from ccrm.main import RecordsPlatform


@pytest.fixture
def platform(config):
    return RecordsPlatform(config)


@pytest.fixture
def client(platform):
    return TestClient(platform.rest_api.app)


def _create_student(client, student_id="S001"):
    return client.post("/students", json={
        "student_id": student_id,
        "full_name": "John Doe",
        "email": "john@email.com",
        "reg_no": f"REG{student_id[1:]}",
    })


def _create_course(client, code="CS0101", credits=3, **extra):
    payload = {"code": code, "title": "Intro CS", "credits": credits,
               "semester": "Fall", "department": "CSE"}
    payload.update(extra)
    return client.post("/courses", json=payload)


class TestStudentEndpoints:
    def test_create_and_get(self, client):
        response = _create_student(client)
        assert response.status_code == 201
        assert response.json()["gpa"] == 0.0
        assert client.get("/students/S001").json()["full_name"] == "John Doe"

    def test_invalid_email_rejected(self, client):
        response = client.post("/students", json={
            "student_id": "S001", "full_name": "John", "email": "nope", "reg_no": "REG001"
        })
        assert response.status_code == 422

    def test_unknown_student(self, client):
        assert client.get("/students/S404").status_code == 404
        assert client.patch("/students/S404", json={"full_name": "X"}).status_code == 404

    def test_update_and_deactivate(self, client):
        _create_student(client)
        assert client.patch("/students/S001", json={"full_name": "Jane Doe"}).json()["full_name"] == "Jane Doe"
        assert client.post("/students/S001/deactivate").json()["active"] is False
        assert client.get("/students", params={"active": True}).json() == []
        assert len(client.get("/students").json()) == 1


class TestCourseEndpoints:
    def test_create_normalises_code(self, client):
        response = _create_course(client, code="cs0101")
        assert response.status_code == 201
        assert response.json()["code"] == "CS0101"
        assert client.get("/courses/cs0101").status_code == 200

    def test_invalid_credits_rejected(self, client):
        assert _create_course(client, credits=7).status_code == 422

    def test_filters_and_sorting(self, client):
        instructor = {"instructor_id": "I001", "full_name": "Ada Lovelace",
                      "email": "ada@university.edu", "department": "CSE"}
        _create_course(client, code="CS0101", title="Zeta", instructor=instructor)
        _create_course(client, code="MA0201", title="Alpha", semester="Spring", department="MATH")

        assert [c["code"] for c in client.get("/courses", params={"department": "MATH"}).json()] == ["MA0201"]
        assert [c["code"] for c in client.get("/courses", params={"semester": "fall"}).json()] == ["CS0101"]
        assert [c["code"] for c in client.get("/courses", params={"instructor_id": "I001"}).json()] == ["CS0101"]
        assert [c["code"] for c in client.get("/courses", params={"sort": "title"}).json()] == ["MA0201", "CS0101"]
        assert client.get("/courses", params={"semester": "winter"}).status_code == 400

    def test_credit_distribution_excludes_inactive(self, client):
        _create_course(client, code="CS0101", credits=3)
        _create_course(client, code="MA0201", credits=4)
        client.post("/courses/CS0101/deactivate")
        assert client.get("/reports/credit-distribution").json() == {"distribution": {"4": 1}}


class TestEnrollmentEndpoints:
    def test_enroll_grade_transcript(self, client):
        _create_student(client)
        _create_course(client)

        response = client.post("/enrollments", json={"student_id": "S001", "course_code": "CS0101"})
        assert response.status_code == 201
        assert response.json()["grade"] == "I"

        response = client.put("/enrollments/S001/CS0101/grade", json={"grade": "A"})
        assert response.json()["grade_description"] == "Excellent"

        assert client.get("/students/S001/gpa").json()["gpa"] == 4.0
        transcript = client.get("/students/S001/transcript").json()
        assert transcript["grades"] == ["A"]
        assert "GPA: 4.00" in transcript["transcript"]

    def test_duplicate_enrollment_conflict(self, client):
        _create_student(client)
        _create_course(client)
        client.post("/enrollments", json={"student_id": "S001", "course_code": "CS0101"})
        response = client.post("/enrollments", json={"student_id": "S001", "course_code": "CS0101"})
        assert response.status_code == 409
        assert len(client.get("/students/S001/enrollments").json()) == 1

    def test_credit_limit_unprocessable(self, client):
        _create_student(client)
        for code in ("CS0101", "CS0102", "CS0103", "CS0104"):
            _create_course(client, code=code, credits=5)
        for code in ("CS0101", "CS0102", "CS0103"):
            assert client.post("/enrollments", json={"student_id": "S001", "course_code": code}).status_code == 201
        response = client.post("/enrollments", json={"student_id": "S001", "course_code": "CS0104"})
        assert response.status_code == 422
        assert "max 18" in response.json()["detail"]

    def test_enroll_unknown_records(self, client):
        _create_student(client)
        assert client.post("/enrollments", json={"student_id": "S001", "course_code": "XX0000"}).status_code == 404
        assert client.post("/enrollments", json={"student_id": "S404", "course_code": "XX0000"}).status_code == 404

    def test_unenroll(self, client):
        _create_student(client)
        _create_course(client)
        client.post("/enrollments", json={"student_id": "S001", "course_code": "CS0101"})
        assert client.delete("/enrollments/S001/CS0101").status_code == 204
        assert client.delete("/enrollments/S001/CS0101").status_code == 204
        assert client.get("/students/S001/enrollments").json() == []

    def test_grade_unknown_enrollment(self, client):
        _create_student(client)
        assert client.put("/enrollments/S001/CS0101/grade", json={"grade": "A"}).status_code == 404
        assert client.put("/enrollments/S001/CS0101/grade", json={"grade": "Z"}).status_code == 422

    def test_statistics(self, client):
        _create_student(client)
        _create_course(client)
        client.post("/enrollments", json={"student_id": "S001", "course_code": "CS0101"})
        stats = client.get("/statistics").json()
        assert stats["students"] == 1
        assert stats["courses"] == 1
        assert stats["enrollment"]["total_enrollments"] == 1


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
