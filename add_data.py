"""
Script to add sample data to a running CCRM REST server.
Make sure the server is running (``ccrm serve``) before executing this script.

Usage:
    python add_data.py
"""

import os
import sys

import requests

from ccrm.api.client import RecordsClient, ServiceError

STUDENTS = [
    ("S001", "Alice Johnson", "alice@university.edu", "REG001"),
    ("S002", "Bob Smith", "bob@university.edu", "REG002"),
    ("S003", "Carol Davis", "carol@university.edu", "REG003"),
]

INSTRUCTOR = {
    "instructor_id": "I001",
    "full_name": "Ada Lovelace",
    "email": "ada@university.edu",
    "department": "CSE",
}

COURSES = [
    ("CS0101", "Introduction to Computer Science", 3, "Fall", "CSE", INSTRUCTOR),
    ("CS0201", "Data Structures", 4, "Spring", "CSE", INSTRUCTOR),
    ("MA0101", "Calculus I", 4, "Fall", "MATH", None),
]

ENROLLMENTS = [
    ("S001", "CS0101", "A"),
    ("S001", "MA0101", "B"),
    ("S002", "CS0101", "C"),
]


def seed(client: RecordsClient) -> int:
    """Create the sample records, returning the number of failed requests."""
    failures = 0
    for student in STUDENTS:
        try:
            client.create_student(*student)
            print(f"[OK] student {student[0]}")
        except ServiceError as e:
            failures += 1
            print(f"[FAIL] student {student[0]}: {e}")

    for code, title, credits, semester, department, instructor in COURSES:
        try:
            client.create_course(code, title, credits, semester, department, instructor)
            print(f"[OK] course {code}")
        except ServiceError as e:
            failures += 1
            print(f"[FAIL] course {code}: {e}")

    for student_id, course_code, grade in ENROLLMENTS:
        try:
            client.enroll(student_id, course_code)
            client.record_grade(student_id, course_code, grade)
            print(f"[OK] {student_id} -> {course_code} ({grade})")
        except ServiceError as e:
            failures += 1
            print(f"[FAIL] {student_id} -> {course_code}: {e}")

    return failures


def main() -> int:
    client = RecordsClient(os.environ.get("CCRM_BASE_URL", "http://127.0.0.1:8000"))
    try:
        client.health()
    except requests.RequestException as e:
        print(f"Server not reachable: {e}")
        return 1
    failures = seed(client)
    print(f"\nDone with {failures} failure(s)")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
