"""
REST API for the CCRM platform using FastAPI.
"""

import logging
import threading
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..core.entities import Course, CourseBuilder, Enrollment, Instructor, Student, new_student
from ..core.enums import Grade, Semester
from ..core.exceptions import (
    CCRMException, CreditLimitExceededError, DuplicateEnrollmentError, ValidationError
)
from ..persistence import CourseRepository, StudentRepository
from ..services import EnrollmentService, TranscriptService

logger = logging.getLogger(__name__)


# Pydantic models for API
class StudentCreate(BaseModel):
    student_id: str = Field(..., min_length=1, max_length=20)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=r'^[^@]+@[^@]+\.[^@]+$')
    reg_no: str = Field(..., min_length=1, max_length=20)


class StudentUpdate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)


class StudentResponse(BaseModel):
    id: str
    full_name: str
    email: str
    reg_no: str
    active: bool
    gpa: float
    created_at: datetime
    updated_at: datetime
    version: int


class InstructorCreate(BaseModel):
    instructor_id: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=r'^[^@]+@[^@]+\.[^@]+$')
    department: str = Field(..., min_length=1, max_length=100)


class CourseCreate(BaseModel):
    code: str = Field(..., min_length=6, max_length=6)
    title: str = Field(..., min_length=1, max_length=200)
    credits: int = Field(..., ge=1, le=6)
    semester: str = Field(..., pattern=r'(?i)^(spring|summer|fall)$')
    department: str = Field(..., min_length=1, max_length=100)
    instructor: Optional[InstructorCreate] = None


class CourseUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class CourseResponse(BaseModel):
    code: str
    title: str
    credits: int
    semester: str
    department: str
    instructor_id: Optional[str] = None
    instructor: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime
    version: int


class EnrollmentCreate(BaseModel):
    student_id: str = Field(..., min_length=1)
    course_code: str = Field(..., min_length=6, max_length=6)


class GradeUpdate(BaseModel):
    grade: str = Field(..., pattern=r'^[SABCDFI]$')


class EnrollmentResponse(BaseModel):
    student_id: str
    course_code: str
    credits: int
    grade: str
    grade_description: str
    enrolled_on: date


class GpaResponse(BaseModel):
    student_id: str
    gpa: float


class TranscriptResponse(BaseModel):
    student_id: str
    gpa: float
    grades: List[str]
    transcript: str


class CreditDistributionResponse(BaseModel):
    distribution: Dict[str, int]


class StatisticsResponse(BaseModel):
    students: int
    courses: int
    enrollment: Dict[str, int]


class RecordsRestAPI:
    """REST API exposing the record stores, enrollment engine and reports."""

    def __init__(self, student_repository: StudentRepository, course_repository: CourseRepository,
                 enrollment_service: EnrollmentService, transcript_service: TranscriptService):
        self._student_repo = student_repository
        self._course_repo = course_repository
        self._enrollment_service = enrollment_service
        self._transcript_service = transcript_service
        self._instructors: Dict[str, Instructor] = {}

        self._lock = threading.RLock()

        self.app = FastAPI(
            title="CCRM Records API",
            description="Campus Course & Records Manager",
            version="1.0.0",
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "CCRM Records API",
                "version": "1.0.0",
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def create_student(student_data: StudentCreate):
            """Create a new student."""
            try:
                with self._lock:
                    student = new_student(
                        student_data.student_id,
                        student_data.full_name,
                        student_data.email,
                        student_data.reg_no
                    )
                    self._student_repo.add(student)
                    return self._student_to_response(student)
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/students", response_model=List[StudentResponse])
        async def list_students(skip: int = 0, limit: int = 100, active: Optional[bool] = None):
            """List students, optionally only active or inactive ones."""
            with self._lock:
                students = self._student_repo.list()
                if active is not None:
                    students = [s for s in students if s.is_active == active]
                students = students[skip:skip + limit]
                return [self._student_to_response(student) for student in students]

        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        async def get_student(student_id: str):
            """Get a student by ID."""
            with self._lock:
                return self._student_to_response(self._get_student(student_id))

        @self.app.patch("/students/{student_id}", response_model=StudentResponse)
        async def update_student(student_id: str, update: StudentUpdate):
            """Rename a student."""
            with self._lock:
                student = self._get_student(student_id)
                self._student_repo.update(student_id, update.full_name)
                return self._student_to_response(student)

        @self.app.post("/students/{student_id}/deactivate", response_model=StudentResponse)
        async def deactivate_student(student_id: str):
            """Deactivate a student."""
            with self._lock:
                student = self._get_student(student_id)
                self._student_repo.deactivate(student_id)
                return self._student_to_response(student)

        @self.app.get("/students/{student_id}/enrollments", response_model=List[EnrollmentResponse])
        async def get_student_enrollments(student_id: str):
            """Get student enrollments."""
            with self._lock:
                student = self._get_student(student_id)
                return [self._enrollment_to_response(e) for e in student.enrollments]

        @self.app.get("/students/{student_id}/gpa", response_model=GpaResponse)
        async def get_student_gpa(student_id: str):
            """Get a student's GPA."""
            with self._lock:
                student = self._get_student(student_id)
                return GpaResponse(student_id=student.id,
                                   gpa=self._transcript_service.compute_gpa(student))

        @self.app.get("/students/{student_id}/transcript", response_model=TranscriptResponse)
        async def get_student_transcript(student_id: str):
            """Get a student's transcript."""
            with self._lock:
                student = self._get_student(student_id)
                return TranscriptResponse(
                    student_id=student.id,
                    gpa=self._transcript_service.compute_gpa(student),
                    grades=[g.name for g in self._transcript_service.grades(student)],
                    transcript=self._transcript_service.generate_transcript(student)
                )

        # Course endpoints
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(course_data: CourseCreate):
            """Create a new course."""
            try:
                with self._lock:
                    builder = (CourseBuilder()
                               .code(course_data.code)
                               .title(course_data.title)
                               .credits(course_data.credits)
                               .semester(Semester.from_name(course_data.semester))
                               .department(course_data.department))
                    if course_data.instructor:
                        builder.instructor(self._get_or_create_instructor(course_data.instructor))
                    course = builder.build()
                    self._course_repo.add(course)
                    return self._course_to_response(course)
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/courses", response_model=List[CourseResponse])
        async def list_courses(department: Optional[str] = None, semester: Optional[str] = None,
                               instructor_id: Optional[str] = None, sort: Optional[str] = None,
                               skip: int = 0, limit: int = 100):
            """List courses, filtered by department, semester or instructor."""
            with self._lock:
                if sort == "title":
                    courses = self._course_repo.sorted_by_title()
                else:
                    courses = self._course_repo.list()
                if department is not None:
                    matches = self._course_repo.search_by_department(department)
                    courses = [c for c in courses if c in matches]
                if semester is not None:
                    try:
                        matches = self._course_repo.search_by_semester(Semester.from_name(semester))
                    except ValueError as e:
                        raise HTTPException(status_code=400, detail=str(e))
                    courses = [c for c in courses if c in matches]
                if instructor_id is not None:
                    instructor = self._instructors.get(instructor_id)
                    matches = self._course_repo.search_by_instructor(instructor) if instructor else []
                    courses = [c for c in courses if c in matches]
                courses = courses[skip:skip + limit]
                return [self._course_to_response(course) for course in courses]

        @self.app.get("/courses/{course_code}", response_model=CourseResponse)
        async def get_course(course_code: str):
            """Get a course by code."""
            with self._lock:
                return self._course_to_response(self._get_course(course_code))

        @self.app.patch("/courses/{course_code}", response_model=CourseResponse)
        async def update_course(course_code: str, update: CourseUpdate):
            """Retitle a course."""
            with self._lock:
                course = self._get_course(course_code)
                self._course_repo.update(course_code, update.title)
                return self._course_to_response(course)

        @self.app.post("/courses/{course_code}/deactivate", response_model=CourseResponse)
        async def deactivate_course(course_code: str):
            """Deactivate a course."""
            with self._lock:
                course = self._get_course(course_code)
                self._course_repo.deactivate(course_code)
                return self._course_to_response(course)

        # Enrollment endpoints
        @self.app.post("/enrollments", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
        async def enroll_student(enrollment_data: EnrollmentCreate):
            """Enroll a student in a course."""
            with self._lock:
                student = self._get_student(enrollment_data.student_id)
                course = self._get_course(enrollment_data.course_code)
                try:
                    enrollment = self._enrollment_service.enroll(student, course)
                except DuplicateEnrollmentError as e:
                    raise HTTPException(status_code=409, detail=str(e))
                except CreditLimitExceededError as e:
                    raise HTTPException(status_code=422, detail=str(e))
                return self._enrollment_to_response(enrollment)

        @self.app.delete("/enrollments/{student_id}/{course_code}", status_code=status.HTTP_204_NO_CONTENT)
        async def unenroll_student(student_id: str, course_code: str):
            """Remove an enrollment; unknown enrollments are ignored."""
            with self._lock:
                self._enrollment_service.unenroll(student_id, course_code)
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        @self.app.put("/enrollments/{student_id}/{course_code}/grade", response_model=EnrollmentResponse)
        async def record_grade(student_id: str, course_code: str, grade_data: GradeUpdate):
            """Record a grade for an enrollment."""
            with self._lock:
                self._enrollment_service.record_grade(student_id, course_code, Grade[grade_data.grade])
                enrollment = self._enrollment_service.get_enrollment(student_id, course_code)
                if enrollment is None:
                    raise HTTPException(status_code=404, detail="Enrollment not found")
                return self._enrollment_to_response(enrollment)

        # Report endpoints
        @self.app.get("/reports/credit-distribution", response_model=CreditDistributionResponse)
        async def get_credit_distribution():
            """Get the number of active courses per credit count."""
            with self._lock:
                distribution = self._transcript_service.credit_distribution()
                return CreditDistributionResponse(
                    distribution={str(credits): count for credits, count in distribution.items()}
                )

        @self.app.get("/statistics", response_model=StatisticsResponse)
        async def get_statistics():
            """Get system statistics."""
            with self._lock:
                return StatisticsResponse(
                    students=self._student_repo.count(),
                    courses=self._course_repo.count(),
                    enrollment=self._enrollment_service.get_statistics()
                )

        @self.app.exception_handler(CCRMException)
        async def records_error_handler(request, exc: CCRMException):
            logger.error("Unhandled records error on %s: %s", request.url.path, exc)
            return JSONResponse(status_code=500, content={"detail": f"Internal error: {exc.message}"})

    def _get_student(self, student_id: str) -> Student:
        student = self._student_repo.find_by_id(student_id)
        if not student:
            raise HTTPException(status_code=404, detail="Student not found")
        return student

    def _get_course(self, course_code: str) -> Course:
        course = self._course_repo.find_by_id(course_code)
        if not course:
            raise HTTPException(status_code=404, detail="Course not found")
        return course

    def _get_or_create_instructor(self, data: InstructorCreate) -> Instructor:
        instructor = self._instructors.get(data.instructor_id)
        if instructor is None:
            instructor = Instructor(data.instructor_id, data.full_name, data.email, data.department)
            self._instructors[data.instructor_id] = instructor
        return instructor

    def _student_to_response(self, student: Student) -> StudentResponse:
        """Convert Student entity to response model."""
        return StudentResponse(
            id=student.id,
            full_name=student.full_name,
            email=student.email,
            reg_no=student.reg_no,
            active=student.is_active,
            gpa=self._transcript_service.compute_gpa(student),
            created_at=student.created_at,
            updated_at=student.updated_at,
            version=student.version
        )

    def _course_to_response(self, course: Course) -> CourseResponse:
        """Convert Course entity to response model."""
        return CourseResponse(
            code=course.code.value,
            title=course.title,
            credits=course.credits,
            semester=course.semester.display_name,
            department=course.department,
            instructor_id=course.instructor.id if course.instructor else None,
            instructor=course.instructor.full_name if course.instructor else None,
            active=course.is_active,
            created_at=course.created_at,
            updated_at=course.updated_at,
            version=course.version
        )

    def _enrollment_to_response(self, enrollment: Enrollment) -> EnrollmentResponse:
        """Convert Enrollment to response model."""
        return EnrollmentResponse(
            student_id=enrollment.student.id,
            course_code=enrollment.course.code.value,
            credits=enrollment.course.credits,
            grade=enrollment.grade.name,
            grade_description=enrollment.grade.description,
            enrolled_on=enrollment.enrolled_on
        )
