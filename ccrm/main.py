"""
Main entry point for the CCRM platform.
"""

import argparse
import logging
from typing import List, Optional

from .api.rest_api import RecordsRestAPI
from .config import RecordsConfig
from .core.entities import CourseBuilder, Instructor, new_student
from .core.enums import Grade, Semester
from .core.exceptions import CCRMException, DuplicateEnrollmentError
from .persistence import (
    BackupService, CourseRepository, ImportExportService, StudentRepository, list_files_recursively
)
from .services import EnrollmentService, TranscriptService

logger = logging.getLogger(__name__)

STUDENTS_FILE = "students.csv"
COURSES_FILE = "courses.csv"


class RecordsPlatform:
    """Wires the record stores, enrollment engine, reports and file services."""

    def __init__(self, config: Optional[RecordsConfig] = None):
        self._config = config or RecordsConfig()
        self.students = StudentRepository()
        self.courses = CourseRepository()
        self.enrollments = EnrollmentService(max_credits=self._config.max_credits)
        self.transcripts = TranscriptService(self.courses)
        self.io = ImportExportService(self._config)
        self.backups = BackupService(self._config)
        self._rest_api: Optional[RecordsRestAPI] = None

    @property
    def config(self) -> RecordsConfig:
        return self._config

    @property
    def rest_api(self) -> RecordsRestAPI:
        if self._rest_api is None:
            self._rest_api = RecordsRestAPI(self.students, self.courses, self.enrollments, self.transcripts)
        return self._rest_api

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """Run the REST server in the foreground."""
        import uvicorn

        host = host or self._config.rest_host
        port = port or self._config.rest_port
        print(f"✓ REST server starting on {host}:{port}")
        uvicorn.run(self.rest_api.app, host=host, port=port, log_level=self._config.log_level.lower())

    def create_sample_data(self):
        """Create sample students, an instructor and courses."""
        instructor = Instructor("I001", "Ada Lovelace", "ada@university.edu", "CSE")
        self.students.add(new_student("S001", "John Doe", "john@email.com", "REG001"))
        self.students.add(new_student("S002", "Jane Roe", "jane@email.com", "REG002"))
        self.courses.add(CourseBuilder().code("CS0101").title("Intro CS").credits(3)
                         .instructor(instructor).semester(Semester.FALL).department("CSE").build())
        self.courses.add(CourseBuilder().code("MA0201").title("Linear Algebra").credits(4)
                         .semester(Semester.SPRING).department("MATH").build())
        self.courses.add(CourseBuilder().code("PH0110").title("Physics I").credits(4)
                         .semester(Semester.FALL).department("PHY").build())

    def run_demo(self):
        """Enroll and grade the sample student and print the transcript."""
        self.create_sample_data()
        student = self.students.find_by_id("S001")
        course = self.courses.find_by_id("CS0101")

        print("\n=== Enrollment Demo ===")
        self.enrollments.enroll(student, course)
        try:
            self.enrollments.enroll(student, course)
        except DuplicateEnrollmentError as e:
            print(f"Rejected as expected: {e}")
        self.enrollments.record_grade("S001", "CS0101", Grade.A)
        print(self.transcripts.generate_transcript(student))

        print("\n=== Credit Distribution ===")
        self.print_credit_distribution()
        print("\n✓ Demo completed")

    def print_credit_distribution(self):
        for credits, count in self.transcripts.credit_distribution().items():
            print(f"{credits} credits: {count} courses")

    def export_all(self):
        self.io.export_students(STUDENTS_FILE, self.students.list())
        self.io.export_courses(COURSES_FILE, self.courses.list())

    def backup(self):
        """Create a backup and list its contents."""
        folder = self.backups.create_backup()
        for depth, path in list_files_recursively(self.backups.backup_root):
            print("  " * depth + path.name)
        return folder


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Campus Course & Records Manager")
    parser.add_argument("--config", type=str, help="Configuration file path")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("demo", help="Run the enrollment demo")
    serve = subparsers.add_parser("serve", help="Start the REST server")
    serve.add_argument("--host", type=str, default=None, help="REST server host")
    serve.add_argument("--port", type=int, default=None, help="REST server port")
    subparsers.add_parser("report", help="Print the credit distribution of the sample data")
    subparsers.add_parser("export", help="Export the sample data to the data folder")
    subparsers.add_parser("import", help=f"Import students from {STUDENTS_FILE} in the data folder")
    subparsers.add_parser("backup", help="Back up the exports in the data folder")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = RecordsConfig.load(args.config)
    except CCRMException as e:
        print(f"Configuration error: {e}")
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    config.ensure_data_folder()
    platform = RecordsPlatform(config)

    try:
        if args.command == "serve":
            platform.start_rest_server(args.host, args.port)
        elif args.command == "report":
            platform.create_sample_data()
            platform.print_credit_distribution()
        elif args.command == "export":
            platform.create_sample_data()
            platform.export_all()
            print(f"✓ Exported to {config.data_folder}")
        elif args.command == "import":
            imported = platform.io.import_students(STUDENTS_FILE, platform.students)
            for student in imported:
                print(f"Imported: {student}")
        elif args.command == "backup":
            folder = platform.backup()
            print(f"✓ Backup created at {folder}")
        else:
            platform.run_demo()
    except CCRMException as e:
        logger.error("Command failed: %s", e)
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nShutting down...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
