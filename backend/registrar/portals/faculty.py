from dataclasses import dataclass
from typing import List
from sqlalchemy.orm import Session

from registrar.crud import faculty as crud_faculty
from registrar.errors import ScopeError
from registrar.schemas.courses import CourseBase
from registrar.schemas.faculty import FacultyBase
from registrar.schemas.marks import MarkBase
from registrar.schemas.scheduled_sessions import ScheduledSessionView
from registrar.schemas.students import StudentBase
from registrar.services import assessment_service, catalog_service, enrollment_service


@dataclass
class FacultyPortal:
    """
    A faculty member's view: their own sessions and the marks of students
    enrolled in courses they teach. The ledger itself trusts its callers,
    so the roster restriction is enforced here.
    """
    db: Session
    faculty_id: int

    def profile(self) -> FacultyBase:
        return crud_faculty.get_faculty(self.db, self.faculty_id)

    def timetable(self) -> List[ScheduledSessionView]:
        return catalog_service.sessions_for_faculty(self.db, self.faculty_id)

    def courses(self) -> List[CourseBase]:
        return catalog_service.courses_for_faculty(self.db, self.faculty_id)

    def _own_course(self, course_code: str):
        if course_code not in {c.course_code for c in self.courses()}:
            raise ScopeError(f"Faculty {self.faculty_id} does not teach {course_code}")

    def _enrolled_student(self, course_code: str, student_id: str):
        if not enrollment_service.is_enrolled_in_course(self.db, student_id, course_code):
            raise ScopeError(f"Student {student_id} is not enrolled in {course_code}")

    def roster(self, course_code: str) -> List[StudentBase]:
        self._own_course(course_code)
        return enrollment_service.enrolled_students(self.db, course_code)

    def enrolled_count(self, course_code: str) -> int:
        self._own_course(course_code)
        return enrollment_service.enrolled_count(self.db, course_code)

    def record_mark(
            self,
            course_code: str,
            student_id: str,
            assignment_name: str,
            total_marks: int,
            obtained_marks: int
    ) -> MarkBase:
        self._own_course(course_code)
        self._enrolled_student(course_code, student_id)
        return assessment_service.record_mark(
            self.db, course_code, student_id, assignment_name, total_marks, obtained_marks
        )

    def update_mark(
            self,
            course_code: str,
            student_id: str,
            assignment_name: str,
            obtained_marks: int
    ) -> MarkBase:
        self._own_course(course_code)
        self._enrolled_student(course_code, student_id)
        return assessment_service.update_mark(
            self.db, course_code, student_id, assignment_name, obtained_marks
        )

    def assignments(self, course_code: str) -> List[str]:
        self._own_course(course_code)
        return assessment_service.assignments_for(self.db, course_code)

    def assignment_marks(self, course_code: str, assignment_name: str) -> List[MarkBase]:
        self._own_course(course_code)
        return assessment_service.marks_for_assignment(self.db, course_code, assignment_name)
