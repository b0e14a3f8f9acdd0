from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy.orm import Session

from registrar.crud import students as crud_students
from registrar.schemas.courses import CourseBase
from registrar.schemas.marks import StudentMark
from registrar.schemas.scheduled_sessions import ScheduledSessionView
from registrar.schemas.students import StudentBase
from registrar.services import assessment_service, enrollment_service


@dataclass
class StudentPortal:
    """Everything a signed-in student may do, bound to their own id"""
    db: Session
    student_id: str

    def profile(self) -> StudentBase:
        return crud_students.get_student(self.db, self.student_id)

    def offerings(self) -> List[ScheduledSessionView]:
        return enrollment_service.eligible_offerings(self.db, self.student_id)

    def enroll(self, schedule_id: int) -> ScheduledSessionView:
        return enrollment_service.enroll(self.db, self.student_id, schedule_id)

    def drop(self, schedule_id: int):
        enrollment_service.drop(self.db, self.student_id, schedule_id)

    def timetable(self) -> List[ScheduledSessionView]:
        return enrollment_service.enrolled_sessions(self.db, self.student_id)

    def courses(self) -> List[CourseBase]:
        return enrollment_service.student_courses(self.db, self.student_id)

    def marks(self, course_code: Optional[str] = None) -> List[StudentMark]:
        return assessment_service.marks_for(self.db, self.student_id, course_code)
