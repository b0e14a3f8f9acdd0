from dataclasses import dataclass
from typing import List
from sqlalchemy.orm import Session

from registrar.crud import classrooms as crud_classrooms
from registrar.crud import courses as crud_courses
from registrar.crud import faculty as crud_faculty
from registrar.crud import students as crud_students
from registrar.crud import timeslots as crud_timeslots
from registrar.schemas.classrooms import ClassroomBase
from registrar.schemas.courses import CourseBase
from registrar.schemas.faculty import FacultyBase
from registrar.schemas.scheduled_sessions import ScheduledSessionView
from registrar.schemas.students import StudentBase
from registrar.schemas.timeslots import TimeslotBase, TimeslotCreate
from registrar.services import allocation_service, catalog_service


@dataclass
class AdminPortal:
    """Catalog administration and offering allocation"""
    db: Session

    # catalog
    def add_course(self, course: CourseBase) -> CourseBase:
        return crud_courses.create_course(self.db, course.model_dump())

    def remove_course(self, course_code: str):
        crud_courses.delete_course(self.db, course_code)

    def add_classroom(self, classroom: ClassroomBase) -> ClassroomBase:
        return crud_classrooms.create_classroom(self.db, classroom.model_dump())

    def remove_classroom(self, room_id: str):
        crud_classrooms.delete_classroom(self.db, room_id)

    def add_timeslot(self, timeslot: TimeslotCreate) -> TimeslotBase:
        return crud_timeslots.create_timeslot(self.db, timeslot.model_dump())

    def remove_timeslot(self, timeslot_id: int):
        crud_timeslots.delete_timeslot(self.db, timeslot_id)

    def add_faculty(self, faculty_data: dict) -> FacultyBase:
        return crud_faculty.create_faculty(self.db, faculty_data)

    def remove_faculty(self, faculty_id: int):
        crud_faculty.delete_faculty(self.db, faculty_id)

    def add_student(self, student: StudentBase) -> StudentBase:
        return crud_students.create_student(self.db, student.model_dump())

    def remove_student(self, student_id: str):
        crud_students.delete_student(self.db, student_id)

    # allocation candidates
    def unscheduled_courses(self) -> List[CourseBase]:
        return catalog_service.unscheduled_courses(self.db)

    def timeslots(self) -> List[TimeslotBase]:
        return catalog_service.all_timeslots(self.db)

    def free_faculty(self, timeslot_id: int) -> List[FacultyBase]:
        return catalog_service.available_faculty(self.db, timeslot_id)

    def free_rooms(self, timeslot_id: int) -> List[ClassroomBase]:
        return catalog_service.available_rooms(self.db, timeslot_id)

    # offerings
    def allocate(self, course_code: str, faculty_id: int, timeslot_id: int, room_id: str) -> ScheduledSessionView:
        return allocation_service.allocate(self.db, course_code, faculty_id, timeslot_id, room_id)

    def deallocate(self, schedule_id: int) -> int:
        return allocation_service.deallocate(self.db, schedule_id)

    def schedules(self) -> List[ScheduledSessionView]:
        return catalog_service.all_scheduled_sessions(self.db)
