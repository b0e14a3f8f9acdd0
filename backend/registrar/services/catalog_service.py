"""
Read-only availability queries over courses, rooms, timeslots and faculty.

Nothing here is cached: allocation and enrollment decisions depend on
reading the store as it is at call time, and every result is re-validated
by the writing service anyway.
"""
import logging
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from registrar.errors import NotFoundError
from registrar.models.courses import Course
from registrar.models.classrooms import Classroom
from registrar.models.faculty import Faculty
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.models.timeslots import Timeslot
from registrar.schemas.classrooms import ClassroomBase
from registrar.schemas.courses import CourseBase
from registrar.schemas.faculty import FacultyBase
from registrar.schemas.scheduled_sessions import ScheduledSessionView
from registrar.schemas.timeslots import TimeslotBase

logger = logging.getLogger(__name__)


def session_view_query():
    """Sessions joined with everything a timetable row shows"""
    return (
        select(
            ScheduledSession.schedule_id,
            ScheduledSession.course_code,
            Course.course_name,
            Course.department_name,
            Course.semester_number,
            ScheduledSession.faculty_id,
            (Faculty.first_name + " " + Faculty.last_name).label("faculty_name"),
            ScheduledSession.timeslot_id,
            Timeslot.day_of_week,
            Timeslot.start_time,
            Timeslot.end_time,
            ScheduledSession.room_id,
            Classroom.room_number,
            Classroom.building,
            ScheduledSession.capacity,
            ScheduledSession.seats_taken,
        )
        .join(Course, ScheduledSession.course_code == Course.course_code)
        .join(Faculty, ScheduledSession.faculty_id == Faculty.faculty_id)
        .join(Timeslot, ScheduledSession.timeslot_id == Timeslot.timeslot_id)
        .join(Classroom, ScheduledSession.room_id == Classroom.room_id)
    )


def _views(db: Session, stmt) -> List[ScheduledSessionView]:
    return [ScheduledSessionView.model_validate(r) for r in db.execute(stmt).all()]


def unscheduled_courses(db: Session) -> List[CourseBase]:
    scheduled = select(ScheduledSession.course_code)
    rows = db.scalars(
        select(Course)
        .where(Course.course_code.not_in(scheduled))
        .order_by(Course.course_code)
    ).all()
    logger.debug(f"{len(rows)} unscheduled courses")
    return [CourseBase.model_validate(c) for c in rows]


def all_timeslots(db: Session) -> List[TimeslotBase]:
    rows = db.scalars(select(Timeslot).order_by(Timeslot.timeslot_id)).all()
    return [TimeslotBase.model_validate(t) for t in rows]


def available_faculty(db: Session, timeslot_id: int) -> List[FacultyBase]:
    busy = select(ScheduledSession.faculty_id).where(ScheduledSession.timeslot_id == timeslot_id)
    rows = db.scalars(
        select(Faculty)
        .where(Faculty.faculty_id.not_in(busy))
        .order_by(Faculty.faculty_id)
    ).all()
    logger.debug(f"{len(rows)} faculty free at timeslot {timeslot_id}")
    return [FacultyBase.model_validate(f) for f in rows]


def available_rooms(db: Session, timeslot_id: int) -> List[ClassroomBase]:
    busy = select(ScheduledSession.room_id).where(ScheduledSession.timeslot_id == timeslot_id)
    rows = db.scalars(
        select(Classroom)
        .where(Classroom.room_id.not_in(busy))
        .order_by(Classroom.room_id)
    ).all()
    logger.debug(f"{len(rows)} rooms free at timeslot {timeslot_id}")
    return [ClassroomBase.model_validate(r) for r in rows]


def scheduled_sessions_for(db: Session, degree: str, semester: int) -> List[ScheduledSessionView]:
    stmt = (
        session_view_query()
        .where(Course.department_name == degree, Course.semester_number == semester)
        .order_by(ScheduledSession.schedule_id)
    )
    return _views(db, stmt)


def all_scheduled_sessions(db: Session) -> List[ScheduledSessionView]:
    return _views(db, session_view_query().order_by(ScheduledSession.schedule_id))


def get_scheduled_session(db: Session, schedule_id: int) -> ScheduledSessionView:
    row = db.execute(
        session_view_query().where(ScheduledSession.schedule_id == schedule_id)
    ).first()
    if row is None:
        raise NotFoundError(f"Scheduled session not found: {schedule_id}")
    return ScheduledSessionView.model_validate(row)


def sessions_for_faculty(db: Session, faculty_id: int) -> List[ScheduledSessionView]:
    """A faculty member's timetable"""
    stmt = (
        session_view_query()
        .where(ScheduledSession.faculty_id == faculty_id)
        .order_by(ScheduledSession.timeslot_id)
    )
    return _views(db, stmt)


def courses_for_faculty(db: Session, faculty_id: int) -> List[CourseBase]:
    rows = db.scalars(
        select(Course)
        .join(ScheduledSession, ScheduledSession.course_code == Course.course_code)
        .where(ScheduledSession.faculty_id == faculty_id)
        .distinct()
        .order_by(Course.course_code)
    ).all()
    return [CourseBase.model_validate(c) for c in rows]


def seats_taken(db: Session, schedule_id: int) -> int:
    taken = db.scalar(
        select(ScheduledSession.seats_taken).where(ScheduledSession.schedule_id == schedule_id)
    )
    if taken is None:
        raise NotFoundError(f"Scheduled session not found: {schedule_id}")
    return taken
