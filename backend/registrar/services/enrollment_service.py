from __future__ import annotations
import logging
from typing import List, Optional
from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from registrar.errors import (
    CapacityError,
    ClashError,
    DuplicateError,
    NotFoundError,
    RegistrarError,
)
from registrar.models.courses import Course
from registrar.models.enrollments import Enrollment
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.models.students import Student
from registrar.schemas.courses import CourseBase
from registrar.schemas.scheduled_sessions import ScheduledSessionView
from registrar.schemas.students import StudentBase
from registrar.services import catalog_service

logger = logging.getLogger(__name__)


def _session_timeslot(db: Session, schedule_id: int) -> int:
    timeslot_id = db.scalar(
        select(ScheduledSession.timeslot_id).where(ScheduledSession.schedule_id == schedule_id)
    )
    if timeslot_id is None:
        raise NotFoundError(f"Scheduled session not found: {schedule_id}")
    return timeslot_id


def _student_exists(db: Session, student_id: str) -> bool:
    return db.scalar(select(Student.student_id).where(Student.student_id == student_id)) is not None


def _is_enrolled(db: Session, student_id: str, schedule_id: int) -> bool:
    return db.scalar(
        select(Enrollment.schedule_id).where(
            Enrollment.student_id == student_id,
            Enrollment.schedule_id == schedule_id,
        )
    ) is not None


def _clashing_session(db: Session, student_id: str, timeslot_id: int):
    return db.scalar(
        select(Enrollment.schedule_id).where(
            Enrollment.student_id == student_id,
            Enrollment.timeslot_id == timeslot_id,
        )
    )


def _enrollment_error(db: Session, student_id: str, schedule_id: int, timeslot_id: int) -> Optional[RegistrarError]:
    """Duplicate before clash; a row holding the slot for this very session is a duplicate."""
    if _is_enrolled(db, student_id, schedule_id):
        return DuplicateError(f"Student {student_id} is already enrolled in session {schedule_id}")
    clash = _clashing_session(db, student_id, timeslot_id)
    if clash == schedule_id:
        return DuplicateError(f"Student {student_id} is already enrolled in session {schedule_id}")
    if clash is not None:
        return ClashError(f"Student {student_id} already has session {clash} at timeslot {timeslot_id}")
    return None


def _claim_seat(db: Session, schedule_id: int) -> bool:
    """Take one seat if any is left. The guarded UPDATE is atomic in the store."""
    result = db.execute(
        update(ScheduledSession)
        .where(
            ScheduledSession.schedule_id == schedule_id,
            ScheduledSession.seats_taken < ScheduledSession.capacity,
        )
        .values(seats_taken=ScheduledSession.seats_taken + 1)
    )
    return result.rowcount == 1


def _release_seat(db: Session, schedule_id: int):
    db.execute(
        update(ScheduledSession)
        .where(
            ScheduledSession.schedule_id == schedule_id,
            ScheduledSession.seats_taken > 0,
        )
        .values(seats_taken=ScheduledSession.seats_taken - 1)
    )


def _explain_rejected_insert(db: Session, student_id: str, schedule_id: int, timeslot_id: int) -> RegistrarError:
    # called after rollback: find out which constraint a concurrent request beat us to
    try:
        error = _enrollment_error(db, student_id, schedule_id, timeslot_id)
        if error is not None:
            return error
        return NotFoundError(f"Scheduled session not found: {schedule_id}")
    finally:
        db.rollback()


def enroll(db: Session, student_id: str, schedule_id: int) -> ScheduledSessionView:
    """
    Enroll a student in a scheduled session.

    Checks run in order: the session (and student) must exist, the pair must
    be new, the student must be free at the session's timeslot, and a seat
    must be left. The seat is claimed with a conditional update so racing
    enrollments can never overfill a session; the duplicate and clash rules
    are backed by the enrollments primary key and its
    (student_id, timeslot_id) unique constraint.
    """
    timeslot_id = None
    try:
        timeslot_id = _session_timeslot(db, schedule_id)
        if not _student_exists(db, student_id):
            raise NotFoundError(f"Student not found: {student_id}")

        error = _enrollment_error(db, student_id, schedule_id, timeslot_id)
        if error is not None:
            raise error

        if not _claim_seat(db, schedule_id):
            # session may have been removed since we looked it up
            _session_timeslot(db, schedule_id)
            raise CapacityError(f"Session {schedule_id} is full")

        db.add(Enrollment(student_id=student_id, schedule_id=schedule_id, timeslot_id=timeslot_id))
        db.flush()
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Enrollment of {student_id} in {schedule_id} hit a constraint: {e.orig}")
        raise _explain_rejected_insert(db, student_id, schedule_id, timeslot_id)
    except RegistrarError as e:
        db.rollback()
        logger.warning(f"Enrollment of {student_id} in {schedule_id} rejected: {e}")
        raise

    logger.info(f"Enrolled {student_id} in session {schedule_id}")
    return catalog_service.get_scheduled_session(db, schedule_id)


def drop(db: Session, student_id: str, schedule_id: int):
    """Remove one enrollment and give its seat back. Marks are left alone."""
    try:
        removed = db.execute(
            delete(Enrollment)
            .where(
                Enrollment.student_id == student_id,
                Enrollment.schedule_id == schedule_id,
            )
        ).rowcount
        if removed == 0:
            raise NotFoundError(f"Student {student_id} is not enrolled in session {schedule_id}")
        _release_seat(db, schedule_id)
        db.commit()
    except RegistrarError:
        db.rollback()
        raise

    logger.info(f"Dropped {student_id} from session {schedule_id}")


def eligible_offerings(db: Session, student_id: str) -> List[ScheduledSessionView]:
    """
    Sessions of the student's own degree and semester. Advisory only:
    enroll() re-validates everything on its own.
    """
    student = db.execute(
        select(Student.degree, Student.semester_number).where(Student.student_id == student_id)
    ).first()
    if student is None:
        raise NotFoundError(f"Student not found: {student_id}")
    return catalog_service.scheduled_sessions_for(db, student.degree, student.semester_number)


def enrolled_sessions(db: Session, student_id: str) -> List[ScheduledSessionView]:
    """The student's timetable"""
    stmt = (
        catalog_service.session_view_query()
        .join(Enrollment, Enrollment.schedule_id == ScheduledSession.schedule_id)
        .where(Enrollment.student_id == student_id)
        .order_by(ScheduledSession.timeslot_id)
    )
    return [ScheduledSessionView.model_validate(r) for r in db.execute(stmt).all()]


def student_courses(db: Session, student_id: str) -> List[CourseBase]:
    rows = db.scalars(
        select(Course)
        .join(ScheduledSession, ScheduledSession.course_code == Course.course_code)
        .join(Enrollment, Enrollment.schedule_id == ScheduledSession.schedule_id)
        .where(Enrollment.student_id == student_id)
        .distinct()
        .order_by(Course.course_code)
    ).all()
    return [CourseBase.model_validate(c) for c in rows]


def enrolled_students(db: Session, course_code: str) -> List[StudentBase]:
    """Roster of a course across its session"""
    rows = db.scalars(
        select(Student)
        .join(Enrollment, Enrollment.student_id == Student.student_id)
        .join(ScheduledSession, ScheduledSession.schedule_id == Enrollment.schedule_id)
        .where(ScheduledSession.course_code == course_code)
        .distinct()
        .order_by(Student.student_id)
    ).all()
    return [StudentBase.model_validate(s) for s in rows]


def is_enrolled_in_course(db: Session, student_id: str, course_code: str) -> bool:
    return db.scalar(
        select(Enrollment.schedule_id)
        .join(ScheduledSession, ScheduledSession.schedule_id == Enrollment.schedule_id)
        .where(
            Enrollment.student_id == student_id,
            ScheduledSession.course_code == course_code,
        )
    ) is not None


def enrolled_count(db: Session, course_code: str) -> int:
    return db.scalar(
        select(func.count(func.distinct(Enrollment.student_id)))
        .join(ScheduledSession, ScheduledSession.schedule_id == Enrollment.schedule_id)
        .where(ScheduledSession.course_code == course_code)
    )
