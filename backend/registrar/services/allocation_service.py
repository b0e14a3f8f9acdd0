from __future__ import annotations
import logging
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from registrar.errors import ConflictError, NotFoundError, RegistrarError
from registrar.models.classrooms import Classroom
from registrar.models.courses import Course
from registrar.models.enrollments import Enrollment
from registrar.models.faculty import Faculty
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.models.timeslots import Timeslot
from registrar.schemas.scheduled_sessions import ScheduledSessionView
from registrar.services.catalog_service import get_scheduled_session

logger = logging.getLogger(__name__)


def _require(db: Session, column, value, label: str):
    if db.scalar(select(column).where(column == value)) is None:
        raise NotFoundError(f"{label} not found: {value}")


def _check_free(db: Session, course_code: str, faculty_id: int, timeslot_id: int, room_id: str):
    taken = db.scalar(
        select(ScheduledSession.schedule_id).where(ScheduledSession.course_code == course_code)
    )
    if taken is not None:
        raise ConflictError(f"Course {course_code} is already scheduled as session {taken}")

    taken = db.scalar(
        select(ScheduledSession.schedule_id).where(
            ScheduledSession.faculty_id == faculty_id,
            ScheduledSession.timeslot_id == timeslot_id,
        )
    )
    if taken is not None:
        raise ConflictError(f"Faculty {faculty_id} already teaches session {taken} at timeslot {timeslot_id}")

    taken = db.scalar(
        select(ScheduledSession.schedule_id).where(
            ScheduledSession.room_id == room_id,
            ScheduledSession.timeslot_id == timeslot_id,
        )
    )
    if taken is not None:
        raise ConflictError(f"Room {room_id} is already booked by session {taken} at timeslot {timeslot_id}")


def allocate(
        db: Session,
        course_code: str,
        faculty_id: int,
        timeslot_id: int,
        room_id: str
) -> ScheduledSessionView:
    """
    Bind a course to a faculty member, timeslot and room.

    Every precondition is re-checked here instead of trusting the candidate
    lists the caller picked from. The unique constraints on
    scheduled_sessions catch any allocation that races in between the check
    and the insert; that surfaces as ConflictError with nothing written.
    """
    try:
        _require(db, Course.course_code, course_code, "Course")
        _require(db, Faculty.faculty_id, faculty_id, "Faculty")
        _require(db, Timeslot.timeslot_id, timeslot_id, "Timeslot")
        _require(db, Classroom.room_id, room_id, "Classroom")
        _check_free(db, course_code, faculty_id, timeslot_id, room_id)

        max_students = db.scalar(
            select(Course.max_students).where(Course.course_code == course_code)
        )
        session = ScheduledSession(
            course_code=course_code,
            faculty_id=faculty_id,
            timeslot_id=timeslot_id,
            room_id=room_id,
            capacity=max_students,
            seats_taken=0,
        )
        db.add(session)
        db.flush()
        schedule_id = session.schedule_id
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Allocation of {course_code} lost a race: {e.orig}")
        raise ConflictError(
            f"Course {course_code}, faculty {faculty_id} or room {room_id} "
            f"was booked concurrently at timeslot {timeslot_id}"
        )
    except RegistrarError as e:
        db.rollback()
        logger.warning(f"Allocation of {course_code} rejected: {e}")
        raise

    logger.info(
        f"Scheduled {course_code} as session {schedule_id} "
        f"(faculty={faculty_id}, timeslot={timeslot_id}, room={room_id})"
    )
    return get_scheduled_session(db, schedule_id)


def _locked_session(schedule_id: int):
    # row lock holds off enrollments until the cascade commits; SQLite serialises writers anyway
    return (
        select(ScheduledSession.schedule_id)
        .where(ScheduledSession.schedule_id == schedule_id)
        .with_for_update()
    )


def deallocate(db: Session, schedule_id: int) -> int:
    """
    Remove a session together with every enrollment in it, as one unit.
    Returns how many enrollments were removed.
    """
    try:
        exists = db.scalar(_locked_session(schedule_id))
        if exists is None:
            raise NotFoundError(f"Scheduled session not found: {schedule_id}")

        dropped = db.execute(
            delete(Enrollment)
            .where(Enrollment.schedule_id == schedule_id)
        ).rowcount
        removed = db.execute(
            delete(ScheduledSession)
            .where(ScheduledSession.schedule_id == schedule_id)
        ).rowcount
        if removed == 0:
            raise NotFoundError(f"Scheduled session not found: {schedule_id}")
        db.commit()
    except IntegrityError as e:
        # an enrollment slipped in between the two deletes
        db.rollback()
        logger.warning(f"Removal of session {schedule_id} interrupted: {e.orig}")
        raise ConflictError(f"Session {schedule_id} changed while it was being removed")
    except RegistrarError:
        db.rollback()
        raise

    logger.info(f"Removed session {schedule_id} and {dropped} enrollment(s)")
    return dropped
