import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from registrar.errors import ConflictError, DuplicateError, NotFoundError, ValidationError
from registrar.models.courses import Course
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.schemas.courses import CourseBase
from typing import List

logger = logging.getLogger(__name__)

def create_course(db: Session, course_data: dict) -> CourseBase:
    if course_data.get("max_students", 0) < 0:
        raise ValidationError("max_students must not be negative")
    if db.scalar(select(Course.course_code).where(Course.course_code == course_data.get("course_code"))):
        raise DuplicateError(f"Course {course_data.get('course_code')} already exists")
    course = Course(**course_data)
    db.add(course)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Course {course_data.get('course_code')} already exists")
    logger.info(f"Created course {course.course_code}")
    return CourseBase.model_validate(course)

def get_course(db: Session, course_code: str) -> CourseBase:
    course = db.get(Course, course_code)
    if not course:
        raise NotFoundError(f"Course not found: {course_code}")
    return CourseBase.model_validate(course)

def get_all_courses(db: Session) -> List[CourseBase]:
    rows = db.scalars(select(Course).order_by(Course.course_code)).all()
    return [CourseBase.model_validate(c) for c in rows]

def get_courses_for_department_semester(
    db: Session,
    department_name: str,
    semester_number: int
) -> List[CourseBase]:
    rows = db.scalars(
        select(Course)
        .where(
            Course.department_name == department_name,
            Course.semester_number == semester_number
        )
        .order_by(Course.course_code)
    ).all()
    return [CourseBase.model_validate(c) for c in rows]

def delete_course(db: Session, course_code: str):
    """
    Delete a course. A course that is still scheduled cannot be removed;
    deallocate its session first.
    """
    course = db.get(Course, course_code)
    if not course:
        raise NotFoundError(f"Course not found: {course_code}")
    scheduled = db.scalar(
        select(ScheduledSession.schedule_id).where(ScheduledSession.course_code == course_code)
    )
    if scheduled is not None:
        db.rollback()
        raise ConflictError(f"Course {course_code} is scheduled as session {scheduled}")
    db.delete(course)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Course {course_code} is still referenced")
    logger.info(f"Deleted course {course_code}")
