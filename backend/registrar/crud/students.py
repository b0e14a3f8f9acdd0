import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from registrar.errors import ConflictError, DuplicateError, NotFoundError
from registrar.models.students import Student
from registrar.models.enrollments import Enrollment
from registrar.schemas.students import StudentBase
from typing import List

logger = logging.getLogger(__name__)

def create_student(db: Session, student_data: dict) -> StudentBase:
    if db.scalar(select(Student.student_id).where(Student.student_id == student_data.get("student_id"))):
        raise DuplicateError(f"Student {student_data.get('student_id')} already exists")
    student = Student(**student_data)
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Student {student_data.get('student_id')} already exists")
    logger.info(f"Created student {student.student_id}")
    return StudentBase.model_validate(student)

def get_student(db: Session, student_id: str) -> StudentBase:
    student = db.get(Student, student_id)
    if not student:
        raise NotFoundError(f"Student not found: {student_id}")
    return StudentBase.model_validate(student)

def get_all_students(db: Session) -> List[StudentBase]:
    rows = db.scalars(select(Student).order_by(Student.student_id)).all()
    return [StudentBase.model_validate(s) for s in rows]

def delete_student(db: Session, student_id: str):
    """Students holding enrollments must drop them first; marks also block removal."""
    student = db.get(Student, student_id)
    if not student:
        raise NotFoundError(f"Student not found: {student_id}")
    enrolled = db.scalar(
        select(Enrollment.schedule_id).where(Enrollment.student_id == student_id)
    )
    if enrolled is not None:
        db.rollback()
        raise ConflictError(f"Student {student_id} is enrolled in session {enrolled}")
    db.delete(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Student {student_id} still has marks on record")
    logger.info(f"Deleted student {student_id}")
