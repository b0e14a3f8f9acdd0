import logging
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from registrar.errors import ConflictError, DuplicateError, NotFoundError
from registrar.models.faculty import Faculty
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.schemas.faculty import FacultyBase
from typing import List

logger = logging.getLogger(__name__)

def next_faculty_id(db: Session) -> int:
    """One past the highest faculty id in use, or 1 for an empty table"""
    current = db.scalar(select(func.max(Faculty.faculty_id)))
    return (current or 0) + 1

def create_faculty(db: Session, faculty_data: dict) -> FacultyBase:
    data = dict(faculty_data)
    if data.get("faculty_id") is None:
        data["faculty_id"] = next_faculty_id(db)
    if db.scalar(select(Faculty.faculty_id).where(Faculty.faculty_id == data["faculty_id"])) is not None:
        raise DuplicateError(f"Faculty {data['faculty_id']} already exists")
    member = Faculty(**data)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        # faculty_id or email already taken
        db.rollback()
        raise DuplicateError(f"Faculty {data['faculty_id']} <{data.get('email')}> already exists")
    logger.info(f"Created faculty {member.faculty_id}")
    return FacultyBase.model_validate(member)

def get_faculty(db: Session, faculty_id: int) -> FacultyBase:
    member = db.get(Faculty, faculty_id)
    if not member:
        raise NotFoundError(f"Faculty not found: {faculty_id}")
    return FacultyBase.model_validate(member)

def get_faculty_by_email(db: Session, email: str) -> FacultyBase:
    member = db.scalar(select(Faculty).where(Faculty.email == email))
    if not member:
        raise NotFoundError(f"Faculty not found: {email}")
    return FacultyBase.model_validate(member)

def get_all_faculty(db: Session) -> List[FacultyBase]:
    rows = db.scalars(select(Faculty).order_by(Faculty.faculty_id)).all()
    return [FacultyBase.model_validate(f) for f in rows]

def delete_faculty(db: Session, faculty_id: int):
    member = db.get(Faculty, faculty_id)
    if not member:
        raise NotFoundError(f"Faculty not found: {faculty_id}")
    teaching = db.scalar(
        select(ScheduledSession.schedule_id).where(ScheduledSession.faculty_id == faculty_id)
    )
    if teaching is not None:
        db.rollback()
        raise ConflictError(f"Faculty {faculty_id} teaches session {teaching}")
    db.delete(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Faculty {faculty_id} is still referenced")
    logger.info(f"Deleted faculty {faculty_id}")
