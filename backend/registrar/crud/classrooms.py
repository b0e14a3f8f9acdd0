import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from registrar.errors import ConflictError, DuplicateError, NotFoundError
from registrar.models.classrooms import Classroom
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.schemas.classrooms import ClassroomBase
from typing import List

logger = logging.getLogger(__name__)

def create_classroom(db: Session, classroom_data: dict) -> ClassroomBase:
    if db.scalar(select(Classroom.room_id).where(Classroom.room_id == classroom_data.get("room_id"))):
        raise DuplicateError(f"Classroom {classroom_data.get('room_id')} already exists")
    classroom = Classroom(**classroom_data)
    db.add(classroom)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Classroom {classroom_data.get('room_id')} already exists")
    logger.info(f"Created classroom {classroom.room_id}")
    return ClassroomBase.model_validate(classroom)

def get_classroom(db: Session, room_id: str) -> ClassroomBase:
    classroom = db.get(Classroom, room_id)
    if not classroom:
        raise NotFoundError(f"Classroom not found: {room_id}")
    return ClassroomBase.model_validate(classroom)

def get_all_classrooms(db: Session) -> List[ClassroomBase]:
    rows = db.scalars(select(Classroom).order_by(Classroom.room_id)).all()
    return [ClassroomBase.model_validate(r) for r in rows]

def delete_classroom(db: Session, room_id: str):
    classroom = db.get(Classroom, room_id)
    if not classroom:
        raise NotFoundError(f"Classroom not found: {room_id}")
    in_use = db.scalar(
        select(ScheduledSession.schedule_id).where(ScheduledSession.room_id == room_id)
    )
    if in_use is not None:
        db.rollback()
        raise ConflictError(f"Classroom {room_id} is booked by session {in_use}")
    db.delete(classroom)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Classroom {room_id} is still referenced")
    logger.info(f"Deleted classroom {room_id}")
