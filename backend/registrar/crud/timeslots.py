import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from registrar.errors import ConflictError, DuplicateError, NotFoundError
from registrar.models.timeslots import Timeslot
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.schemas.timeslots import TimeslotBase
from typing import List

logger = logging.getLogger(__name__)

def create_timeslot(db: Session, timeslot_data: dict) -> TimeslotBase:
    # ids are assigned by the store unless given; overlapping wall-clock ranges are allowed
    timeslot_id = timeslot_data.get("timeslot_id")
    if timeslot_id is not None and db.scalar(
        select(Timeslot.timeslot_id).where(Timeslot.timeslot_id == timeslot_id)
    ) is not None:
        raise DuplicateError(f"Timeslot {timeslot_id} already exists")
    timeslot = Timeslot(**timeslot_data)
    db.add(timeslot)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Timeslot {timeslot_id} already exists")
    logger.info(f"Created timeslot {timeslot.timeslot_id}")
    return TimeslotBase.model_validate(timeslot)

def get_timeslot(db: Session, timeslot_id: int) -> TimeslotBase:
    timeslot = db.get(Timeslot, timeslot_id)
    if not timeslot:
        raise NotFoundError(f"Timeslot not found: {timeslot_id}")
    return TimeslotBase.model_validate(timeslot)

def get_all_timeslots(db: Session) -> List[TimeslotBase]:
    rows = db.scalars(select(Timeslot).order_by(Timeslot.timeslot_id)).all()
    return [TimeslotBase.model_validate(t) for t in rows]

def delete_timeslot(db: Session, timeslot_id: int):
    timeslot = db.get(Timeslot, timeslot_id)
    if not timeslot:
        raise NotFoundError(f"Timeslot not found: {timeslot_id}")
    in_use = db.scalar(
        select(ScheduledSession.schedule_id).where(ScheduledSession.timeslot_id == timeslot_id)
    )
    if in_use is not None:
        db.rollback()
        raise ConflictError(f"Timeslot {timeslot_id} is used by session {in_use}")
    db.delete(timeslot)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Timeslot {timeslot_id} is still referenced")
    logger.info(f"Deleted timeslot {timeslot_id}")
