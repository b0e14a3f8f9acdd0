import logging
from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from registrar.errors import ConflictError, NotFoundError, RegistrarError, ValidationError
from registrar.models.courses import Course
from registrar.models.marks import Mark
from registrar.models.students import Student
from registrar.schemas.marks import MarkBase, StudentMark

logger = logging.getLogger(__name__)


def _check_bounds(total_marks: int, obtained_marks: int):
    if total_marks < 0:
        raise ValidationError(f"Total marks must not be negative, got {total_marks}")
    if obtained_marks < 0 or obtained_marks > total_marks:
        raise ValidationError(f"Obtained marks {obtained_marks} outside 0..{total_marks}")


def _upsert_insert(db: Session):
    """Dialect insert supporting ON CONFLICT, or None where the store has none"""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    return None


def _write_mark(db: Session, values: dict):
    insert = _upsert_insert(db)
    if insert is not None:
        stmt = insert(Mark).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Mark.course_code, Mark.student_id, Mark.assignment_name],
            set_={
                "total_marks": stmt.excluded.total_marks,
                "obtained_marks": stmt.excluded.obtained_marks,
            },
        )
        db.execute(stmt)
        return

    key = (values["course_code"], values["student_id"], values["assignment_name"])
    mark = db.get(Mark, key, populate_existing=True)
    if mark:
        mark.total_marks = values["total_marks"]
        mark.obtained_marks = values["obtained_marks"]
    else:
        db.add(Mark(**values))
    db.flush()


def record_mark(
        db: Session,
        course_code: str,
        student_id: str,
        assignment_name: str,
        total_marks: int,
        obtained_marks: int
) -> MarkBase:
    """
    Insert or overwrite the mark for (course, student, assignment).
    Racing writers to the same key resolve to the last one committed.
    Enrollment is not checked here; callers pick students from the roster.
    """
    values = dict(
        course_code=course_code,
        student_id=student_id,
        assignment_name=assignment_name,
        total_marks=total_marks,
        obtained_marks=obtained_marks,
    )
    try:
        _check_bounds(total_marks, obtained_marks)
        if db.scalar(select(Course.course_code).where(Course.course_code == course_code)) is None:
            raise NotFoundError(f"Course not found: {course_code}")
        if db.scalar(select(Student.student_id).where(Student.student_id == student_id)) is None:
            raise NotFoundError(f"Student not found: {student_id}")

        _write_mark(db, values)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Mark {assignment_name} for {student_id} in {course_code} rejected: {e.orig}")
        raise ConflictError(f"Mark {assignment_name} for {student_id} in {course_code} could not be written")
    except RegistrarError:
        db.rollback()
        raise

    logger.info(f"Recorded {assignment_name} for {student_id} in {course_code}: {obtained_marks}/{total_marks}")
    return MarkBase(**values)


def update_mark(
        db: Session,
        course_code: str,
        student_id: str,
        assignment_name: str,
        obtained_marks: int
) -> MarkBase:
    """Overwrite obtained marks only; the row's total is the upper bound."""
    try:
        total_marks = db.scalar(
            select(Mark.total_marks).where(
                Mark.course_code == course_code,
                Mark.student_id == student_id,
                Mark.assignment_name == assignment_name,
            )
        )
        if total_marks is None:
            raise NotFoundError(f"No mark {assignment_name} for {student_id} in {course_code}")
        if obtained_marks < 0 or obtained_marks > total_marks:
            raise ValidationError(f"Obtained marks {obtained_marks} outside 0..{total_marks}")

        db.execute(
            update(Mark)
            .where(
                Mark.course_code == course_code,
                Mark.student_id == student_id,
                Mark.assignment_name == assignment_name,
            )
            .values(obtained_marks=obtained_marks)
        )
        db.commit()
    except IntegrityError:
        # total was lowered concurrently below the new value
        db.rollback()
        raise ValidationError(f"Obtained marks {obtained_marks} exceed the current total")
    except RegistrarError:
        db.rollback()
        raise

    logger.info(f"Updated {assignment_name} for {student_id} in {course_code} to {obtained_marks}")
    return MarkBase(
        course_code=course_code,
        student_id=student_id,
        assignment_name=assignment_name,
        total_marks=total_marks,
        obtained_marks=obtained_marks,
    )


def marks_for(db: Session, student_id: str, course_code: Optional[str] = None) -> List[StudentMark]:
    stmt = (
        select(
            Mark.assignment_name,
            Mark.total_marks,
            Mark.obtained_marks,
            Mark.course_code,
            Course.course_name,
        )
        .join(Course, Mark.course_code == Course.course_code)
        .where(Mark.student_id == student_id)
    )
    if course_code:
        stmt = stmt.where(Mark.course_code == course_code)
    stmt = stmt.order_by(Mark.assignment_name, Mark.course_code)
    return [StudentMark.model_validate(r) for r in db.execute(stmt).all()]


def assignments_for(db: Session, course_code: str) -> List[str]:
    return list(db.scalars(
        select(Mark.assignment_name)
        .where(Mark.course_code == course_code)
        .distinct()
        .order_by(Mark.assignment_name)
    ).all())


def marks_for_assignment(db: Session, course_code: str, assignment_name: str) -> List[MarkBase]:
    rows = db.execute(
        select(
            Mark.course_code,
            Mark.student_id,
            Mark.assignment_name,
            Mark.total_marks,
            Mark.obtained_marks,
        )
        .where(Mark.course_code == course_code, Mark.assignment_name == assignment_name)
        .order_by(Mark.student_id)
    ).all()
    return [MarkBase.model_validate(r) for r in rows]
