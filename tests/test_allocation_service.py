import pytest
from sqlalchemy import select, func
from sqlalchemy.dialects import postgresql

from registrar.errors import ConflictError, NotFoundError
from registrar.models.enrollments import Enrollment
from registrar.models.scheduled_sessions import ScheduledSession
from registrar.services import allocation_service, catalog_service, enrollment_service


def test_allocate_creates_session(catalog):
    session = allocation_service.allocate(catalog, "CS101", 5, 10, "R1")

    assert session.course_code == "CS101"
    assert session.faculty_name == "Ada Lovelace"
    assert session.day_of_week == "Monday"
    assert session.room_number == "101"
    assert session.capacity == 2
    assert session.seats_taken == 0
    assert "CS101" not in {c.course_code for c in catalog_service.unscheduled_courses(catalog)}


def test_course_can_only_be_scheduled_once(catalog):
    allocation_service.allocate(catalog, "CS101", 5, 10, "R1")

    with pytest.raises(ConflictError):
        allocation_service.allocate(catalog, "CS101", 6, 11, "R2")

    assert len(catalog_service.all_scheduled_sessions(catalog)) == 1


def test_faculty_cannot_be_double_booked(catalog):
    allocation_service.allocate(catalog, "CS101", 5, 10, "R1")

    with pytest.raises(ConflictError):
        allocation_service.allocate(catalog, "CS102", 5, 10, "R2")

    # same faculty at another timeslot is fine
    allocation_service.allocate(catalog, "CS102", 5, 11, "R2")


def test_room_cannot_be_double_booked(catalog):
    allocation_service.allocate(catalog, "CS101", 5, 10, "R1")

    with pytest.raises(ConflictError):
        allocation_service.allocate(catalog, "CS102", 6, 10, "R1")

    allocation_service.allocate(catalog, "CS102", 6, 10, "R2")


def test_overlapping_clock_times_are_not_compared(catalog):
    allocation_service.allocate(catalog, "CS101", 5, 10, "R1")
    # timeslot 12 overlaps 10 on the clock, but ids are atomic
    session = allocation_service.allocate(catalog, "CS102", 5, 12, "R1")
    assert session.timeslot_id == 12


@pytest.mark.parametrize("args", [
    ("NOPE", 5, 10, "R1"),
    ("CS101", 999, 10, "R1"),
    ("CS101", 5, 999, "R1"),
    ("CS101", 5, 10, "R99"),
])
def test_allocate_unknown_references(catalog, args):
    with pytest.raises(NotFoundError):
        allocation_service.allocate(catalog, *args)
    assert catalog_service.all_scheduled_sessions(catalog) == []


def test_deallocate_cascades_enrollments(catalog):
    session = allocation_service.allocate(catalog, "CS101", 5, 10, "R1")
    enrollment_service.enroll(catalog, "A", session.schedule_id)
    enrollment_service.enroll(catalog, "B", session.schedule_id)

    removed = allocation_service.deallocate(catalog, session.schedule_id)

    assert removed == 2
    assert catalog.scalar(
        select(func.count()).select_from(Enrollment).where(Enrollment.schedule_id == session.schedule_id)
    ) == 0
    assert catalog.scalar(
        select(ScheduledSession.schedule_id).where(ScheduledSession.schedule_id == session.schedule_id)
    ) is None
    assert enrollment_service.enrolled_sessions(catalog, "A") == []


def test_deallocate_twice_reports_not_found(catalog):
    session = allocation_service.allocate(catalog, "CS101", 5, 10, "R1")
    allocation_service.deallocate(catalog, session.schedule_id)

    with pytest.raises(NotFoundError):
        allocation_service.deallocate(catalog, session.schedule_id)


def test_reallocate_after_removal_gets_new_id(catalog):
    first = allocation_service.allocate(catalog, "CS101", 5, 10, "R1")
    allocation_service.deallocate(catalog, first.schedule_id)

    assert "CS101" in {c.course_code for c in catalog_service.unscheduled_courses(catalog)}

    second = allocation_service.allocate(catalog, "CS101", 6, 11, "R2")
    assert second.schedule_id != first.schedule_id
    with pytest.raises(NotFoundError):
        catalog_service.get_scheduled_session(catalog, first.schedule_id)


def test_deallocate_locks_session_row():
    sql = str(allocation_service._locked_session(1).compile(dialect=postgresql.dialect()))
    assert sql.rstrip().endswith("FOR UPDATE")
    assert "scheduled_sessions.schedule_id =" in sql


def test_deallocate_counts_enrollments_committed_before_it(catalog, session_factory):
    session = allocation_service.allocate(catalog, "CS102", 5, 10, "R1")
    with session_factory() as other:
        enrollment_service.enroll(other, "A", session.schedule_id)
        enrollment_service.enroll(other, "B", session.schedule_id)

    assert allocation_service.deallocate(catalog, session.schedule_id) == 2
    with pytest.raises(NotFoundError):
        enrollment_service.enroll(catalog, "C", session.schedule_id)
