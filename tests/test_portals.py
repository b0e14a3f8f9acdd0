import pytest

from registrar.errors import CapacityError, ConflictError, ScopeError
from registrar.portals.admin import AdminPortal
from registrar.portals.faculty import FacultyPortal
from registrar.portals.student import StudentPortal
from registrar.schemas.classrooms import ClassroomBase
from registrar.schemas.courses import CourseBase
from registrar.schemas.students import StudentBase
from registrar.schemas.timeslots import TimeslotCreate


@pytest.fixture
def admin(catalog):
    return AdminPortal(catalog)


def test_admin_allocation_flow(admin):
    slot = admin.timeslots()[0].timeslot_id
    course = admin.unscheduled_courses()[0].course_code
    faculty = admin.free_faculty(slot)[0].faculty_id
    room = admin.free_rooms(slot)[0].room_id

    session = admin.allocate(course, faculty, slot, room)
    assert [s.schedule_id for s in admin.schedules()] == [session.schedule_id]
    assert faculty not in {f.faculty_id for f in admin.free_faculty(slot)}

    # a stale candidate list does not get past the allocator
    with pytest.raises(ConflictError):
        admin.allocate(admin.unscheduled_courses()[0].course_code, faculty, slot, "R2")

    assert admin.deallocate(session.schedule_id) == 0
    assert admin.schedules() == []


def test_admin_catalog_management(admin):
    admin.add_course(CourseBase(
        course_code="PH101", course_name="Physics", credits=3,
        semester_number=1, department_name="BSCS", max_students=10,
    ))
    admin.add_classroom(ClassroomBase(room_id="R9", building="Science", room_number="9", capacity=10))
    slot = admin.add_timeslot(TimeslotCreate(day_of_week="Friday", start_time="14:00", end_time="15:00"))
    member = admin.add_faculty({"first_name": "Marie", "last_name": "Curie", "email": "marie@uni.edu"})
    admin.add_student(StudentBase(
        student_id="E", first_name="Eve", last_name="Stone", email="e@uni.edu",
        degree="BSCS", semester_number=1,
    ))

    session = admin.allocate("PH101", member.faculty_id, slot.timeslot_id, "R9")
    StudentPortal(admin.db, "E").enroll(session.schedule_id)

    with pytest.raises(ConflictError):
        admin.remove_student("E")

    admin.deallocate(session.schedule_id)
    admin.remove_student("E")
    admin.remove_course("PH101")
    admin.remove_classroom("R9")
    admin.remove_timeslot(slot.timeslot_id)
    admin.remove_faculty(member.faculty_id)


def test_student_portal(admin):
    cs101 = admin.allocate("CS101", 5, 10, "R1")
    admin.allocate("EE101", 6, 11, "R2")

    amna = StudentPortal(admin.db, "A")
    assert amna.profile().degree == "BSCS"
    assert [s.course_code for s in amna.offerings()] == ["CS101"]

    amna.enroll(cs101.schedule_id)
    StudentPortal(admin.db, "B").enroll(cs101.schedule_id)
    with pytest.raises(CapacityError):
        StudentPortal(admin.db, "C").enroll(cs101.schedule_id)

    assert [s.course_code for s in amna.timetable()] == ["CS101"]
    assert [c.course_code for c in amna.courses()] == ["CS101"]

    amna.drop(cs101.schedule_id)
    assert amna.timetable() == []
    assert amna.marks() == []


def test_faculty_portal_scope(admin):
    cs101 = admin.allocate("CS101", 5, 10, "R1")
    admin.allocate("CS102", 6, 11, "R2")
    StudentPortal(admin.db, "A").enroll(cs101.schedule_id)

    ada = FacultyPortal(admin.db, 5)
    assert ada.profile().full_name == "Ada Lovelace"
    assert [c.course_code for c in ada.courses()] == ["CS101"]
    assert [s.course_code for s in ada.timetable()] == ["CS101"]
    assert [s.student_id for s in ada.roster("CS101")] == ["A"]
    assert ada.enrolled_count("CS101") == 1

    ada.record_mark("CS101", "A", "Quiz 1", 10, 9)
    ada.update_mark("CS101", "A", "Quiz 1", 8)
    assert ada.assignments("CS101") == ["Quiz 1"]
    assert [m.obtained_marks for m in ada.assignment_marks("CS101", "Quiz 1")] == [8]
    assert [m.obtained_marks for m in StudentPortal(admin.db, "A").marks("CS101")] == [8]

    # not enrolled
    with pytest.raises(ScopeError):
        ada.record_mark("CS101", "B", "Quiz 1", 10, 5)
    # not her course
    with pytest.raises(ScopeError):
        ada.roster("CS102")
    with pytest.raises(ScopeError):
        ada.record_mark("CS102", "A", "Quiz 1", 10, 5)
