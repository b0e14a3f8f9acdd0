import pytest
from sqlalchemy.orm import sessionmaker

from registrar.crud import classrooms as crud_classrooms
from registrar.crud import courses as crud_courses
from registrar.crud import faculty as crud_faculty
from registrar.crud import students as crud_students
from registrar.crud import timeslots as crud_timeslots
from registrar.database import init_db, make_engine


COURSES = [
    {"course_code": "CS101", "course_name": "Programming Fundamentals", "credits": 4,
     "semester_number": 1, "department_name": "BSCS", "max_students": 2},
    {"course_code": "CS102", "course_name": "Discrete Structures", "credits": 3,
     "semester_number": 1, "department_name": "BSCS", "max_students": 30},
    {"course_code": "MA101", "course_name": "Calculus", "credits": 3,
     "semester_number": 1, "department_name": "BSCS", "max_students": 30},
    {"course_code": "CS301", "course_name": "Operating Systems", "credits": 3,
     "semester_number": 3, "department_name": "BSCS", "max_students": 40},
    {"course_code": "EE101", "course_name": "Circuit Analysis", "credits": 3,
     "semester_number": 1, "department_name": "BSEE", "max_students": 25},
]

CLASSROOMS = [
    {"room_id": "R1", "building": "Main", "room_number": "101", "capacity": 40, "room_type": "Lecture"},
    {"room_id": "R2", "building": "Main", "room_number": "102", "capacity": 40, "room_type": "Lecture"},
    {"room_id": "L1", "building": "Annex", "room_number": "Lab-1", "capacity": 20, "room_type": "Lab"},
]

TIMESLOTS = [
    {"timeslot_id": 10, "day_of_week": "Monday", "start_time": "09:00", "end_time": "10:00"},
    {"timeslot_id": 11, "day_of_week": "Monday", "start_time": "10:00", "end_time": "11:00"},
    # overlaps slot 10 on the clock but is a separate timeslot
    {"timeslot_id": 12, "day_of_week": "Monday", "start_time": "09:30", "end_time": "10:30"},
]

FACULTY = [
    {"faculty_id": 5, "first_name": "Ada", "last_name": "Lovelace", "email": "ada@uni.edu",
     "degree": "BSCS", "qualification": "PhD", "expertise_sub": "Programming", "designation": "Professor"},
    {"faculty_id": 6, "first_name": "Alan", "last_name": "Turing", "email": "alan@uni.edu",
     "degree": "BSCS", "qualification": "PhD", "expertise_sub": "Theory", "designation": "Lecturer"},
]

STUDENTS = [
    {"student_id": "A", "first_name": "Amna", "last_name": "Khan", "email": "a@uni.edu",
     "degree": "BSCS", "semester_number": 1},
    {"student_id": "B", "first_name": "Bilal", "last_name": "Ahmed", "email": "b@uni.edu",
     "degree": "BSCS", "semester_number": 1},
    {"student_id": "C", "first_name": "Chen", "last_name": "Li", "email": "c@uni.edu",
     "degree": "BSCS", "semester_number": 1},
    {"student_id": "D", "first_name": "Dana", "last_name": "Ross", "email": "d@uni.edu",
     "degree": "BSEE", "semester_number": 1},
]


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{(tmp_path / 'registrar.db').as_posix()}", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog(db):
    for course in COURSES:
        crud_courses.create_course(db, course)
    for room in CLASSROOMS:
        crud_classrooms.create_classroom(db, room)
    for slot in TIMESLOTS:
        crud_timeslots.create_timeslot(db, slot)
    for member in FACULTY:
        crud_faculty.create_faculty(db, member)
    for student in STUDENTS:
        crud_students.create_student(db, student)
    return db
