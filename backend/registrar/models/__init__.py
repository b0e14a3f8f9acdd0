from .courses import Course
from .classrooms import Classroom
from .timeslots import Timeslot
from .faculty import Faculty
from .students import Student
from .scheduled_sessions import ScheduledSession
from .enrollments import Enrollment
from .marks import Mark

__all__ = [
    "Course", "Classroom", "Timeslot", "Faculty", "Student",
    "ScheduledSession", "Enrollment", "Mark",
]
