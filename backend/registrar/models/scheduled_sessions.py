from sqlalchemy import Column, String, Integer, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class ScheduledSession(Base):
    __tablename__ = "scheduled_sessions"

    schedule_id = Column(Integer, primary_key=True, autoincrement=True)
    course_code = Column(String(50), ForeignKey("courses.course_code"), nullable=False)
    faculty_id = Column(Integer, ForeignKey("faculty.faculty_id"), nullable=False)
    timeslot_id = Column(Integer, ForeignKey("timeslots.timeslot_id"), nullable=False)
    room_id = Column(String(50), ForeignKey("classrooms.room_id"), nullable=False)
    # copied from courses.max_students when the session is allocated
    capacity = Column(Integer, nullable=False)
    seats_taken = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("course_code", name="uq_session_course"),
        UniqueConstraint("faculty_id", "timeslot_id", name="uq_session_faculty_timeslot"),
        UniqueConstraint("room_id", "timeslot_id", name="uq_session_room_timeslot"),
        # target of the enrollments composite foreign key
        UniqueConstraint("schedule_id", "timeslot_id", name="uq_session_schedule_timeslot"),
        CheckConstraint("seats_taken >= 0", name="check_seats_taken_positive"),
        CheckConstraint("seats_taken <= capacity", name="check_seats_taken_lte_capacity"),
        # never reuse a removed schedule id
        {"sqlite_autoincrement": True},
    )

    course = relationship("Course", back_populates="scheduled_session")
    faculty = relationship("Faculty", back_populates="scheduled_sessions")
    timeslot = relationship("Timeslot", back_populates="scheduled_sessions")
    classroom = relationship("Classroom", back_populates="scheduled_sessions")
    enrollments = relationship("Enrollment", back_populates="scheduled_session")
