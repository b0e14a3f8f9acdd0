from sqlalchemy import Column, String, Integer, ForeignKey, ForeignKeyConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class Enrollment(Base):
    __tablename__ = "enrollments"

    student_id = Column(String(50), ForeignKey("students.student_id"), primary_key=True)
    schedule_id = Column(Integer, primary_key=True)
    timeslot_id = Column(Integer, nullable=False)

    __table_args__ = (
        ForeignKeyConstraint(
            ["schedule_id", "timeslot_id"],
            ["scheduled_sessions.schedule_id", "scheduled_sessions.timeslot_id"],
        ),
        # a student can sit in only one session per timeslot
        UniqueConstraint("student_id", "timeslot_id", name="uq_enrollment_student_timeslot"),
    )

    student = relationship("Student", back_populates="enrollments")
    scheduled_session = relationship("ScheduledSession", back_populates="enrollments")
