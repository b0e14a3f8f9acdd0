from sqlalchemy import Column, String, Integer, Text, CheckConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class Course(Base):
    __tablename__ = "courses"

    course_code = Column(String(50), primary_key=True)
    course_name = Column(String(200), nullable=False)
    credits = Column(Integer, nullable=False)
    semester_number = Column(Integer, nullable=False)
    department_name = Column(String(100), nullable=False)
    max_students = Column(Integer, nullable=False, default=0)
    prerequisites = Column(Text, default="")

    __table_args__ = (
        CheckConstraint("max_students >= 0", name="check_max_students"),
    )

    scheduled_session = relationship("ScheduledSession", back_populates="course", uselist=False)
