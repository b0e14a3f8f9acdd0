from sqlalchemy import Column, String, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class Mark(Base):
    __tablename__ = "marks"

    course_code = Column(String(50), ForeignKey("courses.course_code"), primary_key=True)
    student_id = Column(String(50), ForeignKey("students.student_id"), primary_key=True)
    assignment_name = Column(String(200), primary_key=True)
    total_marks = Column(Integer, nullable=False)
    obtained_marks = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("obtained_marks >= 0 AND obtained_marks <= total_marks", name="check_obtained_marks"),
    )

    course = relationship("Course")
