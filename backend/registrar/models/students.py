from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from ..database import Base

class Student(Base):
    __tablename__ = "students"

    student_id = Column(String(50), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False)
    degree = Column(String(100), nullable=False)
    semester_number = Column(Integer, nullable=False)

    enrollments = relationship("Enrollment", back_populates="student")
