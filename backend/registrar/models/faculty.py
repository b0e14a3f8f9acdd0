from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from ..database import Base

class Faculty(Base):
    __tablename__ = "faculty"

    faculty_id = Column(Integer, primary_key=True, autoincrement=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False)
    degree = Column(String(100))
    qualification = Column(String(100))
    expertise_sub = Column(String(200))
    designation = Column(String(100))

    scheduled_sessions = relationship("ScheduledSession", back_populates="faculty")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
