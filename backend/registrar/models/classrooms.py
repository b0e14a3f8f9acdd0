from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from ..database import Base

class Classroom(Base):
    __tablename__ = "classrooms"

    room_id = Column(String(50), primary_key=True)
    building = Column(String(100), nullable=False)
    room_number = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    room_type = Column(String(50), default="Lecture")

    scheduled_sessions = relationship("ScheduledSession", back_populates="classroom")
