from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from ..database import Base

class Timeslot(Base):
    __tablename__ = "timeslots"

    timeslot_id = Column(Integer, primary_key=True, autoincrement=True)
    day_of_week = Column(String(20), nullable=False)
    start_time = Column(String(10), nullable=False)  # "HH:MM"
    end_time = Column(String(10), nullable=False)

    scheduled_sessions = relationship("ScheduledSession", back_populates="timeslot")
