from pydantic import BaseModel
from typing import Optional

class TimeslotCreate(BaseModel):
    day_of_week: str
    start_time: str
    end_time: str

class TimeslotBase(TimeslotCreate):
    timeslot_id: Optional[int] = None

    @property
    def label(self) -> str:
        return f"{self.day_of_week} {self.start_time}-{self.end_time}"

    class Config:
        from_attributes = True
