from pydantic import BaseModel

class ClassroomBase(BaseModel):
    room_id: str
    building: str
    room_number: str
    capacity: int
    room_type: str = "Lecture"

    class Config:
        from_attributes = True
