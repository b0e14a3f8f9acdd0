from pydantic import BaseModel

class ScheduledSessionView(BaseModel):
    """A session joined with its course, faculty, timeslot and room details"""
    schedule_id: int
    course_code: str
    course_name: str
    department_name: str
    semester_number: int
    faculty_id: int
    faculty_name: str
    timeslot_id: int
    day_of_week: str
    start_time: str
    end_time: str
    room_id: str
    room_number: str
    building: str
    capacity: int
    seats_taken: int

    class Config:
        from_attributes = True
