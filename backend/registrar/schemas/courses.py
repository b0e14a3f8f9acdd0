from pydantic import BaseModel
from typing import Optional

class CourseBase(BaseModel):
    course_code: str
    course_name: str
    credits: int
    semester_number: int
    department_name: str
    max_students: int
    prerequisites: Optional[str] = ""

    class Config:
        from_attributes = True
