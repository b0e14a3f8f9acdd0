from pydantic import BaseModel

class MarkBase(BaseModel):
    course_code: str
    student_id: str
    assignment_name: str
    total_marks: int
    obtained_marks: int

    class Config:
        from_attributes = True

class StudentMark(BaseModel):
    assignment_name: str
    total_marks: int
    obtained_marks: int
    course_code: str
    course_name: str

    class Config:
        from_attributes = True
