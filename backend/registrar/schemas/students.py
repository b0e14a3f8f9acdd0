from pydantic import BaseModel

class StudentBase(BaseModel):
    student_id: str
    first_name: str
    last_name: str
    email: str
    degree: str
    semester_number: int

    class Config:
        from_attributes = True
