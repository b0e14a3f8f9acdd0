from pydantic import BaseModel
from typing import Optional

class FacultyBase(BaseModel):
    faculty_id: int
    first_name: str
    last_name: str
    email: str
    degree: Optional[str] = None
    qualification: Optional[str] = None
    expertise_sub: Optional[str] = None
    designation: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    class Config:
        from_attributes = True
