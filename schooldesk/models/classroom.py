from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field

from schooldesk.timeutil import utcnow

UNASSIGNED_TEACHER = "Not Assigned"


class Classroom(Document):
    """A class group. Students join it through ``Student.grade == name``."""

    school_id: Indexed(str)
    name: str
    teacher: Optional[str] = None
    academic_year: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "classrooms"
        use_state_management = True


class ClassroomCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str
    teacher: Optional[str] = None
    academic_year: str


class ClassroomUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = None
    teacher: Optional[str] = None
    academic_year: Optional[str] = None


class ClassroomOut(BaseModel):
    id: str
    school_id: str
    name: str
    teacher: str
    academic_year: str
    student_count: int
