from datetime import date, datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field

from schooldesk.timeutil import utcnow


class Teacher(Document):
    """Teaching staff on a school's roster."""

    school_id: Indexed(str)
    app_id: str  # login id shown on staff cards, e.g. TCH-0007
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    hire_date: Optional[datetime] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "teachers"
        use_state_management = True


class TeacherCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    app_id: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    hire_date: Optional[date] = None


class TeacherUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    hire_date: Optional[date] = None
    is_active: Optional[bool] = None


class TeacherOut(BaseModel):
    id: str
    school_id: str
    app_id: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    hire_date: Optional[str] = None
    is_active: bool
    created_at: str
