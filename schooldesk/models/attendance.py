"""Daily attendance sheets for classrooms and staff, keyed by date."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field

from schooldesk.timeutil import utcnow


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class StudentAttendance(Document):
    """One classroom's attendance for one day.

    ``id`` is ``schools/{school_id}/classrooms/{classroom_id}/attendance/{YYYY-MM-DD}``,
    so a second write for the same day lands on the same document.
    """

    id: str
    school_id: Indexed(str)
    classroom_id: Indexed(str)
    date: Indexed(datetime)
    date_key: str
    statuses: dict[str, AttendanceStatus] = Field(default_factory=dict)  # student_id -> status
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "student_attendance"
        use_revision = True
        use_state_management = True


class StaffAttendance(Document):
    """A school's staff attendance for one day; ``id`` is ``schools/{school_id}/staffAttendance/{YYYY-MM-DD}``."""

    id: str
    school_id: Indexed(str)
    date: Indexed(datetime)
    date_key: str
    statuses: dict[str, AttendanceStatus] = Field(default_factory=dict)  # teacher_id -> status
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "staff_attendance"
        use_revision = True
        use_state_management = True


class AttendanceMark(BaseModel):
    """Body for marking a day: the full status sheet, replacing any earlier one."""

    statuses: dict[str, AttendanceStatus] = Field(default_factory=dict)


class AttendanceOut(BaseModel):
    id: str
    school_id: str
    classroom_id: str
    date: str
    statuses: dict[str, AttendanceStatus]
    created_at: str
    updated_at: Optional[str] = None


class StaffAttendanceOut(BaseModel):
    id: str
    school_id: str
    date: str
    statuses: dict[str, AttendanceStatus]
    created_at: str
    updated_at: Optional[str] = None
    is_default: bool = False  # synthesized "everyone present" sheet, not stored


class AttendanceTally(BaseModel):
    present: int = 0
    absent: int = 0
    late: int = 0
