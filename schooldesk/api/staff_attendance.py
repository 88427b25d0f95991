from typing import List, Optional

from fastapi import APIRouter, Query

from schooldesk.api.deps import StaffAttendance, parse_date
from schooldesk.models.attendance import AttendanceMark, AttendanceTally, StaffAttendanceOut
from schooldesk.services.attendance import tally_statuses

router = APIRouter()


@router.get("/", response_model=List[StaffAttendanceOut])
async def list_staff_attendance(
    school_id: str,
    staff_attendance: StaffAttendance,
    from_date: str = Query(...),
    to_date: str = Query(...),
):
    return await staff_attendance.get_for_range(
        school_id, parse_date(from_date, "from_date"), parse_date(to_date, "to_date")
    )


@router.get("/summary", response_model=dict[str, AttendanceTally])
async def staff_attendance_summary(
    school_id: str,
    staff_attendance: StaffAttendance,
    from_date: str = Query(...),
    to_date: str = Query(...),
):
    """Per-teacher counts over the marked days in the range."""
    records = await staff_attendance.get_for_range(
        school_id, parse_date(from_date, "from_date"), parse_date(to_date, "to_date")
    )
    return tally_statuses(records)


@router.get("/{date_str}", response_model=Optional[StaffAttendanceOut])
async def get_staff_attendance(school_id: str, date_str: str, staff_attendance: StaffAttendance):
    """Stored sheet, or an unsaved all-present default when the day is unmarked."""
    return await staff_attendance.get_for_date(school_id, parse_date(date_str))


@router.put("/{date_str}", response_model=StaffAttendanceOut)
async def mark_staff_attendance(
    school_id: str, date_str: str, data: AttendanceMark, staff_attendance: StaffAttendance
):
    return await staff_attendance.upsert(school_id, parse_date(date_str), data.statuses)
