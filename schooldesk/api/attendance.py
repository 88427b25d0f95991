"""Classroom attendance: daily sheets, ranges, summaries and exports."""
import io
from typing import List, Literal, Optional

import pandas as pd
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse

from schooldesk.api.deps import Attendance, parse_date
from schooldesk.models.attendance import AttendanceMark, AttendanceOut, AttendanceTally
from schooldesk.services.attendance import tally_statuses

router = APIRouter()


@router.get("/{classroom_id}/attendance", response_model=List[AttendanceOut])
async def list_attendance(
    school_id: str,
    classroom_id: str,
    attendance: Attendance,
    from_date: str = Query(..., description="YYYY-MM-DD"),
    to_date: str = Query(..., description="YYYY-MM-DD"),
):
    """Attendance sheets for a classroom between two dates (inclusive)."""
    d_from = parse_date(from_date, "from_date")
    d_to = parse_date(to_date, "to_date")
    return await attendance.get_for_range(school_id, classroom_id, d_from, d_to)


@router.get("/{classroom_id}/attendance/summary", response_model=dict[str, AttendanceTally])
async def attendance_summary(
    school_id: str,
    classroom_id: str,
    attendance: Attendance,
    from_date: str = Query(...),
    to_date: str = Query(...),
):
    """Per-student present/absent/late counts over a date range."""
    records = await attendance.get_for_range(
        school_id, classroom_id, parse_date(from_date, "from_date"), parse_date(to_date, "to_date")
    )
    return tally_statuses(records)


@router.get("/{classroom_id}/attendance/report")
async def download_attendance_report(
    school_id: str,
    classroom_id: str,
    attendance: Attendance,
    from_date: str,
    to_date: str,
    format: Literal["csv", "excel"] = "csv",
):
    """Download attendance report for a class and date range."""
    records = await attendance.get_for_range(
        school_id, classroom_id, parse_date(from_date, "from_date"), parse_date(to_date, "to_date")
    )

    data = []
    for record in records:
        for student_id, status in record.statuses.items():
            data.append(
                {
                    "Date": record.id,
                    "Student ID": student_id,
                    "Status": status.value,
                }
            )

    if not data:
        raise HTTPException(status_code=404, detail="No records found for the given criteria")

    df = pd.DataFrame(data).sort_values(["Date", "Student ID"])
    filename = f"attendance_{classroom_id}_{from_date}_{to_date}"

    if format == "csv":
        stream = io.StringIO()
        df.to_csv(stream, index=False)
        return StreamingResponse(
            iter([stream.getvalue()]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Attendance")
    output.seek(0)
    return StreamingResponse(
        output,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}.xlsx"},
    )


@router.get("/{classroom_id}/attendance/{date_str}", response_model=Optional[AttendanceOut])
async def get_attendance_record(school_id: str, classroom_id: str, date_str: str, attendance: Attendance):
    """Attendance sheet for a classroom and date, or null if nobody marked it."""
    return await attendance.get_for_date(school_id, classroom_id, parse_date(date_str))


@router.put("/{classroom_id}/attendance/{date_str}", response_model=AttendanceOut)
async def mark_attendance(
    school_id: str, classroom_id: str, date_str: str, data: AttendanceMark, attendance: Attendance
):
    """Save the day's sheet. A second save for the same day replaces the first."""
    return await attendance.upsert(school_id, classroom_id, parse_date(date_str), data.statuses)
