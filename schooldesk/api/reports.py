from datetime import date
from typing import Optional

from fastapi import APIRouter

from schooldesk.api.deps import Attendance, parse_date
from schooldesk.services.attendance import tally_statuses
from schooldesk.timeutil import date_key

router = APIRouter()


@router.get("/activity")
async def daily_activity(school_id: str, attendance: Attendance, date_str: Optional[str] = None):
    """Attendance marked across every classroom on a day (defaults to today)."""
    d = parse_date(date_str) if date_str else date.today()
    records = await attendance.get_school_day(school_id, d)
    totals = {"present": 0, "absent": 0, "late": 0}
    for tally in tally_statuses(records).values():
        totals["present"] += tally.present
        totals["absent"] += tally.absent
        totals["late"] += tally.late
    return {
        "date": date_key(d),
        "classrooms_marked": [r.classroom_id for r in records],
        "totals": totals,
    }
