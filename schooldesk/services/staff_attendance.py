"""Staff attendance: one status sheet per school per day.

Days nobody has marked read as "every active teacher present". That default
is computed on read and never written back.
"""
from __future__ import annotations

import logging
from typing import Mapping

from schooldesk.models.attendance import AttendanceStatus, StaffAttendance, StaffAttendanceOut
from schooldesk.models.teacher import Teacher
from schooldesk.services.attendance import normalize_statuses
from schooldesk.services.base import BackendService, require_scope, retry_on_conflict
from schooldesk.timeutil import DateLike, date_key, day_end, day_start, to_iso, utcnow

logger = logging.getLogger(__name__)


def staff_attendance_doc_id(school_id: str, day: DateLike) -> str:
    return f"schools/{school_id}/staffAttendance/{date_key(day)}"


def staff_attendance_to_out(record: StaffAttendance) -> StaffAttendanceOut:
    return StaffAttendanceOut(
        id=record.date_key,
        school_id=record.school_id,
        date=to_iso(record.date),
        statuses=dict(record.statuses),
        created_at=to_iso(record.created_at),
        updated_at=to_iso(record.updated_at),
    )


class StaffAttendanceService(BackendService):
    async def upsert(self, school_id: str, day: DateLike, statuses: Mapping[str, str] | None) -> StaffAttendanceOut:
        require_scope(school_id=school_id)
        self.backend.require()
        doc_id = staff_attendance_doc_id(school_id, day)
        sheet = normalize_statuses(statuses)

        async def write() -> StaffAttendance:
            record = await StaffAttendance.get(doc_id)
            if record is None:
                record = StaffAttendance(
                    id=doc_id,
                    school_id=school_id,
                    date=day_start(day),
                    date_key=date_key(day),
                    statuses=dict(sheet),
                )
                await record.insert()
            else:
                record.statuses = dict(sheet)
                record.updated_at = utcnow()
                await record.save()
            return record

        record = await retry_on_conflict(write)
        return staff_attendance_to_out(record)

    async def get_for_date(self, school_id: str, day: DateLike) -> StaffAttendanceOut | None:
        """Stored sheet for the day, else the all-present default; ``None`` when the school has no teachers."""
        require_scope(school_id=school_id)
        if self._unavailable("get staff attendance"):
            return None
        record = await StaffAttendance.get(staff_attendance_doc_id(school_id, day))
        if record is not None:
            return staff_attendance_to_out(record)

        teachers = await Teacher.find(Teacher.school_id == school_id, Teacher.is_active == True).to_list()
        if not teachers:
            return None
        return StaffAttendanceOut(
            id=date_key(day),
            school_id=school_id,
            date=to_iso(day_start(day)),
            statuses={str(t.id): AttendanceStatus.PRESENT for t in teachers},
            created_at=to_iso(utcnow()),
            is_default=True,
        )

    async def get_for_range(self, school_id: str, start: DateLike, end: DateLike) -> list[StaffAttendanceOut]:
        require_scope(school_id=school_id)
        if self._unavailable("get monthly staff attendance"):
            return []
        records = (
            await StaffAttendance.find(
                StaffAttendance.school_id == school_id,
                StaffAttendance.date >= day_start(start),
                StaffAttendance.date <= day_end(end),
            )
            .sort("+date")
            .to_list()
        )
        return [staff_attendance_to_out(r) for r in records]
