"""Classroom attendance: one status sheet per classroom per day."""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from schooldesk.models.attendance import (
    AttendanceOut,
    AttendanceStatus,
    AttendanceTally,
    StaffAttendanceOut,
    StudentAttendance,
)
from schooldesk.services.base import BackendService, require_scope, retry_on_conflict
from schooldesk.timeutil import DateLike, date_key, day_end, day_start, to_iso, utcnow

logger = logging.getLogger(__name__)


def attendance_doc_id(school_id: str, classroom_id: str, day: DateLike) -> str:
    return f"schools/{school_id}/classrooms/{classroom_id}/attendance/{date_key(day)}"


def normalize_statuses(statuses: Mapping[str, str] | None) -> dict[str, AttendanceStatus]:
    return {str(person_id): AttendanceStatus(status) for person_id, status in (statuses or {}).items()}


def attendance_to_out(record: StudentAttendance) -> AttendanceOut:
    return AttendanceOut(
        id=record.date_key,
        school_id=record.school_id,
        classroom_id=record.classroom_id,
        date=to_iso(record.date),
        statuses=dict(record.statuses),
        created_at=to_iso(record.created_at),
        updated_at=to_iso(record.updated_at),
    )


def tally_statuses(records: Iterable[AttendanceOut | StaffAttendanceOut]) -> dict[str, AttendanceTally]:
    """Fold daily sheets into per-person present/absent/late counts."""
    tallies: dict[str, AttendanceTally] = {}
    for record in records:
        for person_id, status in record.statuses.items():
            tally = tallies.setdefault(person_id, AttendanceTally())
            field = AttendanceStatus(status).value
            setattr(tally, field, getattr(tally, field) + 1)
    return tallies


class AttendanceService(BackendService):
    async def upsert(
        self,
        school_id: str,
        classroom_id: str,
        day: DateLike,
        statuses: Mapping[str, str] | None,
    ) -> AttendanceOut:
        """Create the day's sheet, or replace its statuses wholesale if it exists."""
        require_scope(school_id=school_id, classroom_id=classroom_id)
        self.backend.require()
        doc_id = attendance_doc_id(school_id, classroom_id, day)
        sheet = normalize_statuses(statuses)

        async def write() -> StudentAttendance:
            record = await StudentAttendance.get(doc_id)
            if record is None:
                record = StudentAttendance(
                    id=doc_id,
                    school_id=school_id,
                    classroom_id=classroom_id,
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
        logger.debug("Attendance saved for %s (%d entries)", doc_id, len(sheet))
        return attendance_to_out(record)

    async def get_for_date(self, school_id: str, classroom_id: str, day: DateLike) -> AttendanceOut | None:
        require_scope(school_id=school_id, classroom_id=classroom_id)
        if self._unavailable("get attendance"):
            return None
        record = await StudentAttendance.get(attendance_doc_id(school_id, classroom_id, day))
        if record is None:
            return None
        return attendance_to_out(record)

    async def get_for_range(
        self, school_id: str, classroom_id: str, start: DateLike, end: DateLike
    ) -> list[AttendanceOut]:
        """Sheets dated between ``start`` and ``end`` inclusive, oldest first."""
        require_scope(school_id=school_id, classroom_id=classroom_id)
        if self._unavailable("get monthly attendance"):
            return []
        records = (
            await StudentAttendance.find(
                StudentAttendance.school_id == school_id,
                StudentAttendance.classroom_id == classroom_id,
                StudentAttendance.date >= day_start(start),
                StudentAttendance.date <= day_end(end),
            )
            .sort("+date")
            .to_list()
        )
        return [attendance_to_out(r) for r in records]

    async def get_school_day(self, school_id: str, day: DateLike) -> list[AttendanceOut]:
        """Every classroom's sheet for one day (activity report)."""
        require_scope(school_id=school_id)
        if self._unavailable("get attendance"):
            return []
        records = (
            await StudentAttendance.find(
                StudentAttendance.school_id == school_id,
                StudentAttendance.date_key == date_key(day),
            )
            .sort("+classroom_id")
            .to_list()
        )
        return [attendance_to_out(r) for r in records]
