from datetime import date

import pytest

from schooldesk.models.attendance import AttendanceStatus, StaffAttendance
from schooldesk.models.teacher import TeacherCreate, TeacherUpdate
from schooldesk.services.staff_attendance import StaffAttendanceService
from schooldesk.services.teachers import TeacherService
from tests.conftest import OTHER_SCHOOL, SCHOOL

pytestmark = pytest.mark.anyio

DAY = date(2026, 10, 14)


async def _hire(backend, school_id, *names):
    teachers = TeacherService(backend)
    hired = []
    for i, name in enumerate(names, start=1):
        hired.append(await teachers.add(school_id, TeacherCreate(app_id=f"TCH-{i:04d}", full_name=name)))
    return hired


async def test_unmarked_day_defaults_everyone_present(backend):
    hired = await _hire(backend, SCHOOL, "Ada Obi", "Ben Kato", "Chloe Dube")
    service = StaffAttendanceService(backend)

    out = await service.get_for_date(SCHOOL, DAY)

    assert out.is_default is True
    assert out.id == "2026-10-14"
    assert out.statuses == {t.id: AttendanceStatus.PRESENT for t in hired}


async def test_default_sheet_is_not_persisted(backend):
    await _hire(backend, SCHOOL, "Ada Obi", "Ben Kato", "Chloe Dube")
    service = StaffAttendanceService(backend)

    first = await service.get_for_date(SCHOOL, DAY)
    second = await service.get_for_date(SCHOOL, DAY)

    assert await StaffAttendance.find_all().count() == 0
    assert second.is_default is True
    assert second.statuses == first.statuses


async def test_default_follows_the_current_roster(backend):
    hired = await _hire(backend, SCHOOL, "Ada Obi", "Ben Kato")
    await _hire(backend, OTHER_SCHOOL, "Elsewhere")
    await TeacherService(backend).update(SCHOOL, hired[1].id, TeacherUpdate(is_active=False))

    out = await StaffAttendanceService(backend).get_for_date(SCHOOL, DAY)
    assert out.statuses == {hired[0].id: AttendanceStatus.PRESENT}


async def test_no_teachers_means_no_sheet(backend):
    assert await StaffAttendanceService(backend).get_for_date(SCHOOL, DAY) is None


async def test_marked_day_returns_the_stored_sheet(backend):
    hired = await _hire(backend, SCHOOL, "Ada Obi", "Ben Kato")
    service = StaffAttendanceService(backend)
    await service.upsert(SCHOOL, DAY, {hired[0].id: "absent"})

    out = await service.get_for_date(SCHOOL, DAY)
    assert out.is_default is False
    assert out.statuses == {hired[0].id: AttendanceStatus.ABSENT}


async def test_staff_upsert_overwrites(backend):
    service = StaffAttendanceService(backend)
    await service.upsert(SCHOOL, DAY, {"t1": "present", "t2": "present"})
    out = await service.upsert(SCHOOL, DAY, {"t2": "late"})

    assert out.statuses == {"t2": AttendanceStatus.LATE}
    assert out.updated_at is not None
    stored = await StaffAttendance.get("schools/school-1/staffAttendance/2026-10-14")
    assert stored.statuses == {"t2": AttendanceStatus.LATE}


async def test_staff_range(backend):
    service = StaffAttendanceService(backend)
    await service.upsert(SCHOOL, date(2026, 10, 2), {"t1": "present"})
    await service.upsert(SCHOOL, date(2026, 10, 1), {"t1": "absent"})
    await service.upsert(SCHOOL, date(2026, 11, 1), {"t1": "absent"})
    await service.upsert(OTHER_SCHOOL, date(2026, 10, 5), {"t9": "absent"})

    records = await service.get_for_range(SCHOOL, date(2026, 10, 1), date(2026, 10, 31))
    assert [r.id for r in records] == ["2026-10-01", "2026-10-02"]


async def test_staff_reads_degrade_without_a_backend(offline_backend):
    service = StaffAttendanceService(offline_backend)
    assert await service.get_for_date(SCHOOL, DAY) is None
    assert await service.get_for_range(SCHOOL, DAY, DAY) == []
