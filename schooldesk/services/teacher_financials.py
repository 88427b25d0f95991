"""Teacher payroll: monthly records seeded from the roster, net salary kept in step."""
from __future__ import annotations

import logging

from pymongo.errors import DuplicateKeyError

from schooldesk.config import settings
from schooldesk.errors import RecordNotFound
from schooldesk.models.teacher import Teacher
from schooldesk.models.teacher_financial import (
    SalaryStatus,
    TeacherFinancialOut,
    TeacherFinancialRecord,
    TeacherFinancialUpdate,
)
from schooldesk.services.base import BackendService, require_scope, safe_object_id
from schooldesk.timeutil import DateLike, month_label, utcnow

logger = logging.getLogger(__name__)

SALARY_COMPONENTS = ("base_salary", "bonus", "deductions", "advance")


def net_salary(base_salary: float, bonus: float, deductions: float, advance: float) -> float:
    return (base_salary + bonus) - (deductions + advance)


def financial_to_out(r: TeacherFinancialRecord) -> TeacherFinancialOut:
    return TeacherFinancialOut(
        id=str(r.id),
        school_id=r.school_id,
        teacher_id=r.teacher_id,
        teacher_name=r.teacher_name,
        month=r.month,
        base_salary=r.base_salary or 0,
        bonus=r.bonus or 0,
        deductions=r.deductions or 0,
        advance=r.advance or 0,
        net_salary=r.net_salary or 0,
        paid_amount=r.paid_amount or 0,
        status=r.status or SalaryStatus.PENDING,
    )


class TeacherFinancialService(BackendService):
    async def get_for_month(self, school_id: str, month: DateLike) -> list[TeacherFinancialOut]:
        """Payroll for the month; the first look at a month seeds one Pending record per teacher."""
        require_scope(school_id=school_id)
        if self._unavailable("get teacher financials"):
            return []
        label = month_label(month)
        records = await self._find_month(school_id, label)
        if records:
            return [financial_to_out(r) for r in records]

        teachers = await Teacher.find(Teacher.school_id == school_id, Teacher.is_active == True).to_list()
        if not teachers:
            return []
        base = settings.default_base_salary
        for t in teachers:
            try:
                await TeacherFinancialRecord(
                    school_id=school_id,
                    teacher_id=t.app_id,
                    teacher_name=t.full_name,
                    month=label,
                    base_salary=base,
                    net_salary=net_salary(base, 0, 0, 0),
                    status=SalaryStatus.PENDING,
                ).insert()
            except DuplicateKeyError:
                logger.info("Payroll for %s in %s/%s was seeded concurrently", t.app_id, school_id, label)
                continue
        logger.info("Seeded %s payroll for %d teachers in %s", label, len(teachers), school_id)
        return [financial_to_out(r) for r in await self._find_month(school_id, label)]

    async def update(self, school_id: str, record_id: str, changes: TeacherFinancialUpdate) -> TeacherFinancialOut:
        require_scope(school_id=school_id)
        self.backend.require()
        oid = safe_object_id(record_id)
        record = None
        if oid is not None:
            record = await TeacherFinancialRecord.find_one(
                TeacherFinancialRecord.id == oid, TeacherFinancialRecord.school_id == school_id
            )
        if record is None:
            raise RecordNotFound("Financial record not found.")

        update_data = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
        components_changed = any(
            key in update_data and update_data[key] != getattr(record, key) for key in SALARY_COMPONENTS
        )
        for key, value in update_data.items():
            setattr(record, key, value)
        if components_changed:
            record.net_salary = net_salary(record.base_salary, record.bonus, record.deductions, record.advance)
        record.updated_at = utcnow()
        await record.save()
        return financial_to_out(record)

    async def _find_month(self, school_id: str, label: str) -> list[TeacherFinancialRecord]:
        return (
            await TeacherFinancialRecord.find(
                TeacherFinancialRecord.school_id == school_id,
                TeacherFinancialRecord.month == label,
            )
            .sort("+teacher_name")
            .to_list()
        )
