"""Student roster, looked up by document id or by the student's app id."""
from __future__ import annotations

import logging

from schooldesk.errors import RecordNotFound
from schooldesk.models.student import Student, StudentCreate, StudentOut, StudentUpdate
from schooldesk.services.base import BackendService, require_scope, safe_object_id
from schooldesk.timeutil import day_start, to_iso, utcnow

logger = logging.getLogger(__name__)


def student_to_out(s: Student) -> StudentOut:
    return StudentOut(
        id=str(s.id),
        school_id=s.school_id,
        app_id=s.app_id,
        full_name=s.full_name,
        contact_number=s.contact_number,
        gender=s.gender,
        date_of_birth=to_iso(s.date_of_birth),
        grade=s.grade,
        parent_app_id=s.parent_app_id,
        parent_name=s.parent_name,
        parent_contact=s.parent_contact,
        parent_email=s.parent_email,
        status=s.status,
        payment_type=s.payment_type,
        social_status=s.social_status,
        fee_amount=s.fee_amount,
        uses_bus=s.uses_bus,
        registration_date=to_iso(s.registration_date),
    )


class StudentService(BackendService):
    async def list(self, school_id: str) -> list[StudentOut]:
        require_scope(school_id=school_id)
        if self._unavailable("get students"):
            return []
        students = await Student.find(Student.school_id == school_id).sort("+full_name").to_list()
        return [student_to_out(s) for s in students]

    async def get(self, school_id: str, student_id: str) -> StudentOut | None:
        require_scope(school_id=school_id)
        if self._unavailable("get student"):
            return None
        student = await self._load(school_id, student_id)
        return student_to_out(student) if student else None

    async def get_by_app_id(self, school_id: str, app_id: str) -> StudentOut | None:
        require_scope(school_id=school_id, app_id=app_id)
        if self._unavailable("get student"):
            return None
        student = await Student.find_one(Student.school_id == school_id, Student.app_id == app_id)
        return student_to_out(student) if student else None

    async def add(self, school_id: str, data: StudentCreate) -> StudentOut:
        """Enrol a student as active; the registration date is stamped now."""
        require_scope(school_id=school_id)
        self.backend.require()
        fields = data.model_dump()
        fields["date_of_birth"] = day_start(fields["date_of_birth"])
        student = Student(school_id=school_id, **fields)
        await student.insert()
        logger.info("Enrolled %s (%s) in %s", student.app_id, student.grade, school_id)
        return student_to_out(student)

    async def update(self, school_id: str, student_id: str, changes: StudentUpdate) -> StudentOut:
        require_scope(school_id=school_id)
        self.backend.require()
        student = await self._load(school_id, student_id)
        if student is None:
            raise RecordNotFound("Student not found")
        update_data = changes.model_dump(exclude_unset=True)
        if update_data.get("date_of_birth") is not None:
            update_data["date_of_birth"] = day_start(update_data["date_of_birth"])
        for key, value in update_data.items():
            setattr(student, key, value)
        student.updated_at = utcnow()
        await student.save()
        return student_to_out(student)

    async def delete(self, school_id: str, student_id: str) -> None:
        require_scope(school_id=school_id)
        self.backend.require()
        student = await self._load(school_id, student_id)
        if student is None:
            raise RecordNotFound("Student not found for deletion.")
        await student.delete()

    async def _load(self, school_id: str, student_id: str) -> Student | None:
        oid = safe_object_id(student_id)
        if oid is None:
            return None
        return await Student.find_one(Student.id == oid, Student.school_id == school_id)
