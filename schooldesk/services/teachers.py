"""School staff roster."""
from __future__ import annotations

from schooldesk.errors import RecordNotFound
from schooldesk.models.teacher import Teacher, TeacherCreate, TeacherOut, TeacherUpdate
from schooldesk.services.base import BackendService, require_scope, safe_object_id
from schooldesk.timeutil import day_start, to_iso, utcnow


def teacher_to_out(t: Teacher) -> TeacherOut:
    return TeacherOut(
        id=str(t.id),
        school_id=t.school_id,
        app_id=t.app_id,
        full_name=t.full_name,
        email=t.email,
        phone=t.phone,
        subject=t.subject,
        hire_date=to_iso(t.hire_date),
        is_active=t.is_active,
        created_at=to_iso(t.created_at),
    )


class TeacherService(BackendService):
    async def list(self, school_id: str, include_inactive: bool = False) -> list[TeacherOut]:
        require_scope(school_id=school_id)
        if self._unavailable("get teachers"):
            return []
        query = {"school_id": school_id}
        if not include_inactive:
            query["is_active"] = True
        teachers = await Teacher.find(query).sort("+full_name").to_list()
        return [teacher_to_out(t) for t in teachers]

    async def get(self, school_id: str, teacher_id: str) -> TeacherOut | None:
        require_scope(school_id=school_id)
        if self._unavailable("get teacher"):
            return None
        teacher = await self._load(school_id, teacher_id)
        return teacher_to_out(teacher) if teacher else None

    async def add(self, school_id: str, data: TeacherCreate) -> TeacherOut:
        require_scope(school_id=school_id)
        self.backend.require()
        fields = data.model_dump()
        if fields.get("hire_date") is not None:
            fields["hire_date"] = day_start(fields["hire_date"])
        teacher = Teacher(school_id=school_id, **fields)
        await teacher.insert()
        return teacher_to_out(teacher)

    async def update(self, school_id: str, teacher_id: str, changes: TeacherUpdate) -> TeacherOut:
        require_scope(school_id=school_id)
        self.backend.require()
        teacher = await self._load(school_id, teacher_id)
        if teacher is None:
            raise RecordNotFound("Teacher not found")
        update_data = changes.model_dump(exclude_unset=True)
        if update_data.get("hire_date") is not None:
            update_data["hire_date"] = day_start(update_data["hire_date"])
        for key, value in update_data.items():
            setattr(teacher, key, value)
        teacher.updated_at = utcnow()
        await teacher.save()
        return teacher_to_out(teacher)

    async def delete(self, school_id: str, teacher_id: str) -> None:
        require_scope(school_id=school_id)
        self.backend.require()
        teacher = await self._load(school_id, teacher_id)
        if teacher is None:
            raise RecordNotFound("Teacher not found")
        await teacher.delete()

    async def _load(self, school_id: str, teacher_id: str) -> Teacher | None:
        oid = safe_object_id(teacher_id)
        if oid is None:
            return None
        return await Teacher.find_one(Teacher.id == oid, Teacher.school_id == school_id)
