"""Classrooms, with head counts derived from the student roster."""
from __future__ import annotations

from collections import Counter

from schooldesk.errors import RecordNotFound
from schooldesk.models.classroom import UNASSIGNED_TEACHER, Classroom, ClassroomCreate, ClassroomOut, ClassroomUpdate
from schooldesk.models.student import Student, StudentStatus
from schooldesk.services.base import BackendService, require_scope, safe_object_id
from schooldesk.timeutil import utcnow


def classroom_to_out(c: Classroom, student_count: int) -> ClassroomOut:
    return ClassroomOut(
        id=str(c.id),
        school_id=c.school_id,
        name=c.name,
        teacher=c.teacher or UNASSIGNED_TEACHER,
        academic_year=c.academic_year,
        student_count=student_count,
    )


class ClassroomService(BackendService):
    """``student_count`` is never stored; it is the number of active students whose grade is the classroom name."""

    async def list(self, school_id: str) -> list[ClassroomOut]:
        require_scope(school_id=school_id)
        if self._unavailable("get classrooms"):
            return []
        classrooms = await Classroom.find(Classroom.school_id == school_id).sort("+name").to_list()
        if not classrooms:
            return []
        # one roster read for the whole school
        students = await Student.find(Student.school_id == school_id, Student.status == StudentStatus.ACTIVE).to_list()
        counts = Counter(s.grade for s in students)
        return [classroom_to_out(c, counts[c.name]) for c in classrooms]

    async def get(self, school_id: str, classroom_id: str) -> ClassroomOut | None:
        require_scope(school_id=school_id)
        if self._unavailable("get classroom"):
            return None
        classroom = await self._load(school_id, classroom_id)
        if classroom is None:
            return None
        return classroom_to_out(classroom, await self._count(school_id, classroom.name))

    async def add(self, school_id: str, data: ClassroomCreate) -> ClassroomOut:
        require_scope(school_id=school_id)
        self.backend.require()
        classroom = Classroom(school_id=school_id, **data.model_dump())
        await classroom.insert()
        return classroom_to_out(classroom, await self._count(school_id, classroom.name))

    async def update(self, school_id: str, classroom_id: str, changes: ClassroomUpdate) -> ClassroomOut:
        require_scope(school_id=school_id)
        self.backend.require()
        classroom = await self._load(school_id, classroom_id)
        if classroom is None:
            raise RecordNotFound("Classroom not found")
        for key, value in changes.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(classroom, key, value)
        classroom.updated_at = utcnow()
        await classroom.save()
        return classroom_to_out(classroom, await self._count(school_id, classroom.name))

    async def delete(self, school_id: str, classroom_id: str) -> None:
        """Deleting a missing classroom is a no-op; enrolled students are left alone."""
        require_scope(school_id=school_id)
        self.backend.require()
        classroom = await self._load(school_id, classroom_id)
        if classroom is not None:
            await classroom.delete()

    async def _count(self, school_id: str, name: str) -> int:
        return await Student.find(
            Student.school_id == school_id, Student.grade == name, Student.status == StudentStatus.ACTIVE
        ).count()

    async def _load(self, school_id: str, classroom_id: str) -> Classroom | None:
        oid = safe_object_id(classroom_id)
        if oid is None:
            return None
        return await Classroom.find_one(Classroom.id == oid, Classroom.school_id == school_id)
