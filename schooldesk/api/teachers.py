from typing import List

from fastapi import APIRouter, HTTPException

from schooldesk.api.deps import Teachers
from schooldesk.models.teacher import TeacherCreate, TeacherOut, TeacherUpdate

router = APIRouter()


@router.get("/", response_model=List[TeacherOut])
async def list_teachers(school_id: str, teachers: Teachers, include_inactive: bool = False):
    return await teachers.list(school_id, include_inactive=include_inactive)


@router.post("/", response_model=TeacherOut, status_code=201)
async def create_teacher(school_id: str, data: TeacherCreate, teachers: Teachers):
    return await teachers.add(school_id, data)


@router.get("/{teacher_id}", response_model=TeacherOut)
async def get_teacher(school_id: str, teacher_id: str, teachers: Teachers):
    teacher = await teachers.get(school_id, teacher_id)
    if not teacher:
        raise HTTPException(status_code=404, detail="Teacher not found")
    return teacher


@router.patch("/{teacher_id}", response_model=TeacherOut)
async def update_teacher(school_id: str, teacher_id: str, data: TeacherUpdate, teachers: Teachers):
    return await teachers.update(school_id, teacher_id, data)


@router.delete("/{teacher_id}", status_code=204)
async def delete_teacher(school_id: str, teacher_id: str, teachers: Teachers):
    await teachers.delete(school_id, teacher_id)
