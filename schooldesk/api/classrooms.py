"""Classroom CRUD. Attendance for a classroom lives under the same prefix in api/attendance.py."""
from typing import List

from fastapi import APIRouter, HTTPException

from schooldesk.api.deps import Classrooms
from schooldesk.models.classroom import ClassroomCreate, ClassroomOut, ClassroomUpdate

router = APIRouter()


@router.get("/", response_model=List[ClassroomOut])
async def list_classrooms(school_id: str, classrooms: Classrooms):
    return await classrooms.list(school_id)


@router.post("/", response_model=ClassroomOut, status_code=201)
async def create_classroom(school_id: str, data: ClassroomCreate, classrooms: Classrooms):
    return await classrooms.add(school_id, data)


@router.get("/{classroom_id}", response_model=ClassroomOut)
async def get_classroom(school_id: str, classroom_id: str, classrooms: Classrooms):
    classroom = await classrooms.get(school_id, classroom_id)
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return classroom


@router.patch("/{classroom_id}", response_model=ClassroomOut)
async def update_classroom(school_id: str, classroom_id: str, data: ClassroomUpdate, classrooms: Classrooms):
    return await classrooms.update(school_id, classroom_id, data)


@router.delete("/{classroom_id}", status_code=204)
async def delete_classroom(school_id: str, classroom_id: str, classrooms: Classrooms):
    await classrooms.delete(school_id, classroom_id)
