from typing import List

from fastapi import APIRouter, HTTPException

from schooldesk.api.deps import Students
from schooldesk.models.student import StudentCreate, StudentOut, StudentUpdate

router = APIRouter()


@router.get("/", response_model=List[StudentOut])
async def list_students(school_id: str, students: Students):
    return await students.list(school_id)


@router.post("/", response_model=StudentOut, status_code=201)
async def create_student(school_id: str, data: StudentCreate, students: Students):
    return await students.add(school_id, data)


@router.get("/by-app-id/{app_id}", response_model=StudentOut)
async def get_student_by_app_id(school_id: str, app_id: str, students: Students):
    student = await students.get_by_app_id(school_id, app_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.get("/{student_id}", response_model=StudentOut)
async def get_student(school_id: str, student_id: str, students: Students):
    student = await students.get(school_id, student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.patch("/{student_id}", response_model=StudentOut)
async def update_student(school_id: str, student_id: str, data: StudentUpdate, students: Students):
    return await students.update(school_id, student_id, data)


@router.delete("/{student_id}", status_code=204)
async def delete_student(school_id: str, student_id: str, students: Students):
    await students.delete(school_id, student_id)
