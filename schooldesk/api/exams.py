"""Exam results entry and report-card queries."""
from typing import List, Optional

from fastapi import APIRouter, Query

from schooldesk.api.deps import Exams
from schooldesk.models.exam import ExamResultOut, ExamSubmission

router = APIRouter()


@router.post("/", response_model=ExamResultOut, status_code=201)
async def submit_exam_scores(school_id: str, data: ExamSubmission, exams: Exams):
    """Record subject scores; re-submitting a subject overwrites its score."""
    return await exams.submit_scores(school_id, data)


@router.get("/students/{student_id}", response_model=List[ExamResultOut])
async def list_student_results(school_id: str, student_id: str, exams: Exams):
    return await exams.list_for_student(school_id, student_id)


@router.get("/classrooms/{classroom_name}", response_model=List[ExamResultOut])
async def list_classroom_results(
    school_id: str,
    classroom_name: str,
    exams: Exams,
    academic_year: str = Query(..., description="e.g. 2025-26"),
    exam_type: Optional[str] = Query(None, description='Omit or "Yearly Exam Total" for every exam type'),
):
    return await exams.list_for_classroom(school_id, classroom_name, academic_year, exam_type)
