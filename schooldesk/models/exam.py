"""Exam results: per-subject scores with derived total and average."""
from datetime import datetime
from typing import Optional, Union

import pymongo
from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field
from pymongo import IndexModel

from schooldesk.timeutil import utcnow

YEARLY_TOTAL_EXAM_TYPE = "Yearly Exam Total"  # report view spanning every exam type


class SubjectScore(BaseModel):
    subject_name: str
    score: float


class ExamResult(Document):
    """One student's result sheet for an (academic year, exam type)."""

    school_id: Indexed(str)
    student_id: str
    student_name: str = ""
    classroom_id: Optional[str] = None
    classroom_name: Optional[str] = None
    academic_year: str  # e.g. 2025-26
    exam_type: str  # e.g. Mid Term, Final
    subjects: list[SubjectScore] = Field(default_factory=list)
    total_score: float = 0.0
    average_score: float = 0.0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    class Settings:
        name = "exam_results"
        use_revision = True
        use_state_management = True
        indexes = [
            IndexModel(
                [
                    ("school_id", pymongo.ASCENDING),
                    ("student_id", pymongo.ASCENDING),
                    ("academic_year", pymongo.ASCENDING),
                    ("exam_type", pymongo.ASCENDING),
                ],
                name="one_result_per_student_exam",
                unique=True,
            ),
            IndexModel(
                [
                    ("school_id", pymongo.ASCENDING),
                    ("classroom_name", pymongo.ASCENDING),
                    ("academic_year", pymongo.ASCENDING),
                ],
                name="classroom_year",
            ),
        ]


class ExamSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore")
    student_id: str
    student_name: str = ""
    classroom_id: Optional[str] = None
    classroom_name: Optional[str] = None
    academic_year: str
    exam_type: str
    scores: dict[str, Union[float, int, str, None]] = Field(default_factory=dict)  # subject -> score


class ExamResultOut(BaseModel):
    id: str
    school_id: str
    student_id: str
    student_name: str
    classroom_id: Optional[str] = None
    classroom_name: Optional[str] = None
    academic_year: str
    exam_type: str
    subjects: list[SubjectScore]
    total_score: float
    average_score: float
    created_at: str
    updated_at: Optional[str] = None
