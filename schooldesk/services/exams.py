"""Exam results: merge submitted subject scores and keep total/average in step."""
from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping, Optional

from schooldesk.errors import InvalidScore, NoScoresProvided
from schooldesk.models.exam import (
    YEARLY_TOTAL_EXAM_TYPE,
    ExamResult,
    ExamResultOut,
    ExamSubmission,
    SubjectScore,
)
from schooldesk.services.base import BackendService, require_scope, retry_on_conflict
from schooldesk.timeutil import to_iso, utcnow

logger = logging.getLogger(__name__)


def parse_scores(scores: Mapping[str, object] | None) -> list[SubjectScore]:
    """Turn a subject -> score mapping into subject entries.

    Blank entries are dropped; anything else must read as a number.
    """
    subjects: list[SubjectScore] = []
    for subject_name, raw in (scores or {}).items():
        if raw is None or str(raw).strip() == "":
            continue
        if isinstance(raw, bool):
            raise InvalidScore(subject_name, raw)
        try:
            value = float(raw.strip()) if isinstance(raw, str) else float(raw)
        except (TypeError, ValueError):
            raise InvalidScore(subject_name, raw)
        if not math.isfinite(value):
            raise InvalidScore(subject_name, raw)
        subjects.append(SubjectScore(subject_name=subject_name, score=value))
    if not subjects:
        raise NoScoresProvided()
    return subjects


def merge_subjects(existing: Iterable[SubjectScore], incoming: Iterable[SubjectScore]) -> list[SubjectScore]:
    """Overwrite matching subjects in place (case-insensitive), append the rest."""
    merged = [s.model_copy() for s in existing]
    positions: dict[str, int] = {}
    for i, subject in enumerate(merged):
        positions.setdefault(subject.subject_name.upper(), i)
    for subject in incoming:
        key = subject.subject_name.upper()
        if key in positions:
            merged[positions[key]] = subject.model_copy()
        else:
            positions[key] = len(merged)
            merged.append(subject.model_copy())
    return merged


def summarize(subjects: list[SubjectScore]) -> tuple[float, float]:
    total = sum(s.score for s in subjects)
    return total, total / len(subjects)


def exam_result_to_out(result: ExamResult) -> ExamResultOut:
    return ExamResultOut(
        id=str(result.id),
        school_id=result.school_id,
        student_id=result.student_id,
        student_name=result.student_name,
        classroom_id=result.classroom_id,
        classroom_name=result.classroom_name,
        academic_year=result.academic_year,
        exam_type=result.exam_type,
        subjects=[s.model_copy() for s in result.subjects],
        total_score=result.total_score,
        average_score=result.average_score,
        created_at=to_iso(result.created_at),
        updated_at=to_iso(result.updated_at),
    )


class ExamResultService(BackendService):
    async def submit_scores(self, school_id: str, submission: ExamSubmission) -> ExamResultOut:
        """Record a batch of subject scores for one student's exam.

        The first batch for a (student, academic year, exam type) creates the
        result sheet; later batches overwrite subjects they name and append new
        ones. Total and average are recomputed on every write.
        """
        require_scope(school_id=school_id, student_id=submission.student_id)
        self.backend.require()
        subjects = parse_scores(submission.scores)

        async def write() -> ExamResult:
            existing = await ExamResult.find_one(
                ExamResult.school_id == school_id,
                ExamResult.student_id == submission.student_id,
                ExamResult.academic_year == submission.academic_year,
                ExamResult.exam_type == submission.exam_type,
            )
            if existing is not None:
                existing.subjects = merge_subjects(existing.subjects, subjects)
                existing.total_score, existing.average_score = summarize(existing.subjects)
                existing.updated_at = utcnow()
                await existing.save()
                return existing

            total, average = summarize(subjects)
            result = ExamResult(
                school_id=school_id,
                **submission.model_dump(exclude={"scores"}),
                subjects=subjects,
                total_score=total,
                average_score=average,
            )
            await result.insert()
            return result

        result = await retry_on_conflict(write)
        logger.debug(
            "Exam result %s for student %s: %d subjects, total %.2f",
            result.exam_type,
            result.student_id,
            len(result.subjects),
            result.total_score,
        )
        return exam_result_to_out(result)

    async def list_for_student(self, school_id: str, student_id: str) -> list[ExamResultOut]:
        require_scope(school_id=school_id, student_id=student_id)
        if self._unavailable("get student exam results"):
            return []
        results = (
            await ExamResult.find(ExamResult.school_id == school_id, ExamResult.student_id == student_id)
            .sort("-created_at")
            .to_list()
        )
        return [exam_result_to_out(r) for r in results]

    async def list_for_classroom(
        self,
        school_id: str,
        classroom_name: str,
        academic_year: str,
        exam_type: Optional[str] = None,
    ) -> list[ExamResultOut]:
        """Results for a classroom and year; the yearly-total view spans every exam type."""
        require_scope(school_id=school_id, classroom_name=classroom_name)
        if self._unavailable("get classroom exam results"):
            return []
        query = {
            "school_id": school_id,
            "classroom_name": classroom_name,
            "academic_year": academic_year,
        }
        if exam_type and exam_type != YEARLY_TOTAL_EXAM_TYPE:
            query["exam_type"] = exam_type
        results = await ExamResult.find(query).sort("-created_at").to_list()
        return [exam_result_to_out(r) for r in results]
