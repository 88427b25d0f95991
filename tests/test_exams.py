import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from pymongo.errors import DuplicateKeyError

from schooldesk.errors import BackendUnavailable, InvalidScore, NoScoresProvided
from schooldesk.models.exam import ExamResult, ExamSubmission, SubjectScore
from schooldesk.services.exams import ExamResultService, merge_subjects, parse_scores, summarize
from tests.conftest import OTHER_SCHOOL, SCHOOL

pytestmark = pytest.mark.anyio


def submission(scores, student_id="STU-0001", exam_type="Mid Term", **extra):
    fields = dict(
        student_id=student_id,
        student_name="Tariro Moyo",
        classroom_id="cls-1",
        classroom_name="Form 2A",
        academic_year="2025-26",
        exam_type=exam_type,
        scores=scores,
    )
    fields.update(extra)
    return ExamSubmission(**fields)


def subjects(*pairs):
    return [SubjectScore(subject_name=name, score=score) for name, score in pairs]


def test_parse_scores_drops_blank_entries():
    parsed = parse_scores({"Math": "90", "Eng": "  ", "Sci": 61.5, "Art": None})
    assert parsed == subjects(("Math", 90.0), ("Sci", 61.5))


def test_parse_scores_rejects_all_blank():
    with pytest.raises(NoScoresProvided):
        parse_scores({"Math": "", "Eng": "  "})
    with pytest.raises(NoScoresProvided):
        parse_scores({})


def test_parse_scores_rejects_non_numbers():
    with pytest.raises(InvalidScore) as exc:
        parse_scores({"Math": "ninety"})
    assert exc.value.subject == "Math"
    with pytest.raises(InvalidScore):
        parse_scores({"Math": "nan"})


def test_merge_overwrites_in_place_and_appends_new_subjects():
    merged = merge_subjects(subjects(("Math", 80), ("Eng", 70)), subjects(("Math", 90), ("Sci", 60)))
    assert merged == subjects(("Math", 90), ("Eng", 70), ("Sci", 60))


def test_merge_matches_subjects_case_insensitively():
    merged = merge_subjects(subjects(("Mathematics", 80), ("English", 70)), subjects(("MATHEMATICS", 55)))
    assert [s.score for s in merged] == [55, 70]
    assert len(merged) == 2


def test_summarize():
    total, average = summarize(subjects(("Math", 90), ("Eng", 70), ("Sci", 60)))
    assert total == 220
    assert average == pytest.approx(73.3333, rel=1e-4)


async def test_first_submission_creates_the_result(backend):
    out = await ExamResultService(backend).submit_scores(SCHOOL, submission({"Math": 80, "Eng": "70"}))

    assert out.subjects == subjects(("Math", 80), ("Eng", 70))
    assert out.total_score == 150
    assert out.average_score == 75
    assert out.school_id == SCHOOL
    assert out.classroom_name == "Form 2A"
    assert datetime.fromisoformat(out.created_at).tzinfo is not None


async def test_later_submission_merges_and_recomputes(backend):
    service = ExamResultService(backend)
    await service.submit_scores(SCHOOL, submission({"Math": 80, "Eng": 70}))
    out = await service.submit_scores(SCHOOL, submission({"Math": 90, "Sci": 60}))

    assert out.subjects == subjects(("Math", 90), ("Eng", 70), ("Sci", 60))
    assert out.total_score == 220
    assert out.average_score == pytest.approx(220 / 3)
    assert out.updated_at is not None
    assert await ExamResult.find_all().count() == 1

    stored = await ExamResult.find_one(ExamResult.student_id == "STU-0001")
    assert stored.total_score == sum(s.score for s in stored.subjects)
    assert stored.average_score == pytest.approx(stored.total_score / len(stored.subjects))


async def test_blank_batch_writes_nothing(backend):
    service = ExamResultService(backend)
    with pytest.raises(NoScoresProvided):
        await service.submit_scores(SCHOOL, submission({"Math": "", "Eng": "  "}))
    assert await ExamResult.find_all().count() == 0


async def test_blank_entries_leave_existing_scores_alone(backend):
    service = ExamResultService(backend)
    await service.submit_scores(SCHOOL, submission({"Math": 80, "Eng": 70}))
    out = await service.submit_scores(SCHOOL, submission({"Math": "", "Eng": 75}))
    assert out.subjects == subjects(("Math", 80), ("Eng", 75))


async def test_each_exam_type_gets_its_own_result(backend):
    service = ExamResultService(backend)
    await service.submit_scores(SCHOOL, submission({"Math": 80}, exam_type="Mid Term"))
    await service.submit_scores(SCHOOL, submission({"Math": 60}, exam_type="Final"))
    await service.submit_scores(OTHER_SCHOOL, submission({"Math": 10}, exam_type="Final"))

    results = await service.list_for_student(SCHOOL, "STU-0001")
    assert sorted(r.exam_type for r in results) == ["Final", "Mid Term"]


async def test_one_result_per_student_exam_is_enforced(backend):
    await ExamResultService(backend).submit_scores(SCHOOL, submission({"Math": 80}))
    duplicate = ExamResult(
        school_id=SCHOOL,
        student_id="STU-0001",
        academic_year="2025-26",
        exam_type="Mid Term",
        subjects=subjects(("Math", 1)),
        total_score=1,
        average_score=1,
    )
    with pytest.raises(DuplicateKeyError):
        await duplicate.insert()


async def test_simultaneous_batches_on_an_existing_result_both_land(backend):
    service = ExamResultService(backend)
    await service.submit_scores(SCHOOL, submission({"Math": 80}))

    await asyncio.gather(
        service.submit_scores(SCHOOL, submission({"Eng": 70})),
        service.submit_scores(SCHOOL, submission({"Sci": 60})),
    )

    [stored] = await ExamResult.find_all().to_list()
    assert [s.subject_name for s in stored.subjects][0] == "Math"
    assert sorted(s.subject_name for s in stored.subjects) == ["Eng", "Math", "Sci"]
    assert stored.total_score == 210
    assert stored.average_score == 70


async def test_simultaneous_first_batches_share_one_result(backend):
    service = ExamResultService(backend)

    await asyncio.gather(
        service.submit_scores(SCHOOL, submission({"Math": 80})),
        service.submit_scores(SCHOOL, submission({"Eng": 60})),
    )

    results = await ExamResult.find_all().to_list()
    assert len(results) == 1
    assert sorted(s.subject_name for s in results[0].subjects) == ["Eng", "Math"]
    assert results[0].total_score == 140


async def _seed_result(student_id, exam_type, classroom_name, created_at, academic_year="2025-26"):
    await ExamResult(
        school_id=SCHOOL,
        student_id=student_id,
        classroom_name=classroom_name,
        academic_year=academic_year,
        exam_type=exam_type,
        subjects=subjects(("Math", 50)),
        total_score=50,
        average_score=50,
        created_at=created_at,
    ).insert()


async def test_student_results_newest_first(backend):
    now = datetime.now(timezone.utc)
    await _seed_result("STU-0001", "Mid Term", "Form 2A", now - timedelta(days=30))
    await _seed_result("STU-0001", "Final", "Form 2A", now)

    results = await ExamResultService(backend).list_for_student(SCHOOL, "STU-0001")
    assert [r.exam_type for r in results] == ["Final", "Mid Term"]


async def test_classroom_results_filter_by_exam_type(backend):
    now = datetime.now(timezone.utc)
    await _seed_result("STU-0001", "Mid Term", "Form 2A", now - timedelta(days=2))
    await _seed_result("STU-0002", "Final", "Form 2A", now - timedelta(days=1))
    await _seed_result("STU-0003", "Final", "Form 2B", now)
    await _seed_result("STU-0004", "Final", "Form 2A", now, academic_year="2024-25")
    service = ExamResultService(backend)

    finals = await service.list_for_classroom(SCHOOL, "Form 2A", "2025-26", "Final")
    assert [r.student_id for r in finals] == ["STU-0002"]

    yearly = await service.list_for_classroom(SCHOOL, "Form 2A", "2025-26", "Yearly Exam Total")
    assert [r.student_id for r in yearly] == ["STU-0002", "STU-0001"]

    everything = await service.list_for_classroom(SCHOOL, "Form 2A", "2025-26")
    assert len(everything) == 2


async def test_exam_writes_need_a_backend(offline_backend):
    with pytest.raises(BackendUnavailable):
        await ExamResultService(offline_backend).submit_scores(SCHOOL, submission({"Math": 1}))
    assert await ExamResultService(offline_backend).list_for_student(SCHOOL, "STU-0001") == []
