"""時間割生成の代表的なシナリオ"""
from collections import Counter

import pytest

from timetable_engine.application.use_cases import GenerateScheduleUseCase, GenerationConfig
from timetable_engine.domain.entities.roster import GuidanceCounselor
from timetable_engine.domain.exceptions import RosterLookupError
from timetable_engine.domain.value_objects import ConflictKind, ScheduleEntry

from conftest import GUIDANCE, MATH, make_class, make_lesson, make_teacher, make_workspace


def run(ws, **config):
    use_case = GenerateScheduleUseCase(ws.roster, ws.schedule, ws.availability)
    return use_case.execute(GenerationConfig(**config))


def test_two_hour_lesson_lands_on_two_days():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1)],
        lessons=[make_lesson(1, MATH, 2)],
    )
    
    report = run(ws)
    
    entries = ws.schedule.get_entries()
    assert len(entries) == 2
    assert len({e.day_of_week for e in entries}) == 2
    assert report.failed_count == 0
    assert report.placed_count == 2
    assert report.success


def test_five_hour_lesson_is_split_over_three_days():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1)],
        lessons=[make_lesson(1, MATH, 5)],
    )
    
    report = run(ws)
    
    per_day = Counter(e.day_of_week for e in ws.schedule.get_entries())
    assert len(per_day) == 3
    assert sorted(per_day.values()) == [1, 2, 2]
    assert report.placed_count == 5


def test_guidance_lesson_is_taught_by_counselor():
    ws = make_workspace(
        teachers=[make_teacher(1, "Rehberlik"), make_teacher(2, None)],
        classes=[make_class(1)],
        lessons=[make_lesson(1, GUIDANCE, 2)],
        counselors=[GuidanceCounselor(teacher_id=2, class_id=1)],
    )
    
    run(ws)
    
    entries = ws.schedule.get_entries()
    assert len(entries) == 2
    assert {e.teacher_id for e in entries} == {2}
    assert len({e.day_of_week for e in entries}) == 1
    first, second = sorted(e.time_slot for e in entries)
    assert second == first + 1


def test_unavailable_teacher_fails_whole_lesson():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1)],
        lessons=[make_lesson(1, MATH, 3)],
    )
    for day in range(1, 8):
        for period in range(1, 9):
            ws.availability.mark_unavailable(1, day, period)
    
    report = run(ws)
    
    assert report.failed_count == 3
    assert ws.lesson_entries(1) == []
    assert not report.success
    assert [r.lesson_id for r in report.failed_lessons] == [1]


def test_candidate_for_busy_teacher_reports_double_booking():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1, section="A"), make_class(2, section="B")],
    )
    ws.schedule.add_entry(ScheduleEntry(class_id=1, teacher_id=1, lesson_id=1, day_of_week=1, time_slot=1))
    
    conflicts = ws.detector.detect_entry_conflicts(
        ScheduleEntry(class_id=2, teacher_id=1, lesson_id=1, day_of_week=1, time_slot=1)
    )
    
    assert len(conflicts) == 1
    assert conflicts[0].kind == ConflictKind.TEACHER_DOUBLE_BOOKING


def test_grade_scope_keeps_other_grades():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1, grade=6), make_class(2, grade=9)],
        lessons=[make_lesson(1, MATH, 2, grade=6), make_lesson(2, MATH, 2, grade=9)],
    )
    run(ws)
    grade9_before = sorted(e.placement() for e in ws.schedule.get_entries(classes=[2]))
    
    report = run(ws, grade=6)
    
    assert report.placed_count == 2
    assert sorted(e.placement() for e in ws.schedule.get_entries(classes=[2])) == grade9_before
    assert len(ws.schedule.get_entries(classes=[1])) == 2
    assert ws.detector.detect_all_conflicts() == []


def lesson_without_class_workspace():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1, grade=9)],
        lessons=[make_lesson(1, MATH, 2, grade=9), make_lesson(2, MATH, 2, grade=11)],
    )
    ws.schedule.add_entry(ScheduleEntry(class_id=1, teacher_id=1, lesson_id=1,
                                        day_of_week=1, time_slot=1))
    return ws


def test_lesson_for_grade_without_class_stops_generation():
    ws = lesson_without_class_workspace()
    
    with pytest.raises(RosterLookupError) as exc_info:
        run(ws)
    
    assert exc_info.value.entity == "lesson"
    assert exc_info.value.entity_id == 2
    assert len(ws.schedule.get_entries()) == 1


def test_grade_scope_ignores_lessons_of_other_grades():
    ws = lesson_without_class_workspace()
    
    report = run(ws, grade=9)
    
    assert report.success
    assert report.placed_count == 2


def test_report_serialization():
    ws = make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1)],
        lessons=[make_lesson(1, MATH, 2)],
    )
    
    data = run(ws).to_dict()
    
    assert data['success'] is True
    assert data['placed_count'] == 2
    assert data['conflicts'] == []
    assert "2時間を配置" in data['message']
