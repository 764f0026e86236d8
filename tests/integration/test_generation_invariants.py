"""学校全体の生成結果が満たすべき性質"""
from collections import Counter, defaultdict

import pytest

from timetable_engine.application.use_cases import (
    GenerateScheduleUseCase,
    GenerationConfig,
    ValidateScheduleUseCase,
)
from timetable_engine.domain.constants import LUNCH_PERIOD
from timetable_engine.domain.constraints import MaxConsecutiveLessonConstraint
from timetable_engine.domain.policies.grade_band_policy import GradeBandPolicy

from conftest import MATH, PE


@pytest.fixture
def generated(school_workspace):
    use_case = GenerateScheduleUseCase(
        school_workspace.roster, school_workspace.schedule, school_workspace.availability
    )
    report = use_case.execute(GenerationConfig())
    return school_workspace, use_case, report


def lesson_by_id(ws):
    return {lesson.id: lesson for grade in (6, 9) for lesson in ws.roster.get_lessons_for_grade(grade)}


class TestGeneratedSchedule:
    
    def test_everything_is_placed(self, generated):
        _, _, report = generated
        
        assert report.success
        assert report.failed_count == 0
        assert report.placed_count == 4 * (5 + 4 + 3 + 2 + 2)
    
    def test_no_double_booking(self, generated):
        ws, _, _ = generated
        entries = ws.schedule.get_entries()
        
        assert len({e.teacher_key for e in entries}) == len(entries)
        assert len({e.class_key for e in entries}) == len(entries)
    
    def test_lunch_period_is_empty(self, generated):
        ws, _, _ = generated
        
        assert all(e.time_slot != LUNCH_PERIOD for e in ws.schedule.get_entries())
    
    def test_periods_within_grade_band(self, generated):
        ws, _, _ = generated
        policy = GradeBandPolicy()
        
        for entry in ws.schedule.get_entries():
            grade = ws.roster.get_class(entry.class_id).grade
            assert entry.time_slot <= policy.max_periods_per_day(grade)
    
    def test_five_hour_lessons_are_two_two_one(self, generated):
        ws, _, _ = generated
        lessons = lesson_by_id(ws)
        
        for lesson_id, lesson in lessons.items():
            if lesson.weekly_hours != 5:
                continue
            for school_class in ws.roster.get_classes(lesson.grade):
                per_day = Counter(e.day_of_week for e in ws.lesson_entries(lesson_id, school_class.id))
                assert sorted(per_day.values()) == [1, 2, 2]
    
    def test_pe_avoids_first_and_last_period(self, generated):
        ws, _, _ = generated
        lessons = lesson_by_id(ws)
        policy = GradeBandPolicy()
        
        for entry in ws.schedule.get_entries():
            if lessons[entry.lesson_id].name != PE:
                continue
            last = policy.max_periods_per_day(ws.roster.get_class(entry.class_id).grade)
            assert entry.time_slot not in (1, last)
    
    def test_consecutive_runs_within_limit(self, generated):
        ws, _, _ = generated
        runs = defaultdict(set)
        for entry in ws.schedule.get_entries():
            runs[(entry.class_id, entry.lesson_id, entry.day_of_week)].add(entry.time_slot)
        
        for periods in runs.values():
            assert MaxConsecutiveLessonConstraint.longest_run(periods) <= 2
    
    def test_audit_agrees_with_placement(self, generated):
        ws, _, _ = generated
        
        result = ValidateScheduleUseCase(ws.detector).execute()
        
        assert result.is_valid
        assert result.conflicts_count == 0
    
    def test_regeneration_is_idempotent(self, generated):
        ws, use_case, first = generated
        before = sorted(e.placement() for e in ws.schedule.get_entries())
        
        second = use_case.execute(GenerationConfig())
        
        assert second.failed_count == first.failed_count
        assert len(second.remaining_conflicts) == len(first.remaining_conflicts)
        assert sorted(e.placement() for e in ws.schedule.get_entries()) == before


def test_stricter_consecutive_limit_is_respected(school_workspace):
    use_case = GenerateScheduleUseCase(
        school_workspace.roster, school_workspace.schedule, school_workspace.availability
    )
    
    report = use_case.execute(GenerationConfig(max_consecutive_lessons=1))
    
    # 2連続ブロックが必要な週5時間とガイダンスは置けない
    assert report.failed_count > 0
    runs = defaultdict(set)
    for entry in school_workspace.schedule.get_entries():
        runs[(entry.class_id, entry.lesson_id, entry.day_of_week)].add(entry.time_slot)
    assert all(MaxConsecutiveLessonConstraint.longest_run(p) <= 1 for p in runs.values())


def test_math_teachers_share_the_load(generated):
    ws, _, _ = generated
    lessons = lesson_by_id(ws)
    math_teachers = {
        e.teacher_id for e in ws.schedule.get_entries() if lessons[e.lesson_id].name == MATH
    }
    
    assert math_teachers <= {1, 2}
