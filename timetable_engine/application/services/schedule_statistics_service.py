"""時間割の統計・空き枠の集計"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ...domain.constants import LUNCH_PERIOD, WEEKDAYS
from ...domain.interfaces.repositories import IRosterRepository, IScheduleRepository
from ...domain.policies.grade_band_policy import GradeBandPolicy
from ...domain.services.conflict_detector import ConflictDetector


@dataclass
class ScheduleStatistics:
    """時間割全体の統計"""
    total_entries: int
    classes_with_schedule: int
    teachers_with_schedule: int
    conflict_count: int
    daily_distribution: Dict[int, int] = field(default_factory=dict)
    hourly_distribution: Dict[int, int] = field(default_factory=dict)


@dataclass
class TeacherWorkload:
    """教員ごとの担当量"""
    teacher_id: int
    total_hours: int
    class_count: int
    lesson_count: int


class ScheduleStatisticsService:
    """時間割の集計サービス"""
    
    def __init__(self,
                 schedule_repository: IScheduleRepository,
                 roster_repository: IRosterRepository,
                 conflict_detector: ConflictDetector,
                 grade_band_policy: Optional[GradeBandPolicy] = None):
        self.schedule_repository = schedule_repository
        self.roster_repository = roster_repository
        self.conflict_detector = conflict_detector
        self.grade_band_policy = grade_band_policy or GradeBandPolicy()
    
    def collect(self) -> ScheduleStatistics:
        entries = self.schedule_repository.get_entries()
        daily = Counter(entry.day_of_week for entry in entries)
        hourly = Counter(entry.time_slot for entry in entries)
        return ScheduleStatistics(
            total_entries=len(entries),
            classes_with_schedule=len({entry.class_id for entry in entries}),
            teachers_with_schedule=len({entry.teacher_id for entry in entries}),
            conflict_count=len(self.conflict_detector.detect_all_conflicts()),
            daily_distribution=dict(sorted(daily.items())),
            hourly_distribution=dict(sorted(hourly.items())),
        )
    
    def empty_slots(self, days: Sequence[int] = WEEKDAYS) -> List[Tuple[int, int]]:
        """どの学級にも授業が入っていない(曜日, 校時)の一覧
        
        校時の範囲は在籍学年の中で最も長い1日に合わせ、昼休みは除外する。
        """
        grades = {school_class.grade for school_class in self.roster_repository.get_classes()}
        max_periods = self.grade_band_policy.widest_day(grades)
        occupied = {(entry.day_of_week, entry.time_slot) for entry in self.schedule_repository.get_entries()}
        return [
            (day, period)
            for day in days
            for period in range(1, max_periods + 1)
            if period != LUNCH_PERIOD and (day, period) not in occupied
        ]
    
    def teacher_workload(self, teacher_id: int) -> TeacherWorkload:
        entries = [e for e in self.schedule_repository.get_entries() if e.teacher_id == teacher_id]
        return TeacherWorkload(
            teacher_id=teacher_id,
            total_hours=len(entries),
            class_count=len({e.class_id for e in entries}),
            lesson_count=len({e.lesson_id for e in entries}),
        )
