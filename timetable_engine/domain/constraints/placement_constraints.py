"""候補スロットの絞り込みに使う配置制約"""
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set

from .base import (
    ConstraintPriority,
    ConstraintType,
    PlacementConstraint,
    PlacementContext,
)
from ..constants import (
    DEFAULT_AVOID_FIRST_LAST_PERIOD,
    DEFAULT_MAX_CONSECUTIVE_LESSONS,
    LUNCH_PERIOD,
)
from ..value_objects.schedule_entry import ScheduleEntry


class LunchBreakConstraint(PlacementConstraint):
    """昼休みの校時には配置しない"""
    
    def __init__(self, lunch_period: int = LUNCH_PERIOD):
        super().__init__(
            ConstraintType.HARD,
            ConstraintPriority.CRITICAL,
            name="昼休み制約",
            description=f"{lunch_period}限には授業を配置しない"
        )
        self.lunch_period = lunch_period
    
    def check(self, candidates: Sequence[ScheduleEntry], context: PlacementContext) -> bool:
        return all(entry.time_slot != self.lunch_period for entry in candidates)


class DailyPeriodLimitConstraint(PlacementConstraint):
    """学級の1日の校時数を超えない"""
    
    def __init__(self):
        super().__init__(
            ConstraintType.HARD,
            ConstraintPriority.CRITICAL,
            name="校時数制約",
            description="学年帯ごとの最終校時より後には配置しない"
        )
    
    def check(self, candidates: Sequence[ScheduleEntry], context: PlacementContext) -> bool:
        return all(entry.time_slot <= context.max_periods for entry in candidates)


class FirstLastPeriodConstraint(PlacementConstraint):
    """指定された授業を1限・最終校時に配置しない"""
    
    def __init__(self, lesson_names: Iterable[str] = DEFAULT_AVOID_FIRST_LAST_PERIOD):
        super().__init__(
            ConstraintType.SOFT,
            ConstraintPriority.MEDIUM,
            name="初回・最終校時回避制約",
            description="体育などの授業を1日の最初と最後の校時から外す"
        )
        self.lesson_names = {name.strip().lower() for name in lesson_names}
    
    def check(self, candidates: Sequence[ScheduleEntry], context: PlacementContext) -> bool:
        if context.lesson.name.strip().lower() not in self.lesson_names:
            return True
        edges = {1, context.max_periods}
        return all(entry.time_slot not in edges for entry in candidates)


class MaxConsecutiveLessonConstraint(PlacementConstraint):
    """同じ授業が同じ日に連続する校時数の上限"""
    
    def __init__(self, max_consecutive: int = DEFAULT_MAX_CONSECUTIVE_LESSONS):
        super().__init__(
            ConstraintType.SOFT,
            ConstraintPriority.MEDIUM,
            name="連続授業上限制約",
            description=f"同じ授業は1日に{max_consecutive}校時までしか連続させない"
        )
        self.max_consecutive = max_consecutive
    
    def check(self, candidates: Sequence[ScheduleEntry], context: PlacementContext) -> bool:
        periods_by_day: Dict[int, Set[int]] = defaultdict(set)
        for entry in candidates:
            periods_by_day[entry.day_of_week].add(entry.time_slot)
        
        for day, periods in periods_by_day.items():
            combined = periods | context.lesson_periods.get(day, set())
            if self.longest_run(combined) > self.max_consecutive:
                return False
        return True
    
    @staticmethod
    def longest_run(periods: Iterable[int]) -> int:
        """連続する校時の最長の長さ"""
        ordered: List[int] = sorted(set(periods))
        longest = 0
        current = 0
        previous = None
        for period in ordered:
            if previous is not None and period == previous + 1:
                current += 1
            else:
                current = 1
            longest = max(longest, current)
            previous = period
        return longest
