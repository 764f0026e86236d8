"""配置制約"""
from .base import (
    ConstraintPriority,
    ConstraintType,
    PlacementConstraint,
    PlacementConstraintValidator,
    PlacementContext,
)
from .placement_constraints import (
    DailyPeriodLimitConstraint,
    FirstLastPeriodConstraint,
    LunchBreakConstraint,
    MaxConsecutiveLessonConstraint,
)

__all__ = [
    'ConstraintPriority',
    'ConstraintType',
    'PlacementConstraint',
    'PlacementConstraintValidator',
    'PlacementContext',
    'DailyPeriodLimitConstraint',
    'FirstLastPeriodConstraint',
    'LunchBreakConstraint',
    'MaxConsecutiveLessonConstraint',
]
