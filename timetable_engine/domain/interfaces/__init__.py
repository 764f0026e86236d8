"""ドメイン層のインターフェース"""
from .repositories import (
    IAvailabilityRepository,
    IRosterRepository,
    IScheduleRepository,
)
from .teacher_matcher import ITeacherMatcher

__all__ = [
    'IAvailabilityRepository',
    'IRosterRepository',
    'IScheduleRepository',
    'ITeacherMatcher',
]
