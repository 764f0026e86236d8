"""ドメインエンティティ"""
from .roster import (
    GuidanceCounselor,
    Lesson,
    SchoolClass,
    Teacher,
    TeacherAvailability,
)

__all__ = [
    'GuidanceCounselor',
    'Lesson',
    'SchoolClass',
    'Teacher',
    'TeacherAvailability',
]
