"""テスト共通のフィクスチャとデータ作成ヘルパー"""
import logging

import pytest

from timetable_engine.domain.entities.roster import (
    GuidanceCounselor,
    Lesson,
    SchoolClass,
    Teacher,
)
from timetable_engine.domain.services.conflict_detector import ConflictDetector
from timetable_engine.infrastructure.config.logging_config import LoggingConfig
from timetable_engine.infrastructure.repositories.in_memory_repository import (
    InMemoryAvailabilityRepository,
    InMemoryRosterRepository,
    InMemoryScheduleRepository,
)

MATH = "Matematik"
TURKISH = "Türkçe"
SCIENCE = "Fen Bilimleri"
PE = "Beden Eğitimi ve Spor"
GUIDANCE = "Rehberlik ve Yönlendirme"


def make_teacher(teacher_id, subject, name=None):
    return Teacher(id=teacher_id, name=name or f"教員{teacher_id}", subject=subject)


def make_class(class_id, grade=9, section="A"):
    return SchoolClass(id=class_id, grade=grade, section=section)


def make_lesson(lesson_id, name, weekly_hours, grade=9):
    return Lesson(id=lesson_id, name=name, grade=grade, weekly_hours=weekly_hours)


class Workspace:
    """名簿・空き状況・時間割リポジトリ一式"""
    
    def __init__(self, teachers=(), classes=(), lessons=(), counselors=()):
        self.roster = InMemoryRosterRepository(teachers, classes, lessons, counselors)
        self.availability = InMemoryAvailabilityRepository()
        self.schedule = InMemoryScheduleRepository()
    
    @property
    def detector(self):
        return ConflictDetector(self.schedule, self.availability, self.roster)
    
    def lesson_entries(self, lesson_id, class_id=None):
        return [
            entry for entry in self.schedule.get_entries()
            if entry.lesson_id == lesson_id and (class_id is None or entry.class_id == class_id)
        ]


def make_workspace(teachers=(), classes=(), lessons=(), counselors=()):
    return Workspace(teachers, classes, lessons, counselors)


@pytest.fixture
def single_class_workspace():
    """9年A組と数学教員1名だけの最小構成"""
    return make_workspace(
        teachers=[make_teacher(1, MATH)],
        classes=[make_class(1)],
    )


@pytest.fixture
def school_workspace():
    """2学年4学級の小さな学校"""
    teachers = [
        make_teacher(1, MATH),
        make_teacher(2, MATH),
        make_teacher(3, TURKISH),
        make_teacher(4, TURKISH),
        make_teacher(5, SCIENCE),
        make_teacher(6, "Beden Eğitimi"),
        make_teacher(7, "Rehberlik"),
        make_teacher(8, "Rehberlik"),
    ]
    classes = [
        make_class(1, grade=6, section="A"),
        make_class(2, grade=6, section="B"),
        make_class(3, grade=9, section="A"),
        make_class(4, grade=9, section="B"),
    ]
    lessons = []
    lesson_id = 1
    for grade in (6, 9):
        for name, hours in ((MATH, 5), (TURKISH, 4), (SCIENCE, 3), (PE, 2), (GUIDANCE, 2)):
            lessons.append(make_lesson(lesson_id, name, hours, grade=grade))
            lesson_id += 1
    counselors = [
        GuidanceCounselor(teacher_id=7, class_id=1),
        GuidanceCounselor(teacher_id=7, class_id=2),
        GuidanceCounselor(teacher_id=8, class_id=3),
        GuidanceCounselor(teacher_id=8, class_id=4),
    ]
    return make_workspace(teachers, classes, lessons, counselors)


@pytest.fixture(autouse=True)
def restore_logging():
    """CLIがロギング設定を変更しても他のテストに影響させない"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    module_levels = {name: logging.getLogger(name).level for name in LoggingConfig.MODULE_LEVELS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, module_level in module_levels.items():
        logging.getLogger(name).setLevel(module_level)
