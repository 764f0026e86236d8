"""配置制約の基盤クラス"""
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..entities.roster import Lesson, SchoolClass
from ..value_objects.schedule_entry import ScheduleEntry


class ConstraintType(Enum):
    """制約のタイプ"""
    HARD = "HARD"    # 絶対に守る必要がある制約
    SOFT = "SOFT"    # 設定で宣言された配置方針


class ConstraintPriority(Enum):
    """制約の優先度"""
    CRITICAL = 100
    HIGH = 80
    MEDIUM = 60
    LOW = 40


@dataclass
class PlacementContext:
    """1学級・1授業の配置探索で共有する文脈
    
    lesson_periodsには、この学級でこの授業が既に配置されている校時を曜日ごとに保持する。
    生成中はエンジンが対象範囲への書き込みを独占するため、配置確定時にrecordで更新すればよい。
    """
    school_class: SchoolClass
    lesson: Lesson
    max_periods: int
    lesson_periods: Dict[int, Set[int]] = field(default_factory=lambda: defaultdict(set))
    
    @classmethod
    def from_entries(cls, school_class: SchoolClass, lesson: Lesson, max_periods: int,
                     entries: Iterable[ScheduleEntry]) -> 'PlacementContext':
        context = cls(school_class, lesson, max_periods)
        context.record(
            entry for entry in entries
            if entry.class_id == school_class.id and entry.lesson_id == lesson.id
        )
        return context
    
    def record(self, entries: Iterable[ScheduleEntry]) -> None:
        for entry in entries:
            self.lesson_periods[entry.day_of_week].add(entry.time_slot)


class PlacementConstraint(ABC):
    """候補グループ（同時に確定する複数スロット）に対する制約"""
    
    def __init__(self,
                 constraint_type: ConstraintType,
                 priority: ConstraintPriority,
                 name: str,
                 description: str = ""):
        self.type = constraint_type
        self.priority = priority
        self.name = name
        self.description = description
    
    @abstractmethod
    def check(self, candidates: Sequence[ScheduleEntry], context: PlacementContext) -> bool:
        """候補グループを配置してよいか判定する"""
        pass
    
    def __str__(self) -> str:
        return f"{self.name} ({self.type.value}, Priority: {self.priority.value})"
    
    def __lt__(self, other):
        """優先度による比較（高い優先度が先）"""
        return self.priority.value > other.priority.value


class PlacementConstraintValidator:
    """配置制約の検証器"""
    
    def __init__(self, constraints: List[PlacementConstraint]):
        self.constraints = sorted(constraints)  # 優先度順にソート
    
    def check_group(self, candidates: Sequence[ScheduleEntry], context: PlacementContext) -> bool:
        return self.find_violated(candidates, context) is None
    
    def find_violated(self, candidates: Sequence[ScheduleEntry],
                      context: PlacementContext) -> Optional[PlacementConstraint]:
        """最初に違反した制約を返す（違反がなければNone）"""
        for constraint in self.constraints:
            if not constraint.check(candidates, context):
                return constraint
        return None
    
    def add_constraint(self, constraint: PlacementConstraint) -> None:
        self.constraints.append(constraint)
        self.constraints.sort()
    
    def remove_constraint(self, constraint_name: str) -> None:
        self.constraints = [c for c in self.constraints if c.name != constraint_name]
    
    @property
    def constraint_names(self) -> List[str]:
        return [c.name for c in self.constraints]
