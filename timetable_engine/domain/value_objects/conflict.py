"""制約違反（重複）を表す値オブジェクト"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class ConflictKind(Enum):
    """重複の種類"""
    TEACHER_DOUBLE_BOOKING = "teacher_double_booking"
    CLASS_CONFLICT = "class_conflict"
    TEACHER_UNAVAILABLE = "teacher_unavailable"


class ConflictSeverity(Enum):
    """重複の重大度"""
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class Conflict:
    """検出された重複
    
    その場で計算される一時的な値であり、エンジン自身は永続化しない。
    """
    
    kind: ConflictKind
    message: str
    affected_entry_ids: Tuple[int, ...] = field(default_factory=tuple)
    severity: ConflictSeverity = ConflictSeverity.HIGH
    
    def __post_init__(self):
        if not isinstance(self.affected_entry_ids, tuple):
            object.__setattr__(self, 'affected_entry_ids', tuple(self.affected_entry_ids))
    
    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.kind.value}: {self.message}"
    
    def to_dict(self) -> dict:
        return {
            'type': self.kind.value,
            'message': self.message,
            'schedule_items': list(self.affected_entry_ids),
            'severity': self.severity.value,
        }
