"""値オブジェクト（Value Objects）

このパッケージは、ドメインモデルで使用される値オブジェクトを定義します。
値オブジェクトは不変で、同値性によって識別されます。
"""
from .time_slot import TimeSlot
from .schedule_entry import ScheduleEntry
from .conflict import Conflict, ConflictKind, ConflictSeverity

__all__ = [
    'TimeSlot',
    'ScheduleEntry',
    'Conflict',
    'ConflictKind',
    'ConflictSeverity',
]
