"""時間割エントリを表す値オブジェクト"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .time_slot import TimeSlot


@dataclass(frozen=True)
class ScheduleEntry:
    """学級・教員・授業を1つの時間枠に割り当てたエントリ
    
    idがNoneのエントリは未登録の候補を表す。idはスケジュールリポジトリが採番する。
    """
    
    class_id: int
    teacher_id: int
    lesson_id: int
    day_of_week: int
    time_slot: int
    id: Optional[int] = None
    
    def __post_init__(self):
        # 範囲チェックはTimeSlotに委譲
        TimeSlot(self.day_of_week, self.time_slot)
    
    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(self.day_of_week, self.time_slot)
    
    @property
    def teacher_key(self) -> Tuple[int, int, int]:
        return (self.teacher_id, self.day_of_week, self.time_slot)
    
    @property
    def class_key(self) -> Tuple[int, int, int]:
        return (self.class_id, self.day_of_week, self.time_slot)
    
    def with_id(self, entry_id: int) -> 'ScheduleEntry':
        """採番済みのコピーを返す"""
        return replace(self, id=entry_id)
    
    def without_id(self) -> 'ScheduleEntry':
        return replace(self, id=None)
    
    def placement(self) -> Tuple[int, int, int, int, int]:
        """idを除いた配置内容（比較用）"""
        return (self.class_id, self.teacher_id, self.lesson_id, self.day_of_week, self.time_slot)
    
    def __str__(self) -> str:
        return (f"{self.slot}: class={self.class_id} "
                f"teacher={self.teacher_id} lesson={self.lesson_id}")
