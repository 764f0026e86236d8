"""名簿（教員・学級・授業・空き状況）のエンティティ

生成実行中は変更されないため、すべて不変のデータクラスとして扱う。
"""
from dataclasses import dataclass
from typing import Optional

from ..constants import GUIDANCE_LESSON_NAME
from ..value_objects.time_slot import TimeSlot


@dataclass(frozen=True)
class Teacher:
    """教員"""
    
    id: int
    name: str
    subject: Optional[str] = None
    
    def __str__(self) -> str:
        return self.name
    
    @property
    def normalized_subject(self) -> str:
        """比較用に正規化した担当教科（未設定なら空文字）"""
        return (self.subject or "").strip().lower()


@dataclass(frozen=True)
class SchoolClass:
    """学級"""
    
    id: int
    grade: int
    section: str
    school_track: Optional[str] = None
    
    @property
    def display_name(self) -> str:
        return f"{self.grade}/{self.section}"
    
    def __str__(self) -> str:
        return self.display_name
    
    def sort_key(self):
        return (self.grade, self.section, self.id)


@dataclass(frozen=True)
class Lesson:
    """授業（学年ごとの週時数を持つ）"""
    
    id: int
    name: str
    grade: int
    weekly_hours: int
    is_mandatory: bool = True
    school_track: Optional[str] = None
    
    def __str__(self) -> str:
        return self.name
    
    def is_guidance(self, guidance_lesson_name: str = GUIDANCE_LESSON_NAME) -> bool:
        """ガイダンス教員が受け持つ予約授業かどうか"""
        return self.name == guidance_lesson_name


@dataclass(frozen=True)
class TeacherAvailability:
    """教員の空き状況レコード
    
    レコードが存在しない時間枠は空きとみなす。
    """
    
    teacher_id: int
    day_of_week: int
    time_slot: int
    is_available: bool = True
    
    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(self.day_of_week, self.time_slot)


@dataclass(frozen=True)
class GuidanceCounselor:
    """学級とガイダンス教員の対応（1学級につき1名）"""
    
    teacher_id: int
    class_id: int
