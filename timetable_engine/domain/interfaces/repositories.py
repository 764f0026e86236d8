"""リポジトリインターフェース定義

Clean Architectureの依存性逆転の原則に従い、
ドメイン層でインターフェースを定義し、インフラ層で実装する。
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from ..entities.roster import Lesson, SchoolClass, Teacher, TeacherAvailability
from ..value_objects.schedule_entry import ScheduleEntry


class IAvailabilityRepository(ABC):
    """教員空き状況リポジトリのインターフェース（読み取り専用）"""
    
    @abstractmethod
    def is_available(self, teacher_id: int, day_of_week: int, time_slot: int) -> bool:
        """指定時間枠に教員が空いているか（レコードがなければTrue）"""
        pass
    
    @abstractmethod
    def get_unavailable_slots(self) -> List[TeacherAvailability]:
        """is_available=Falseの明示的なレコードをすべて取得"""
        pass


class IRosterRepository(ABC):
    """名簿リポジトリのインターフェース（読み取り専用）"""
    
    @abstractmethod
    def get_classes(self, grade: Optional[int] = None) -> List[SchoolClass]:
        """学級一覧を取得（学年指定時はその学年のみ）"""
        pass
    
    @abstractmethod
    def get_lessons(self) -> List[Lesson]:
        """全学年の授業一覧を取得"""
        pass
    
    @abstractmethod
    def get_lessons_for_grade(self, grade: int) -> List[Lesson]:
        """学年の授業一覧を取得"""
        pass
    
    @abstractmethod
    def get_teachers(self) -> List[Teacher]:
        """教員一覧を取得"""
        pass
    
    @abstractmethod
    def get_guidance_counselor(self, class_id: int) -> Optional[Teacher]:
        """学級のガイダンス教員を取得（未割り当てならNone）"""
        pass
    
    @abstractmethod
    def get_class(self, class_id: int) -> Optional[SchoolClass]:
        pass
    
    @abstractmethod
    def get_lesson(self, lesson_id: int) -> Optional[Lesson]:
        pass
    
    @abstractmethod
    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        pass


class IScheduleRepository(ABC):
    """時間割エントリリポジトリのインターフェース（読み書き）
    
    classes引数は対象範囲（学級IDの集合）を表し、Noneなら全体を対象とする。
    """
    
    @abstractmethod
    def get_entries(self, classes: Optional[Iterable[int]] = None) -> List[ScheduleEntry]:
        """登録済みのエントリを取得"""
        pass
    
    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[ScheduleEntry]:
        pass
    
    @abstractmethod
    def add_entry(self, entry: ScheduleEntry) -> int:
        """エントリを登録して採番したIDを返す"""
        pass
    
    @abstractmethod
    def update_entry(self, entry: ScheduleEntry) -> None:
        """IDが一致するエントリを置き換える"""
        pass
    
    @abstractmethod
    def delete_entry(self, entry_id: int) -> bool:
        pass
    
    @abstractmethod
    def delete_all(self, classes: Optional[Iterable[int]] = None) -> int:
        """エントリを一括削除して削除件数を返す"""
        pass
    
    @abstractmethod
    def find_by_teacher_slot(self, teacher_id: int, day_of_week: int,
                             time_slot: int) -> List[ScheduleEntry]:
        pass
    
    @abstractmethod
    def find_by_class_slot(self, class_id: int, day_of_week: int,
                           time_slot: int) -> List[ScheduleEntry]:
        pass

    @contextmanager
    def batch(self) -> Iterator['IScheduleRepository']:
        """まとまった書き込みの間、永続化をまとめて行うためのコンテキスト

        読み取りはブロック内でも直前の書き込みを反映する。
        永続化を持たない実装では何もしない。
        """
        yield self
