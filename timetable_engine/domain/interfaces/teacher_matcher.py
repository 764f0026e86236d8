"""授業に対応する教員を選ぶ照合器のインターフェース"""
from abc import ABC, abstractmethod
from typing import Iterable, List

from ..entities.roster import Lesson, Teacher


class ITeacherMatcher(ABC):
    """授業を担当できる教員かどうかを判定する
    
    探索アルゴリズムに手を入れずに、より厳密な教科分類へ差し替えられるようにする。
    """
    
    @abstractmethod
    def matches(self, teacher: Teacher, lesson: Lesson) -> bool:
        pass
    
    def eligible_teachers(self, teachers: Iterable[Teacher], lesson: Lesson) -> List[Teacher]:
        """候補教員を入力順のまま絞り込む"""
        return [teacher for teacher in teachers if self.matches(teacher, lesson)]
