"""メモリ上のリポジトリ実装

テストや組み込み利用向け。CSVリポジトリもこの実装を土台にしている。
"""
import logging
from typing import Dict, Iterable, List, Optional

from ...domain.entities.roster import (
    GuidanceCounselor,
    Lesson,
    SchoolClass,
    Teacher,
    TeacherAvailability,
)
from ...domain.exceptions import EntryNotFoundError, RosterLookupError
from ...domain.interfaces.repositories import (
    IAvailabilityRepository,
    IRosterRepository,
    IScheduleRepository,
)
from ...domain.value_objects.schedule_entry import ScheduleEntry

logger = logging.getLogger(__name__)


class InMemoryRosterRepository(IRosterRepository):
    """名簿をメモリ上に保持するリポジトリ
    
    ガイダンス教員の対応表は登録時に学級・教員の存在を確認する。
    """
    
    def __init__(self,
                 teachers: Iterable[Teacher] = (),
                 classes: Iterable[SchoolClass] = (),
                 lessons: Iterable[Lesson] = (),
                 guidance_counselors: Iterable[GuidanceCounselor] = ()):
        self._teachers: Dict[int, Teacher] = {t.id: t for t in teachers}
        self._classes: Dict[int, SchoolClass] = {c.id: c for c in classes}
        self._lessons: Dict[int, Lesson] = {l.id: l for l in lessons}
        self._counselors: Dict[int, int] = {}
        for counselor in guidance_counselors:
            self.assign_guidance_counselor(counselor)
    
    def assign_guidance_counselor(self, counselor: GuidanceCounselor) -> None:
        """学級にガイダンス教員を割り当てる（既存の割り当ては置き換え）
        
        Raises:
            RosterLookupError: 学級または教員が存在しない場合
        """
        if counselor.class_id not in self._classes:
            raise RosterLookupError("class", counselor.class_id)
        if counselor.teacher_id not in self._teachers:
            raise RosterLookupError("teacher", counselor.teacher_id)
        self._counselors[counselor.class_id] = counselor.teacher_id
    
    def get_classes(self, grade: Optional[int] = None) -> List[SchoolClass]:
        return [c for c in self._classes.values() if grade is None or c.grade == grade]
    
    def get_lessons(self) -> List[Lesson]:
        return list(self._lessons.values())
    
    def get_lessons_for_grade(self, grade: int) -> List[Lesson]:
        return [l for l in self._lessons.values() if l.grade == grade]
    
    def get_teachers(self) -> List[Teacher]:
        return list(self._teachers.values())
    
    def get_guidance_counselor(self, class_id: int) -> Optional[Teacher]:
        teacher_id = self._counselors.get(class_id)
        if teacher_id is None:
            return None
        return self._teachers[teacher_id]
    
    def get_class(self, class_id: int) -> Optional[SchoolClass]:
        return self._classes.get(class_id)
    
    def get_lesson(self, lesson_id: int) -> Optional[Lesson]:
        return self._lessons.get(lesson_id)
    
    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return self._teachers.get(teacher_id)


class InMemoryAvailabilityRepository(IAvailabilityRepository):
    """教員の空き状況をメモリ上に保持する"""
    
    def __init__(self, records: Iterable[TeacherAvailability] = ()):
        self._records: Dict[tuple, TeacherAvailability] = {}
        for record in records:
            self.set_availability(record)
    
    def set_availability(self, record: TeacherAvailability) -> None:
        key = (record.teacher_id, record.day_of_week, record.time_slot)
        self._records[key] = record
    
    def mark_unavailable(self, teacher_id: int, day_of_week: int, time_slot: int) -> None:
        self.set_availability(TeacherAvailability(teacher_id, day_of_week, time_slot, is_available=False))
    
    def is_available(self, teacher_id: int, day_of_week: int, time_slot: int) -> bool:
        record = self._records.get((teacher_id, day_of_week, time_slot))
        return True if record is None else record.is_available
    
    def get_unavailable_slots(self) -> List[TeacherAvailability]:
        return [record for record in self._records.values() if not record.is_available]


class InMemoryScheduleRepository(IScheduleRepository):
    """時間割エントリをメモリ上に保持する
    
    IDは1からの連番で採番し、削除後も再利用しない。
    """
    
    def __init__(self, entries: Iterable[ScheduleEntry] = ()):
        self._entries: Dict[int, ScheduleEntry] = {}
        self._next_id = 1
        for entry in entries:
            self._store(entry)
    
    def _store(self, entry: ScheduleEntry) -> int:
        entry_id = entry.id if entry.id is not None else self._next_id
        self._entries[entry_id] = entry.with_id(entry_id)
        self._next_id = max(self._next_id, entry_id + 1)
        return entry_id
    
    def get_entries(self, classes: Optional[Iterable[int]] = None) -> List[ScheduleEntry]:
        if classes is None:
            return list(self._entries.values())
        scope = set(classes)
        return [e for e in self._entries.values() if e.class_id in scope]
    
    def get_entry(self, entry_id: int) -> Optional[ScheduleEntry]:
        return self._entries.get(entry_id)
    
    def add_entry(self, entry: ScheduleEntry) -> int:
        entry_id = self._store(entry.without_id())
        logger.debug(f"エントリを追加しました: {self._entries[entry_id]}")
        return entry_id
    
    def update_entry(self, entry: ScheduleEntry) -> None:
        if entry.id is None or entry.id not in self._entries:
            raise EntryNotFoundError(entry.id)
        self._entries[entry.id] = entry
    
    def delete_entry(self, entry_id: int) -> bool:
        return self._entries.pop(entry_id, None) is not None
    
    def delete_all(self, classes: Optional[Iterable[int]] = None) -> int:
        if classes is None:
            count = len(self._entries)
            self._entries.clear()
            return count
        scope = set(classes)
        targets = [entry_id for entry_id, e in self._entries.items() if e.class_id in scope]
        for entry_id in targets:
            del self._entries[entry_id]
        return len(targets)
    
    def find_by_teacher_slot(self, teacher_id: int, day_of_week: int,
                             time_slot: int) -> List[ScheduleEntry]:
        key = (teacher_id, day_of_week, time_slot)
        return [e for e in self._entries.values() if e.teacher_key == key]
    
    def find_by_class_slot(self, class_id: int, day_of_week: int,
                           time_slot: int) -> List[ScheduleEntry]:
        key = (class_id, day_of_week, time_slot)
        return [e for e in self._entries.values() if e.class_key == key]
