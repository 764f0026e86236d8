"""時間割エントリの手動登録・更新・削除"""
from dataclasses import replace
from typing import List, Optional

from ...domain.exceptions import EntryNotFoundError, RosterLookupError, ScheduleConflictError
from ...domain.interfaces.repositories import IRosterRepository, IScheduleRepository
from ...domain.policies.grade_band_policy import GradeBandPolicy
from ...domain.services.conflict_detector import ConflictDetector
from ...domain.value_objects.schedule_entry import ScheduleEntry
from ...shared.mixins.logging_mixin import LoggingMixin
from ...shared.mixins.validation_mixin import ValidationError

_EDITABLE_FIELDS = ('class_id', 'teacher_id', 'lesson_id', 'day_of_week', 'time_slot')


class ScheduleEntryService(LoggingMixin):
    """1件ずつの手動編集
    
    書き込み前に必ず重複検出を通し、重複があれば何も書き込まずに例外を送出する。
    """
    
    def __init__(self,
                 schedule_repository: IScheduleRepository,
                 roster_repository: IRosterRepository,
                 conflict_detector: ConflictDetector,
                 grade_band_policy: Optional[GradeBandPolicy] = None):
        self.schedule_repository = schedule_repository
        self.roster_repository = roster_repository
        self.conflict_detector = conflict_detector
        self.grade_band_policy = grade_band_policy or GradeBandPolicy()
    
    def create_entry(self, entry: ScheduleEntry) -> ScheduleEntry:
        """エントリを登録する
        
        Raises:
            RosterLookupError: 学級・教員・授業が存在しない場合
            ValidationError: 校時が学級の1日の校時数を超える場合
            ScheduleConflictError: 重複がある場合
        """
        self._ensure_references(entry)
        candidate = entry.without_id()
        conflicts = self.conflict_detector.detect_entry_conflicts(candidate)
        if conflicts:
            raise ScheduleConflictError(self._conflict_message(conflicts), conflicts=conflicts)
        
        entry_id = self.schedule_repository.add_entry(candidate)
        self.log_info(f"時間割エントリを登録しました: {candidate} (id={entry_id})")
        return candidate.with_id(entry_id)
    
    def update_entry(self, entry_id: int, **changes) -> ScheduleEntry:
        """既存エントリの一部を変更する
        
        自分自身の旧配置は重複判定から除外する。
        
        Raises:
            EntryNotFoundError: エントリが存在しない場合
            ValidationError: 校時が学級の1日の校時数を超える場合
            ScheduleConflictError: 重複がある場合
        """
        current = self.schedule_repository.get_entry(entry_id)
        if current is None:
            raise EntryNotFoundError(entry_id)
        
        unknown = set(changes) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown schedule entry fields: {sorted(unknown)}")
        
        updated = replace(current, **changes)
        self._ensure_references(updated)
        conflicts = self.conflict_detector.detect_entry_conflicts(updated, exclude_entry_id=entry_id)
        if conflicts:
            raise ScheduleConflictError(self._conflict_message(conflicts), conflicts=conflicts)
        
        self.schedule_repository.update_entry(updated)
        self.log_info(f"時間割エントリを更新しました: {updated}")
        return updated
    
    def delete_entry(self, entry_id: int) -> bool:
        return self.schedule_repository.delete_entry(entry_id)
    
    def get_class_schedule(self, class_id: int) -> List[ScheduleEntry]:
        """学級の時間割を曜日・校時順に取得"""
        entries = self.schedule_repository.get_entries(classes=[class_id])
        return sorted(entries, key=lambda e: (e.day_of_week, e.time_slot))
    
    def get_teacher_schedule(self, teacher_id: int) -> List[ScheduleEntry]:
        """教員の時間割を曜日・校時順に取得"""
        entries = [e for e in self.schedule_repository.get_entries() if e.teacher_id == teacher_id]
        return sorted(entries, key=lambda e: (e.day_of_week, e.time_slot))
    
    def _ensure_references(self, entry: ScheduleEntry) -> None:
        school_class = self.roster_repository.get_class(entry.class_id)
        if school_class is None:
            raise RosterLookupError("class", entry.class_id)
        max_periods = self.grade_band_policy.max_periods_per_day(school_class.grade)
        if entry.time_slot > max_periods:
            raise ValidationError(
                f"{school_class}の1日は{max_periods}校時までです: {entry.time_slot}限"
            )
        if self.roster_repository.get_teacher(entry.teacher_id) is None:
            raise RosterLookupError("teacher", entry.teacher_id)
        if self.roster_repository.get_lesson(entry.lesson_id) is None:
            raise RosterLookupError("lesson", entry.lesson_id)
    
    @staticmethod
    def _conflict_message(conflicts) -> str:
        return "重複を検出しました: " + ", ".join(c.message for c in conflicts)
