"""時間割の重複検出サービス

全体監査（detect_all_conflicts）と、登録前の候補チェック（detect_entry_conflicts）の
2つの入口を持つ。どちらも副作用のない問い合わせであり、検出結果は永続化しない。
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from ..constants import get_day_name
from ..interfaces.repositories import (
    IAvailabilityRepository,
    IRosterRepository,
    IScheduleRepository,
)
from ..value_objects.conflict import Conflict, ConflictKind, ConflictSeverity
from ..value_objects.schedule_entry import ScheduleEntry


class ConflictDetector:
    """教員重複・学級重複・教員不在を検出する"""
    
    def __init__(self,
                 schedule_repository: IScheduleRepository,
                 availability_repository: IAvailabilityRepository,
                 roster_repository: Optional[IRosterRepository] = None):
        self.schedule_repository = schedule_repository
        self.availability_repository = availability_repository
        self.roster_repository = roster_repository
        self.logger = logging.getLogger(__name__)
    
    def detect_all_conflicts(self) -> List[Conflict]:
        """登録済みの時間割全体を走査して重複を列挙する
        
        Returns:
            教員重複、学級重複、教員不在の順に並んだ重複のリスト
        """
        entries = self.schedule_repository.get_entries()
        conflicts: List[Conflict] = []
        
        by_teacher: Dict[Tuple[int, int, int], List[ScheduleEntry]] = defaultdict(list)
        by_class: Dict[Tuple[int, int, int], List[ScheduleEntry]] = defaultdict(list)
        for entry in entries:
            by_teacher[entry.teacher_key].append(entry)
            by_class[entry.class_key].append(entry)
        
        # 1. 教員の重複
        for (teacher_id, day, slot), group in sorted(by_teacher.items()):
            if len(group) > 1:
                conflicts.append(Conflict(
                    kind=ConflictKind.TEACHER_DOUBLE_BOOKING,
                    message=(f"{self._teacher_label(teacher_id)}が{get_day_name(day)}{slot}限に"
                             f"{len(group)}件の授業に割り当てられています"),
                    affected_entry_ids=self._ids(group),
                    severity=ConflictSeverity.HIGH
                ))
        
        # 2. 学級の重複
        for (class_id, day, slot), group in sorted(by_class.items()):
            if len(group) > 1:
                conflicts.append(Conflict(
                    kind=ConflictKind.CLASS_CONFLICT,
                    message=(f"{self._class_label(class_id)}の{get_day_name(day)}{slot}限に"
                             f"{len(group)}件の授業が割り当てられています"),
                    affected_entry_ids=self._ids(group),
                    severity=ConflictSeverity.HIGH
                ))
        
        # 3. 教員の不在
        unavailable = {
            (record.teacher_id, record.day_of_week, record.time_slot)
            for record in self.availability_repository.get_unavailable_slots()
            if not record.is_available
        }
        if unavailable:
            for entry in sorted(entries, key=lambda e: (e.teacher_key, e.id or 0)):
                if entry.teacher_key in unavailable:
                    conflicts.append(Conflict(
                        kind=ConflictKind.TEACHER_UNAVAILABLE,
                        message=(f"{self._teacher_label(entry.teacher_id)}は"
                                 f"{get_day_name(entry.day_of_week)}{entry.time_slot}限に勤務できません"),
                        affected_entry_ids=self._ids([entry]),
                        severity=ConflictSeverity.MEDIUM
                    ))
        
        if conflicts:
            self.logger.debug(f"重複を{len(conflicts)}件検出しました")
        return conflicts
    
    def detect_entry_conflicts(self, candidate: ScheduleEntry,
                               exclude_entry_id: Optional[int] = None) -> List[Conflict]:
        """候補エントリを登録した場合の重複を調べる
        
        Args:
            candidate: 登録・更新しようとしているエントリ
            exclude_entry_id: 更新時に自分自身の旧配置を無視するためのID
            
        Returns:
            空リストなら登録してよい
        """
        conflicts: List[Conflict] = []
        day, slot = candidate.day_of_week, candidate.time_slot
        
        # 1. 教員の重複
        teacher_hits = [
            entry for entry in self.schedule_repository.find_by_teacher_slot(
                candidate.teacher_id, day, slot)
            if exclude_entry_id is None or entry.id != exclude_entry_id
        ]
        if teacher_hits:
            conflicts.append(Conflict(
                kind=ConflictKind.TEACHER_DOUBLE_BOOKING,
                message=f"{self._teacher_label(candidate.teacher_id)}は{get_day_name(day)}{slot}限に別の授業があります",
                affected_entry_ids=self._ids(teacher_hits),
                severity=ConflictSeverity.HIGH
            ))
        
        # 2. 学級の重複
        class_hits = [
            entry for entry in self.schedule_repository.find_by_class_slot(
                candidate.class_id, day, slot)
            if exclude_entry_id is None or entry.id != exclude_entry_id
        ]
        if class_hits:
            conflicts.append(Conflict(
                kind=ConflictKind.CLASS_CONFLICT,
                message=f"{self._class_label(candidate.class_id)}は{get_day_name(day)}{slot}限に別の授業があります",
                affected_entry_ids=self._ids(class_hits),
                severity=ConflictSeverity.HIGH
            ))
        
        # 3. 教員の不在
        if not self.availability_repository.is_available(candidate.teacher_id, day, slot):
            conflicts.append(Conflict(
                kind=ConflictKind.TEACHER_UNAVAILABLE,
                message=f"{self._teacher_label(candidate.teacher_id)}は{get_day_name(day)}{slot}限に勤務できません",
                affected_entry_ids=(),
                severity=ConflictSeverity.MEDIUM
            ))
        
        return conflicts
    
    def detect_group_conflicts(self, candidates: Sequence[ScheduleEntry]) -> List[Conflict]:
        """同時に確定する候補グループ全体の重複を調べる
        
        各候補を登録済みの時間割と照合したうえで、グループ内の候補同士の衝突も検出する。
        """
        conflicts: List[Conflict] = []
        seen_teacher = set()
        seen_class = set()
        for candidate in candidates:
            conflicts.extend(self.detect_entry_conflicts(candidate))
            
            if candidate.teacher_key in seen_teacher:
                conflicts.append(Conflict(
                    kind=ConflictKind.TEACHER_DOUBLE_BOOKING,
                    message=f"候補グループ内で{candidate.slot}の教員が重複しています",
                    severity=ConflictSeverity.HIGH
                ))
            if candidate.class_key in seen_class:
                conflicts.append(Conflict(
                    kind=ConflictKind.CLASS_CONFLICT,
                    message=f"候補グループ内で{candidate.slot}の学級が重複しています",
                    severity=ConflictSeverity.HIGH
                ))
            seen_teacher.add(candidate.teacher_key)
            seen_class.add(candidate.class_key)
        return conflicts
    
    def is_conflict_free(self, candidates: Sequence[ScheduleEntry]) -> bool:
        """候補グループが丸ごと登録可能か（最初の違反で打ち切る）"""
        seen_teacher = set()
        seen_class = set()
        for candidate in candidates:
            if candidate.teacher_key in seen_teacher or candidate.class_key in seen_class:
                return False
            if self.detect_entry_conflicts(candidate):
                return False
            seen_teacher.add(candidate.teacher_key)
            seen_class.add(candidate.class_key)
        return True
    
    @staticmethod
    def _ids(entries: Sequence[ScheduleEntry]) -> Tuple[int, ...]:
        return tuple(sorted(entry.id for entry in entries if entry.id is not None))
    
    def _teacher_label(self, teacher_id: int) -> str:
        if self.roster_repository is not None:
            teacher = self.roster_repository.get_teacher(teacher_id)
            if teacher is not None:
                return f"{teacher.name}先生"
        return f"教員#{teacher_id}"
    
    def _class_label(self, class_id: int) -> str:
        if self.roster_repository is not None:
            school_class = self.roster_repository.get_class(class_id)
            if school_class is not None:
                return f"{school_class.display_name}学級"
        return f"学級#{class_id}"
