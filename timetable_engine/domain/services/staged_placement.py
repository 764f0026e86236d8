"""候補グループを一括で検証・確定する配置ステージ"""
from typing import List, Optional, Sequence

from .conflict_detector import ConflictDetector
from ..constraints.base import PlacementConstraintValidator, PlacementContext
from ..interfaces.repositories import IScheduleRepository
from ..value_objects.schedule_entry import ScheduleEntry
from ...shared.mixins.logging_mixin import LoggingMixin


class StagedPlacement(LoggingMixin):
    """複数スロットのブロックを「全件検証してから全件書き込み」で確定する
    
    書き込み途中でリポジトリが失敗した場合は、同じグループで書き込み済みのエントリを
    削除してから例外を呼び出し元へ送出する。ブロックの半端な配置は残さない。
    """
    
    def __init__(self,
                 schedule_repository: IScheduleRepository,
                 conflict_detector: ConflictDetector,
                 constraint_validator: Optional[PlacementConstraintValidator] = None):
        self.schedule_repository = schedule_repository
        self.conflict_detector = conflict_detector
        self.constraint_validator = constraint_validator
    
    def try_commit(self, candidates: Sequence[ScheduleEntry],
                   context: Optional[PlacementContext] = None) -> Optional[List[ScheduleEntry]]:
        """候補グループを検証し、問題がなければ確定する
        
        Returns:
            確定したエントリ（ID付き）。配置できなければNone
        """
        if not self.is_placeable(candidates, context):
            return None
        committed = self.commit(candidates)
        if context is not None:
            context.record(committed)
        return committed
    
    def is_placeable(self, candidates: Sequence[ScheduleEntry],
                     context: Optional[PlacementContext] = None) -> bool:
        # 構造的な制約を先に調べ、リポジトリへの問い合わせを減らす
        if context is not None and self.constraint_validator is not None:
            if not self.constraint_validator.check_group(candidates, context):
                return False
        return self.conflict_detector.is_conflict_free(candidates)
    
    def commit(self, candidates: Sequence[ScheduleEntry]) -> List[ScheduleEntry]:
        """検証済みの候補をすべて書き込む"""
        written: List[ScheduleEntry] = []
        try:
            for candidate in candidates:
                entry_id = self.schedule_repository.add_entry(candidate)
                written.append(candidate.with_id(entry_id))
        except Exception:
            self.log_error(f"ブロックの書き込みに失敗したため{len(written)}件を取り消します")
            for entry in written:
                self.schedule_repository.delete_entry(entry.id)
            raise
        return written
