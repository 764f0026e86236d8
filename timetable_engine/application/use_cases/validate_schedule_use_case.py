"""スケジュール検証ユースケース"""
import logging

from .request_models import ValidateScheduleResult
from ...domain.services.conflict_detector import ConflictDetector
from ...domain.value_objects.conflict import ConflictSeverity


class ValidateScheduleUseCase:
    """登録済みの時間割全体を監査する"""
    
    def __init__(self, conflict_detector: ConflictDetector):
        self.conflict_detector = conflict_detector
        self.logger = logging.getLogger(__name__)
    
    def execute(self) -> ValidateScheduleResult:
        conflicts = self.conflict_detector.detect_all_conflicts()
        
        high = sum(1 for c in conflicts if c.severity == ConflictSeverity.HIGH)
        is_valid = not conflicts
        if is_valid:
            message = "検証成功: 重複はありません"
        else:
            message = f"検証完了: {len(conflicts)}件の重複が見つかりました（重大{high}件）"
        self.logger.info(message)
        
        return ValidateScheduleResult(
            is_valid=is_valid,
            conflicts=conflicts,
            message=message
        )
