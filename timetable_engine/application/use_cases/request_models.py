"""スケジュール生成・検証のリクエスト/レスポンスモデル"""
import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from ...domain.constants import (
    DEFAULT_AVOID_FIRST_LAST_PERIOD,
    DEFAULT_MAX_CONSECUTIVE_LESSONS,
    GUIDANCE_LESSON_NAME,
    MAX_DAY,
    MIN_DAY,
    WEEKDAYS,
)
from ...domain.exceptions import ConfigurationError
from ...domain.services.slot_allocator import AllocationResult
from ...domain.value_objects.conflict import Conflict
from ...shared.mixins.validation_mixin import ValidationError, ValidationMixin

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass
class GenerationConfig(ValidationMixin):
    """スケジュール生成設定
    
    開始・終了時刻、休憩時間、昼休みの時刻は表示用であり、校時の計算には使わない。
    昼休みとして実際に除外するのは固定の5限。
    """
    # 表示用の時刻設定
    start_time: str = "08:00"
    end_time: str = "16:00"
    break_duration: int = 10
    lunch_break_start: str = "12:00"
    lunch_break_duration: int = 60
    
    # 配置方針
    avoid_first_last_period: List[str] = field(default_factory=lambda: list(DEFAULT_AVOID_FIRST_LAST_PERIOD))
    max_consecutive_lessons: int = DEFAULT_MAX_CONSECUTIVE_LESSONS
    preferred_days: List[int] = field(default_factory=lambda: list(WEEKDAYS))
    guidance_lesson_name: str = GUIDANCE_LESSON_NAME
    
    # 対象範囲（Noneなら全学級）
    grade: Optional[int] = None
    
    def __post_init__(self):
        self.validate()
    
    def validate(self) -> None:
        """設定値を検証する
        
        Raises:
            ConfigurationError: 不正な値がある場合
        """
        checks = [
            ("preferred_days", self._validate_days),
            ("max_consecutive_lessons",
             lambda: self.validate_range(self.max_consecutive_lessons, "max_consecutive_lessons", min_value=1)),
            ("break_duration",
             lambda: self.validate_range(self.break_duration, "break_duration", min_value=0)),
            ("lunch_break_duration",
             lambda: self.validate_range(self.lunch_break_duration, "lunch_break_duration", min_value=0)),
            ("start_time", lambda: self._validate_time(self.start_time, "start_time")),
            ("end_time", lambda: self._validate_time(self.end_time, "end_time")),
            ("lunch_break_start", lambda: self._validate_time(self.lunch_break_start, "lunch_break_start")),
        ]
        if self.grade is not None:
            checks.append(("grade", lambda: self.validate_range(self.grade, "grade", min_value=1)))
        
        for key, check in checks:
            try:
                check()
            except ValidationError as e:
                raise ConfigurationError(str(e), config_key=key) from e
    
    def _validate_days(self) -> None:
        if not self.preferred_days:
            raise ValidationError("preferred_daysが空です")
        for day in self.preferred_days:
            self.validate_range(day, "preferred_days", min_value=MIN_DAY, max_value=MAX_DAY)
        self.validate_unique(self.preferred_days, "preferred_days")
    
    @staticmethod
    def _validate_time(value: str, name: str) -> None:
        if not isinstance(value, str) or not _TIME_PATTERN.match(value):
            raise ValidationError(f"{name}はHH:MM形式である必要があります: {value!r}")
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GenerationConfig':
        """辞書から設定を作成（未知のキーは無視）"""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
    
    def merged(self, **overrides) -> 'GenerationConfig':
        """一部の値を上書きした新しい設定を返す"""
        data = self.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return GenerationConfig.from_dict(data)
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class GenerationReport:
    """スケジュール生成結果"""
    success: bool
    placed_count: int
    failed_count: int
    remaining_conflicts: List[Conflict] = field(default_factory=list)
    lesson_results: List[AllocationResult] = field(default_factory=list)
    execution_time: float = 0.0
    
    @property
    def message(self) -> str:
        return (f"時間割を生成しました。{self.placed_count}時間を配置、"
                f"{self.failed_count}時間を配置できませんでした。"
                f"重複は{len(self.remaining_conflicts)}件です。")
    
    @property
    def failed_lessons(self) -> List[AllocationResult]:
        return [result for result in self.lesson_results if result.failed_hours > 0]
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'placed_count': self.placed_count,
            'failed_count': self.failed_count,
            'message': self.message,
            'conflicts': [conflict.to_dict() for conflict in self.remaining_conflicts],
            'execution_time': round(self.execution_time, 3),
        }


@dataclass
class ValidateScheduleResult:
    """スケジュール検証結果"""
    is_valid: bool
    conflicts: List[Conflict]
    message: str
    
    @property
    def conflicts_count(self) -> int:
        return len(self.conflicts)
