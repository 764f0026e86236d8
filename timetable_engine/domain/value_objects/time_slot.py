"""時間枠を表す値オブジェクト"""
from dataclasses import dataclass

from ..constants import LUNCH_PERIOD, MAX_DAY, MIN_DAY, get_day_name
from ...shared.mixins.validation_mixin import ValidationError


@dataclass(frozen=True, order=True)
class TimeSlot:
    """時間枠（曜日・校時）を表す不変オブジェクト"""
    
    day: int
    period: int
    
    def __post_init__(self):
        if isinstance(self.day, bool) or not isinstance(self.day, int) or not MIN_DAY <= self.day <= MAX_DAY:
            raise ValidationError(f"Invalid day: {self.day}")
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period < 1:
            raise ValidationError(f"Invalid period: {self.period}")
    
    def __str__(self) -> str:
        return f"{get_day_name(self.day)}{self.period}限"
    
    def __format__(self, format_spec: str) -> str:
        """f-string内での表示をサポート"""
        return str(self)
    
    def is_lunch(self) -> bool:
        """昼休みの校時かどうか判定"""
        return self.period == LUNCH_PERIOD
    
    def next_period(self) -> 'TimeSlot':
        """同じ曜日の次の校時"""
        return TimeSlot(self.day, self.period + 1)
