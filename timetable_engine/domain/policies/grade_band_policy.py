"""学年帯から1日の校時数を決めるポリシー"""
from ..constants import (
    DEFAULT_DAILY_PERIODS,
    MIDDLE_SCHOOL_DAILY_PERIODS,
    MIDDLE_SCHOOL_GRADES,
)


class GradeBandPolicy:
    """学年帯ごとの1日の最大校時数
    
    中学校段階（5〜8年）は7校時、それ以外は8校時。
    """
    
    def __init__(self,
                 middle_school_periods: int = MIDDLE_SCHOOL_DAILY_PERIODS,
                 default_periods: int = DEFAULT_DAILY_PERIODS):
        self.middle_school_periods = middle_school_periods
        self.default_periods = default_periods
    
    def max_periods_per_day(self, grade: int) -> int:
        if grade in MIDDLE_SCHOOL_GRADES:
            return self.middle_school_periods
        return self.default_periods
    
    def widest_day(self, grades) -> int:
        """複数学年の中で最も長い1日の校時数"""
        grades = list(grades)
        if not grades:
            return self.default_periods
        return max(self.max_periods_per_day(grade) for grade in grades)
