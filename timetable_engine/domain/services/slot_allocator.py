"""授業の週時数を時間枠に配置するスロット割り当てサービス

週時数に応じて次の優先順でブロック配置の方針を選ぶ。

1. ガイダンス授業: 学級のガイダンス教員で1日に2校時連続
2. 週5時間: 異なる3日に2+2+1
3. 2時間単位: 異なる2日に分けて配置（残り4時間以上なら2連続×2日、2〜3時間なら1校時×2日）
4. 残り: 曜日・校時を走査して2連続または1校時

どの方針でも候補グループ全体を検証してから確定する。探索し尽くして置けなかった
時数は失敗時数として返し、例外にはしない。
"""
import itertools
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .conflict_detector import ConflictDetector
from .staged_placement import StagedPlacement
from ..constants import GUIDANCE_LESSON_NAME, LUNCH_PERIOD, WEEKDAYS
from ..constraints.base import PlacementConstraintValidator, PlacementContext
from ..constraints.placement_constraints import DailyPeriodLimitConstraint, LunchBreakConstraint
from ..entities.roster import Lesson, SchoolClass, Teacher
from ..exceptions import RosterLookupError
from ..interfaces.repositories import IRosterRepository, IScheduleRepository
from ..interfaces.teacher_matcher import ITeacherMatcher
from ..value_objects.schedule_entry import ScheduleEntry
from .implementations.substring_teacher_matcher import SubstringTeacherMatcher
from ...shared.mixins.logging_mixin import LoggingMixin


STRATEGY_GUIDANCE = "guidance"
STRATEGY_TWO_TWO_ONE = "two_two_one"
STRATEGY_BLOCKS = "blocks"
STRATEGY_NO_TEACHER = "no_teacher"
STRATEGY_EMPTY = "empty"


@dataclass
class AllocationResult:
    """1学級・1授業の配置結果"""
    class_id: int
    lesson_id: int
    required_hours: int
    strategy: str = STRATEGY_BLOCKS
    placed_entries: List[ScheduleEntry] = field(default_factory=list)
    failed_hours: int = 0
    
    @property
    def placed_hours(self) -> int:
        return len(self.placed_entries)
    
    @property
    def days_used(self) -> List[int]:
        return sorted({entry.day_of_week for entry in self.placed_entries})


class SlotAllocator(LoggingMixin):
    """授業の週時数を衝突のない時間枠へ配置する"""
    
    def __init__(self,
                 roster_repository: IRosterRepository,
                 schedule_repository: IScheduleRepository,
                 conflict_detector: ConflictDetector,
                 teacher_matcher: Optional[ITeacherMatcher] = None,
                 constraint_validator: Optional[PlacementConstraintValidator] = None,
                 preferred_days: Sequence[int] = WEEKDAYS,
                 guidance_lesson_name: str = GUIDANCE_LESSON_NAME,
                 lunch_period: int = LUNCH_PERIOD):
        self.roster_repository = roster_repository
        self.schedule_repository = schedule_repository
        self.teacher_matcher = teacher_matcher or SubstringTeacherMatcher()
        self.constraint_validator = constraint_validator or PlacementConstraintValidator([
            LunchBreakConstraint(lunch_period),
            DailyPeriodLimitConstraint(),
        ])
        self.preferred_days = list(preferred_days)
        self.guidance_lesson_name = guidance_lesson_name
        self.lunch_period = lunch_period
        self.placement = StagedPlacement(schedule_repository, conflict_detector, self.constraint_validator)
    
    def allocate_by_id(self, class_id: int, lesson_id: int, max_periods: int,
                       teachers: Optional[Iterable[Teacher]] = None) -> AllocationResult:
        """IDで指定された学級・授業を配置する
        
        Raises:
            RosterLookupError: 学級または授業が名簿に存在しない場合
        """
        school_class = self.roster_repository.get_class(class_id)
        if school_class is None:
            raise RosterLookupError("class", class_id)
        lesson = self.roster_repository.get_lesson(lesson_id)
        if lesson is None:
            raise RosterLookupError("lesson", lesson_id)
        return self.allocate(school_class, lesson, max_periods, teachers)
    
    def allocate(self, school_class: SchoolClass, lesson: Lesson, max_periods: int,
                 teachers: Optional[Iterable[Teacher]] = None) -> AllocationResult:
        """1学級分の授業の週時数を配置する
        
        Args:
            school_class: 対象学級
            lesson: 配置する授業
            max_periods: 学級の1日の校時数
            teachers: 候補となる教員（省略時は名簿の全教員）
        """
        result = AllocationResult(school_class.id, lesson.id, lesson.weekly_hours)
        if lesson.weekly_hours <= 0:
            result.strategy = STRATEGY_EMPTY
            return result
        
        context = PlacementContext.from_entries(
            school_class, lesson, max_periods,
            self.schedule_repository.get_entries(classes=[school_class.id])
        )
        
        if lesson.is_guidance(self.guidance_lesson_name):
            counselor = self.roster_repository.get_guidance_counselor(school_class.id)
            if counselor is not None:
                result.strategy = STRATEGY_GUIDANCE
                self._allocate_guidance(result, context, counselor)
                return result
        
        if teachers is None:
            teachers = self.roster_repository.get_teachers()
        eligible = self.teacher_matcher.eligible_teachers(teachers, lesson)
        if not eligible:
            self.log_warning(f"{school_class}の{lesson}を担当できる教員がいません")
            result.strategy = STRATEGY_NO_TEACHER
            result.failed_hours = lesson.weekly_hours
            return result
        
        if lesson.weekly_hours == 5:
            result.strategy = STRATEGY_TWO_TWO_ONE
            self._allocate_two_two_one(result, context, eligible)
        else:
            result.strategy = STRATEGY_BLOCKS
            remaining = self._allocate_day_blocks(result, context, eligible)
            self._allocate_leftover(result, context, eligible, remaining)
        
        if result.failed_hours:
            self.log_debug(f"{school_class}の{lesson}: {result.failed_hours}時間を配置できませんでした")
        return result
    
    def pair_starts(self, max_periods: int) -> List[int]:
        """2校時連続ブロックの開始校時（昼休みを含む・またぐものは除く）"""
        return [
            period for period in range(1, max_periods)
            if period != self.lunch_period and period + 1 != self.lunch_period
        ]
    
    def single_periods(self, max_periods: int) -> List[int]:
        return [period for period in range(1, max_periods + 1) if period != self.lunch_period]
    
    def _allocate_guidance(self, result: AllocationResult, context: PlacementContext,
                           counselor: Teacher) -> None:
        """ガイダンス教員で1日に2校時連続を配置する"""
        for day in self.preferred_days:
            for start in self.pair_starts(context.max_periods):
                placed = self._try_place(context, counselor, [(day, start), (day, start + 1)])
                if placed:
                    result.placed_entries.extend(placed)
                    return
        self.log_warning(f"{context.school_class}のガイダンス授業を配置できませんでした")
        result.failed_hours = context.lesson.weekly_hours
    
    def _allocate_two_two_one(self, result: AllocationResult, context: PlacementContext,
                              teachers: List[Teacher]) -> None:
        """週5時間の授業を異なる3日に2+2+1で配置する"""
        starts = self.pair_starts(context.max_periods)
        singles = self.single_periods(context.max_periods)
        # 曜日の組は希望順に並んだものだけを試す。1時間の日は組の最後の日になる
        for day1, day2, day3 in itertools.combinations(self.preferred_days, 3):
            for start1, start2, single in itertools.product(starts, starts, singles):
                slots = [
                    (day1, start1), (day1, start1 + 1),
                    (day2, start2), (day2, start2 + 1),
                    (day3, single),
                ]
                for teacher in teachers:
                    placed = self._try_place(context, teacher, slots)
                    if placed:
                        result.placed_entries.extend(placed)
                        return
        result.failed_hours = context.lesson.weekly_hours
    
    def _allocate_day_blocks(self, result: AllocationResult, context: PlacementContext,
                             teachers: List[Teacher]) -> int:
        """2時間単位のブロックを異なる2日に分けて配置する
        
        Returns:
            この段階で配置できずに残った時数
        """
        remaining = context.lesson.weekly_hours
        days_used = set()
        while remaining >= 2:
            unused = [day for day in self.preferred_days if day not in days_used]
            days_to_try = unused if len(unused) >= 2 else self.preferred_days
            
            if remaining >= 4:
                placed = self._place_pair_of_pairs(context, teachers, days_to_try)
            else:
                placed = self._place_split_pair(context, teachers, days_to_try)
            if not placed:
                break
            
            result.placed_entries.extend(placed)
            days_used.update(entry.day_of_week for entry in placed)
            remaining -= len(placed)
        return remaining
    
    def _place_pair_of_pairs(self, context: PlacementContext, teachers: List[Teacher],
                             days: Sequence[int]) -> Optional[List[ScheduleEntry]]:
        """2日それぞれに2校時連続（計4時間）"""
        starts = self.pair_starts(context.max_periods)
        for day1, day2 in itertools.combinations(days, 2):
            for start1, start2 in itertools.product(starts, starts):
                slots = [(day1, start1), (day1, start1 + 1), (day2, start2), (day2, start2 + 1)]
                for teacher in teachers:
                    placed = self._try_place(context, teacher, slots)
                    if placed:
                        return placed
        return None
    
    def _place_split_pair(self, context: PlacementContext, teachers: List[Teacher],
                          days: Sequence[int]) -> Optional[List[ScheduleEntry]]:
        """2日それぞれに1校時（計2時間）"""
        singles = self.single_periods(context.max_periods)
        for day1, day2 in itertools.combinations(days, 2):
            for period1, period2 in itertools.product(singles, singles):
                for teacher in teachers:
                    placed = self._try_place(context, teacher, [(day1, period1), (day2, period2)])
                    if placed:
                        return placed
        return None
    
    def _allocate_leftover(self, result: AllocationResult, context: PlacementContext,
                           teachers: List[Teacher], remaining: int) -> None:
        """残りの時数を曜日・校時の順に走査して配置する"""
        if remaining <= 0:
            return
        
        for day in self.preferred_days:
            if remaining <= 0:
                break
            for period in self.single_periods(context.max_periods):
                if remaining <= 0:
                    break
                if remaining >= 2:
                    if period >= context.max_periods or period + 1 == self.lunch_period:
                        continue
                    slots = [(day, period), (day, period + 1)]
                else:
                    slots = [(day, period)]
                
                for teacher in teachers:
                    placed = self._try_place(context, teacher, slots)
                    if placed:
                        result.placed_entries.extend(placed)
                        remaining -= len(placed)
                        break
        
        result.failed_hours += remaining
    
    def _try_place(self, context: PlacementContext, teacher: Teacher,
                   slots: Sequence[Tuple[int, int]]) -> Optional[List[ScheduleEntry]]:
        candidates = [
            ScheduleEntry(
                class_id=context.school_class.id,
                teacher_id=teacher.id,
                lesson_id=context.lesson.id,
                day_of_week=day,
                time_slot=period,
            )
            for day, period in slots
        ]
        return self.placement.try_commit(candidates, context)
