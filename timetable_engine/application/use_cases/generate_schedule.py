"""時間割生成ユースケース

全学級（または指定学年）の授業を順に配置し、結果をレポートにまとめる。
後の学級の配置は先に確定した学級の配置を参照して重複を判定するため、
学級・授業の処理は必ず逐次に行う。
"""
import time
from typing import List, Optional

from .request_models import GenerationConfig, GenerationReport
from ...domain.constraints import (
    DailyPeriodLimitConstraint,
    FirstLastPeriodConstraint,
    LunchBreakConstraint,
    MaxConsecutiveLessonConstraint,
    PlacementConstraintValidator,
)
from ...domain.entities.roster import SchoolClass
from ...domain.exceptions import RosterLookupError
from ...domain.interfaces.repositories import (
    IAvailabilityRepository,
    IRosterRepository,
    IScheduleRepository,
)
from ...domain.interfaces.teacher_matcher import ITeacherMatcher
from ...domain.policies.grade_band_policy import GradeBandPolicy
from ...domain.services.conflict_detector import ConflictDetector
from ...domain.services.slot_allocator import AllocationResult, SlotAllocator
from ...infrastructure.config.logging_config import get_schedule_logger


class GenerateScheduleUseCase:
    """時間割生成ユースケース
    
    実行中は対象範囲の時間割への書き込みを独占する前提で動作する。
    途中で中断した場合、確定済みのブロックはそのまま残る。
    """
    
    def __init__(self,
                 roster_repository: IRosterRepository,
                 schedule_repository: IScheduleRepository,
                 availability_repository: IAvailabilityRepository,
                 teacher_matcher: Optional[ITeacherMatcher] = None,
                 grade_band_policy: Optional[GradeBandPolicy] = None):
        self.roster_repository = roster_repository
        self.schedule_repository = schedule_repository
        self.availability_repository = availability_repository
        self.teacher_matcher = teacher_matcher
        self.grade_band_policy = grade_band_policy or GradeBandPolicy()
        self.conflict_detector = ConflictDetector(
            schedule_repository, availability_repository, roster_repository
        )
        self.logger = get_schedule_logger(__name__)
    
    def execute(self, config: Optional[GenerationConfig] = None) -> GenerationReport:
        """時間割を生成する
        
        Args:
            config: 生成設定（省略時は既定値）
            
        Returns:
            配置時数・失敗時数・残存する重複をまとめたレポート
        """
        config = config or GenerationConfig()
        start_time = time.time()
        self.logger.phase_start("時間割生成", grade=config.grade, days=config.preferred_days)
        
        classes = sorted(self.roster_repository.get_classes(config.grade), key=SchoolClass.sort_key)
        if config.grade is None:
            self._ensure_lesson_grades(classes)
        
        scope = [school_class.id for school_class in classes] if config.grade is not None else None
        allocator = self._create_allocator(config)
        teachers = self.roster_repository.get_teachers()

        results: List[AllocationResult] = []
        placed_count = 0
        failed_count = 0
        with self.schedule_repository.batch():
            deleted = self.schedule_repository.delete_all(classes=scope)
            self.logger.info(f"既存の時間割エントリを{deleted}件削除しました")

            for school_class in classes:
                max_periods = self.grade_band_policy.max_periods_per_day(school_class.grade)
                for lesson in self.roster_repository.get_lessons_for_grade(school_class.grade):
                    result = allocator.allocate(school_class, lesson, max_periods, teachers)
                    results.append(result)
                    placed_count += result.placed_hours
                    failed_count += result.failed_hours
                    if result.failed_hours:
                        self.logger.warning(
                            f"{school_class}の{lesson}を{result.failed_hours}時間配置できませんでした",
                            strategy=result.strategy
                        )

        remaining_conflicts = self.conflict_detector.detect_all_conflicts()
        report = GenerationReport(
            success=failed_count == 0 and not remaining_conflicts,
            placed_count=placed_count,
            failed_count=failed_count,
            remaining_conflicts=remaining_conflicts,
            lesson_results=results,
            execution_time=time.time() - start_time,
        )
        self.logger.info(report.message)
        self.logger.phase_end("時間割生成", success=report.success)
        return report
    
    def _ensure_lesson_grades(self, classes: List[SchoolClass]) -> None:
        """どの学級にも属さない学年の授業があれば生成を開始しない
        
        Raises:
            RosterLookupError: 授業の学年に学級が1つもない場合
        """
        grades = {school_class.grade for school_class in classes}
        for lesson in self.roster_repository.get_lessons():
            if lesson.grade not in grades:
                raise RosterLookupError(
                    "lesson", lesson.id,
                    details={"grade": lesson.grade, "reason": "no class for grade"}
                )
    
    def _create_allocator(self, config: GenerationConfig) -> SlotAllocator:
        return SlotAllocator(
            roster_repository=self.roster_repository,
            schedule_repository=self.schedule_repository,
            conflict_detector=self.conflict_detector,
            teacher_matcher=self.teacher_matcher,
            constraint_validator=self.create_constraint_validator(config),
            preferred_days=config.preferred_days,
            guidance_lesson_name=config.guidance_lesson_name,
        )
    
    @staticmethod
    def create_constraint_validator(config: GenerationConfig) -> PlacementConstraintValidator:
        """設定に基づいて配置制約を組み立てる"""
        return PlacementConstraintValidator([
            LunchBreakConstraint(),
            DailyPeriodLimitConstraint(),
            FirstLastPeriodConstraint(config.avoid_first_last_period),
            MaxConsecutiveLessonConstraint(config.max_consecutive_lessons),
        ])
