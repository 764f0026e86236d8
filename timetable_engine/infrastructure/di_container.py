"""依存性注入コンテナ

インターフェースと実装のバインディングを管理する。
CLIではCSVリポジトリを、テストではoverrideでメモリ上のリポジトリを使う。
"""
import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from ..application.services.schedule_entry_service import ScheduleEntryService
from ..application.services.schedule_statistics_service import ScheduleStatisticsService
from ..application.use_cases.generate_schedule import GenerateScheduleUseCase
from ..application.use_cases.validate_schedule_use_case import ValidateScheduleUseCase
from ..domain.interfaces.repositories import (
    IAvailabilityRepository,
    IRosterRepository,
    IScheduleRepository,
)
from ..domain.interfaces.teacher_matcher import ITeacherMatcher
from ..domain.policies.grade_band_policy import GradeBandPolicy
from ..domain.services.conflict_detector import ConflictDetector
from ..domain.services.implementations.substring_teacher_matcher import SubstringTeacherMatcher
from .config.path_config import PathConfig
from .repositories.csv_repository import (
    CSVAvailabilityRepository,
    CSVRosterRepository,
    CSVScheduleRepository,
)
from .repositories.schedule_io.timetable_exporter import TimetableExporter

logger = logging.getLogger(__name__)


class DIContainer:
    """依存性注入コンテナ"""
    
    def __init__(self, path_config: Optional[PathConfig] = None):
        self.path_config = path_config or PathConfig()
        self._services: Dict[Type, Tuple[Callable, bool]] = {}
        self._singletons: Dict[Type, Any] = {}
        self._register_default_bindings()
    
    def _register_default_bindings(self):
        """デフォルトのバインディングを登録"""
        self.register(PathConfig, lambda: self.path_config, singleton=True)
        
        # リポジトリ
        self.register(
            IRosterRepository,
            lambda: CSVRosterRepository(self.resolve(PathConfig)),
            singleton=True
        )
        self.register(
            IAvailabilityRepository,
            lambda: CSVAvailabilityRepository(self.resolve(PathConfig)),
            singleton=True
        )
        self.register(
            IScheduleRepository,
            lambda: CSVScheduleRepository(self.resolve(PathConfig)),
            singleton=True
        )
        
        # ドメインサービス
        self.register(ITeacherMatcher, SubstringTeacherMatcher, singleton=True)
        self.register(GradeBandPolicy, GradeBandPolicy, singleton=True)
        self.register(
            ConflictDetector,
            lambda: ConflictDetector(
                self.resolve(IScheduleRepository),
                self.resolve(IAvailabilityRepository),
                self.resolve(IRosterRepository),
            )
        )
    
    def register(self, interface: Type, factory: Callable, singleton: bool = False):
        """インターフェースと実装ファクトリを登録
        
        Args:
            interface: インターフェースの型
            factory: 実装インスタンスを生成するファクトリ関数
            singleton: シングルトンとして管理するか
        """
        self._services[interface] = (factory, singleton)
        logger.debug(f"Registered {interface.__name__} with {'singleton' if singleton else 'transient'} lifetime")
    
    def resolve(self, interface: Type) -> Any:
        """インターフェースから実装を解決
        
        Raises:
            ValueError: インターフェースが登録されていない場合
        """
        if interface not in self._services:
            raise ValueError(f"No implementation registered for {interface.__name__}")
        
        factory, is_singleton = self._services[interface]
        if not is_singleton:
            return factory()
        if interface not in self._singletons:
            self._singletons[interface] = factory()
        return self._singletons[interface]
    
    def override(self, interface: Type, factory: Callable, singleton: bool = False):
        """既存のバインディングを上書き（主にテスト用）"""
        self._singletons.pop(interface, None)
        self.register(interface, factory, singleton)
    
    def reset(self):
        """コンテナをリセット（主にテスト用）"""
        self._services.clear()
        self._singletons.clear()
        self._register_default_bindings()
    
    # ユースケース・サービスの組み立て
    
    def create_generate_schedule_use_case(self) -> GenerateScheduleUseCase:
        return GenerateScheduleUseCase(
            roster_repository=self.resolve(IRosterRepository),
            schedule_repository=self.resolve(IScheduleRepository),
            availability_repository=self.resolve(IAvailabilityRepository),
            teacher_matcher=self.resolve(ITeacherMatcher),
            grade_band_policy=self.resolve(GradeBandPolicy),
        )
    
    def create_validate_schedule_use_case(self) -> ValidateScheduleUseCase:
        return ValidateScheduleUseCase(self.resolve(ConflictDetector))
    
    def create_schedule_entry_service(self) -> ScheduleEntryService:
        return ScheduleEntryService(
            self.resolve(IScheduleRepository),
            self.resolve(IRosterRepository),
            self.resolve(ConflictDetector),
            self.resolve(GradeBandPolicy),
        )
    
    def create_statistics_service(self) -> ScheduleStatisticsService:
        return ScheduleStatisticsService(
            self.resolve(IScheduleRepository),
            self.resolve(IRosterRepository),
            self.resolve(ConflictDetector),
            self.resolve(GradeBandPolicy),
        )
    
    def create_exporter(self) -> TimetableExporter:
        return TimetableExporter(
            self.resolve(IScheduleRepository),
            self.resolve(IRosterRepository),
        )


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """DIコンテナのインスタンスを取得（未設定なら既定のパスで作成）"""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def configure_container(path_config: PathConfig) -> DIContainer:
    """指定したパス設定でコンテナを作り直す"""
    global _container
    _container = DIContainer(path_config)
    return _container
