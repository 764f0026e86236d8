"""アプリケーションサービス"""
from .schedule_entry_service import ScheduleEntryService
from .schedule_statistics_service import ScheduleStatistics, ScheduleStatisticsService, TeacherWorkload

__all__ = [
    'ScheduleEntryService',
    'ScheduleStatistics',
    'ScheduleStatisticsService',
    'TeacherWorkload',
]
