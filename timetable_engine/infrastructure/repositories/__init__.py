"""リポジトリ実装"""
from .csv_repository import CSVAvailabilityRepository, CSVRosterRepository, CSVScheduleRepository
from .in_memory_repository import (
    InMemoryAvailabilityRepository,
    InMemoryRosterRepository,
    InMemoryScheduleRepository,
)

__all__ = [
    'CSVAvailabilityRepository',
    'CSVRosterRepository',
    'CSVScheduleRepository',
    'InMemoryAvailabilityRepository',
    'InMemoryRosterRepository',
    'InMemoryScheduleRepository',
]
