"""ユースケース"""
from .request_models import GenerationConfig, GenerationReport, ValidateScheduleResult
from .generate_schedule import GenerateScheduleUseCase
from .validate_schedule_use_case import ValidateScheduleUseCase

__all__ = [
    'GenerationConfig',
    'GenerationReport',
    'ValidateScheduleResult',
    'GenerateScheduleUseCase',
    'ValidateScheduleUseCase',
]
