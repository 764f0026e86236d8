"""設定関連"""
from .logging_config import LoggingConfig, get_logger, get_schedule_logger
from .path_config import PathConfig
from .generation_config_loader import GenerationConfigLoader

__all__ = [
    'GenerationConfigLoader',
    'LoggingConfig',
    'PathConfig',
    'get_logger',
    'get_schedule_logger',
]
