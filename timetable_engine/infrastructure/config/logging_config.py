"""ロギング設定の統一管理

エンジン全体のロギング設定を一元管理する。
"""
import json
import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional


class LoggingConfig:
    """ロギング設定クラス"""
    
    LEVELS = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    
    # モジュール別のログレベル
    MODULE_LEVELS = {
        'timetable_engine.application.use_cases': 'INFO',
        'timetable_engine.application.services': 'INFO',
        'timetable_engine.domain.services': 'INFO',
        'timetable_engine.domain.constraints': 'WARNING',
        'timetable_engine.infrastructure.repositories': 'WARNING',
        'timetable_engine.infrastructure.config': 'WARNING',
    }
    
    @classmethod
    def setup_logging(cls,
                      log_level: str = 'INFO',
                      log_file: Optional[Path] = None,
                      console_output: bool = True,
                      simple_format: bool = False) -> None:
        """ロギングを設定
        
        Args:
            log_level: デフォルトのログレベル
            log_file: ログファイルのパス（Noneの場合はファイル出力なし）
            console_output: コンソール出力を有効にするか
            simple_format: シンプルなフォーマットを使用するか
        """
        level = cls.LEVELS.get(log_level, logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()
        
        if simple_format:
            formatter = logging.Formatter('%(levelname)s: %(message)s')
        else:
            formatter = ContextFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        
        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)
        
        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        
        # 全体のレベルより詳細にはしない
        for module_name, level_name in cls.MODULE_LEVELS.items():
            module_level = cls.LEVELS.get(level_name, logging.INFO)
            logging.getLogger(module_name).setLevel(max(module_level, level))
    
    @classmethod
    def setup_production_logging(cls, log_file: Optional[Path] = None) -> None:
        """本番環境用のロギング設定"""
        cls.setup_logging(
            log_level='WARNING',
            log_file=log_file,
            console_output=True,
            simple_format=True
        )
    
    @classmethod
    def setup_development_logging(cls, log_file: Optional[Path] = None) -> None:
        """開発環境用のロギング設定"""
        cls.setup_logging(
            log_level='DEBUG',
            log_file=log_file,
            console_output=True,
            simple_format=False
        )
        for module_name in cls.MODULE_LEVELS:
            logging.getLogger(module_name).setLevel(logging.DEBUG)
    
    @classmethod
    def setup_quiet_logging(cls) -> None:
        """静音モード（エラーのみ）"""
        cls.setup_logging(
            log_level='ERROR',
            log_file=None,
            console_output=True,
            simple_format=True
        )


class ContextFormatter(logging.Formatter):
    """コンテキスト情報を含むカスタムフォーマッター"""
    
    def format(self, record):
        formatted = super().format(record)
        
        context = getattr(record, 'context', None)
        if context:
            formatted += f"\n  Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        
        if record.levelno >= logging.ERROR and getattr(record, 'error_details', None):
            details = json.dumps(record.error_details, ensure_ascii=False, indent=2, default=str)
            formatted += f"\n  Error Details: {details}"
        
        return formatted


class ScheduleGenerationLogger:
    """時間割生成専用のロガーラッパー"""
    
    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.context: Dict[str, Any] = {}
    
    def set_context(self, **kwargs):
        self.context.update(kwargs)
    
    def clear_context(self):
        self.context.clear()
    
    def _extra(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        if self.context or kwargs:
            return {'context': {**self.context, **kwargs}}
        return {}
    
    def debug(self, message: str, **kwargs):
        self.logger.debug(message, extra=self._extra(kwargs))
    
    def info(self, message: str, **kwargs):
        """情報ログ（コンテキスト付き）"""
        self.logger.info(message, extra=self._extra(kwargs))
    
    def warning(self, message: str, **kwargs):
        """警告ログ（コンテキスト付き）"""
        self.logger.warning(message, extra=self._extra(kwargs))
    
    def error(self, message: str, error_details: Dict[str, Any] = None, **kwargs):
        """エラーログ（詳細情報付き）"""
        extra = {
            'context': {**self.context, **kwargs},
            'error_details': error_details or {}
        }
        self.logger.error(message, extra=extra, exc_info=True)
    
    def phase_start(self, phase_name: str, **kwargs):
        """フェーズ開始ログ"""
        self.set_context(phase=phase_name)
        self.info(f"=== {phase_name} 開始 ===", **kwargs)
    
    def phase_end(self, phase_name: str, success: bool = True, **kwargs):
        """フェーズ終了ログ"""
        status = "完了" if success else "失敗"
        self.info(f"=== {phase_name} {status} ===", **kwargs)
        self.clear_context()


def get_logger(name: str) -> logging.Logger:
    """統一されたロガーを取得"""
    return logging.getLogger(name)


def get_schedule_logger(name: str) -> ScheduleGenerationLogger:
    """時間割生成専用ロガーを取得
    
    Args:
        name: ロガー名（通常は__name__）
    """
    return ScheduleGenerationLogger(get_logger(name))
