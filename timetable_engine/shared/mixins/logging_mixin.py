"""ロギング機能を提供するミックスイン

クラスにロギング機能を追加するための共通ミックスインです。
"""
import logging
from typing import Optional


class LoggingMixin:
    """ロギング機能を提供するミックスイン
    
    使用例:
        class SlotAllocator(LoggingMixin):
            def allocate(self, ...):
                self.logger.debug("配置を開始")
    """
    
    @property
    def logger(self) -> logging.Logger:
        """ロガーを取得
        
        クラス名を使用してロガーを作成します。
        """
        if not hasattr(self, '_logger'):
            self._logger = logging.getLogger(
                f"{self.__class__.__module__}.{self.__class__.__name__}"
            )
        return self._logger
    
    def log_debug(self, message: str, *args, **kwargs) -> None:
        """デバッグログを出力"""
        self.logger.debug(message, *args, **kwargs)
    
    def log_info(self, message: str, *args, **kwargs) -> None:
        """情報ログを出力"""
        self.logger.info(message, *args, **kwargs)
    
    def log_warning(self, message: str, *args, **kwargs) -> None:
        """警告ログを出力"""
        self.logger.warning(message, *args, **kwargs)
    
    def log_error(self, message: str, *args, **kwargs) -> None:
        """エラーログを出力"""
        self.logger.error(message, *args, **kwargs)
    
    def log_performance(
        self,
        operation: str,
        elapsed_time: float,
        item_count: Optional[int] = None
    ) -> None:
        """パフォーマンス情報をログ出力"""
        message = f"{operation} - 処理時間: {elapsed_time:.3f}秒"
        if item_count is not None:
            rate = item_count / elapsed_time if elapsed_time > 0 else 0
            message += f" ({item_count}件, {rate:.1f}件/秒)"
        self.log_info(message)
