"""生成設定(JSON)の読み込み"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

from ...application.use_cases.request_models import GenerationConfig
from ...domain.exceptions import ConfigurationError, DataLoadingError
from ...shared.mixins.logging_mixin import LoggingMixin


class GenerationConfigLoader(LoggingMixin):
    """GenerationConfigをJSONファイルから読み込む
    
    ファイルがなければ既定値を返し、警告を記録する。
    """
    
    def __init__(self, config_path: Optional[Path] = None):
        super().__init__()
        self.config_path = Path(config_path) if config_path else None
    
    def load(self, **overrides) -> GenerationConfig:
        """設定を読み込み、Noneでない上書き値を適用する
        
        Raises:
            DataLoadingError: JSONとして読めない場合
            ConfigurationError: 値が不正な場合
        """
        data = self._read_json()
        config = GenerationConfig.from_dict(data)
        config = config.merged(**overrides)
        config.validate()
        return config
    
    def _read_json(self) -> Dict[str, Any]:
        if self.config_path is None:
            return {}
        if not self.config_path.exists():
            self.log_warning(f"生成設定ファイルが見つかりません。既定値を使用します: {self.config_path}")
            return {}
        
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataLoadingError(
                f"Failed to read generation config: {e}",
                file_path=str(self.config_path)
            ) from e
        
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Generation config must be a JSON object: {self.config_path}"
            )
        self.log_info(f"生成設定を読み込みました: {self.config_path}")
        return data
