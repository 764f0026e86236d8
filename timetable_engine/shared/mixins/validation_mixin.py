"""バリデーション機能を提供するミックスイン

値オブジェクトや設定クラスの入力検証に使用します。
"""
from typing import Any, Iterable, Optional


class ValidationError(Exception):
    """バリデーションエラー"""
    pass


class ValidationMixin:
    """バリデーション機能を提供するミックスイン
    
    使用例:
        class GenerationConfig(ValidationMixin):
            def validate(self):
                self.validate_range(self.max_consecutive_lessons, "max_consecutive_lessons", min_value=1)
    """
    
    def validate_range(
        self,
        value: int,
        name: str,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None
    ) -> int:
        """数値が範囲内であることを検証
        
        Args:
            value: 検証する値
            name: 値の名前（エラーメッセージ用）
            min_value: 最小値（含む）
            max_value: 最大値（含む）
            
        Raises:
            ValidationError: 範囲外の場合
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{name}は整数である必要があります: {value!r}")
        if min_value is not None and value < min_value:
            raise ValidationError(f"{name}は{min_value}以上である必要があります: {value}")
        if max_value is not None and value > max_value:
            raise ValidationError(f"{name}は{max_value}以下である必要があります: {value}")
        return value
    
    def validate_unique(self, values: Iterable[Any], name: str) -> None:
        """要素が重複していないことを検証"""
        seen = set()
        for value in values:
            if value in seen:
                raise ValidationError(f"{name}に重複があります: {value}")
            seen.add(value)
