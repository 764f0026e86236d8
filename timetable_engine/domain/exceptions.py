"""時間割エンジンのカスタム例外定義

制約違反（配置できなかった時数や残存する重複）は例外ではなくレポートで返す。
ここで定義する例外は前提条件の違反や入力データの不備を表す。
"""


class TimetableGenerationError(Exception):
    """時間割生成の基底例外クラス"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(TimetableGenerationError):
    """設定が無効な場合の例外"""
    def __init__(self, message: str, config_key: str = None, details: dict = None):
        super().__init__(message, details)
        self.config_key = config_key


class DataLoadingError(TimetableGenerationError):
    """データ読み込み失敗時の例外"""
    def __init__(self, message: str, file_path: str = None, details: dict = None):
        super().__init__(message, details)
        self.file_path = file_path


class RosterLookupError(TimetableGenerationError):
    """参照された学級・授業・教員が名簿に存在しない場合の例外"""
    def __init__(self, entity: str, entity_id, details: dict = None):
        super().__init__(f"{entity} not found: {entity_id}", details)
        self.entity = entity
        self.entity_id = entity_id


class ScheduleConflictError(TimetableGenerationError):
    """手動登録・更新が制約違反で拒否された場合の例外"""
    def __init__(self, message: str, conflicts: list = None, details: dict = None):
        super().__init__(message, details)
        self.conflicts = conflicts or []


class EntryNotFoundError(TimetableGenerationError):
    """存在しない時間割エントリを参照した場合の例外"""
    def __init__(self, entry_id, details: dict = None):
        super().__init__(f"Schedule entry not found: {entry_id}", details)
        self.entry_id = entry_id
