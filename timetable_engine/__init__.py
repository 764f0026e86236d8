"""授業時間割制約エンジン

学級・教員・時間枠への週時数の割り当てと、重複検出を提供します。
"""

__version__ = "1.0.0"
