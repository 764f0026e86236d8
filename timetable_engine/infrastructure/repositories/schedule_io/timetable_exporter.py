"""確定済み時間割のエクスポート

一覧形式（1エントリ1行）と、学級×曜日を行・校時を列にした表形式の2種類を出力する。
"""
from pathlib import Path

import pandas as pd

from ....domain.constants import get_day_name
from ....domain.interfaces.repositories import IRosterRepository, IScheduleRepository
from ....shared.mixins.logging_mixin import LoggingMixin

FLAT_COLUMNS = ['id', 'class', 'day', 'day_name', 'period', 'lesson', 'teacher']


class TimetableExporter(LoggingMixin):
    """時間割をCSVに書き出す"""
    
    def __init__(self,
                 schedule_repository: IScheduleRepository,
                 roster_repository: IRosterRepository):
        super().__init__()
        self.schedule_repository = schedule_repository
        self.roster_repository = roster_repository
    
    def to_dataframe(self) -> pd.DataFrame:
        """全エントリを名称付きの一覧にする（学級・曜日・校時順）"""
        records = []
        for entry in sorted(self.schedule_repository.get_entries(), key=self._entry_order):
            school_class = self.roster_repository.get_class(entry.class_id)
            lesson = self.roster_repository.get_lesson(entry.lesson_id)
            teacher = self.roster_repository.get_teacher(entry.teacher_id)
            records.append({
                'id': entry.id,
                'class': school_class.display_name if school_class else str(entry.class_id),
                'day': entry.day_of_week,
                'day_name': get_day_name(entry.day_of_week),
                'period': entry.time_slot,
                'lesson': lesson.name if lesson else str(entry.lesson_id),
                'teacher': teacher.name if teacher else str(entry.teacher_id),
            })
        
        return pd.DataFrame(records, columns=FLAT_COLUMNS)
    
    def to_grid(self) -> pd.DataFrame:
        """学級×曜日を行、校時を列にした表を作る
        
        セルは「授業名 (教員名)」。空きコマは空文字。
        """
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame()
        
        df = df.assign(cell=df['lesson'] + ' (' + df['teacher'] + ')')
        grid = (
            df.groupby(['class', 'day', 'period'], sort=False)['cell']
            .agg(' / '.join)
            .unstack('period')
        )
        # 行は学級・曜日の順、列は校時の昇順
        rows = pd.MultiIndex.from_frame(df[['class', 'day']].drop_duplicates())
        grid = grid.reindex(index=rows, columns=sorted(grid.columns)).fillna('')
        grid.index = grid.index.set_levels(
            [get_day_name(day) for day in grid.index.levels[1]], level='day'
        )
        grid.columns = [f"{period}限" for period in grid.columns]
        return grid
    
    def export_flat(self, file_path: Path) -> Path:
        return self._write(self.to_dataframe(), Path(file_path), index=False)
    
    def export_grid(self, file_path: Path) -> Path:
        return self._write(self.to_grid(), Path(file_path), index=True)
    
    def _write(self, df: pd.DataFrame, file_path: Path, index: bool) -> Path:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(file_path, index=index, encoding='utf-8-sig')
        self.log_info(f"時間割を出力しました: {file_path} ({len(df)}行)")
        return file_path
    
    def _entry_order(self, entry):
        school_class = self.roster_repository.get_class(entry.class_id)
        class_key = school_class.sort_key() if school_class else (0, '', entry.class_id)
        return (class_key, entry.day_of_week, entry.time_slot)
