"""データディレクトリのパス設定"""
import os
from pathlib import Path
from typing import Optional

DATA_DIR_ENV = 'TIMETABLE_DATA_DIR'


class PathConfig:
    """入出力ファイルのパスを一元管理する
    
    基準ディレクトリは引数、環境変数TIMETABLE_DATA_DIR、カレントの./dataの順に決まる。
    """
    
    TEACHERS_FILE = 'teachers.csv'
    CLASSES_FILE = 'classes.csv'
    LESSONS_FILE = 'lessons.csv'
    AVAILABILITY_FILE = 'availability.csv'
    GUIDANCE_COUNSELORS_FILE = 'guidance_counselors.csv'
    SCHEDULE_FILE = 'schedule.csv'
    GENERATION_CONFIG_FILE = 'generation_config.json'
    
    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir is None:
            data_dir = os.environ.get(DATA_DIR_ENV) or Path.cwd() / 'data'
        self.data_dir = Path(data_dir).resolve()
    
    def get_data_path(self, filename: str) -> Path:
        return self.data_dir / filename
    
    @property
    def schedule_csv(self) -> Path:
        return self.get_data_path(self.SCHEDULE_FILE)
    
    @property
    def generation_config_json(self) -> Path:
        return self.get_data_path(self.GENERATION_CONFIG_FILE)
    
    def __repr__(self) -> str:
        return f"PathConfig(data_dir={self.data_dir})"
