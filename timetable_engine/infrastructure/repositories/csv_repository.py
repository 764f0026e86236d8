"""CSVファイルを使用したリポジトリ実装

データディレクトリの名簿CSVを読み込み、時間割はschedule.csvへ書き戻す。
"""
import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar

from .in_memory_repository import (
    InMemoryAvailabilityRepository,
    InMemoryRosterRepository,
    InMemoryScheduleRepository,
)
from ..config.path_config import PathConfig
from ...domain.entities.roster import (
    GuidanceCounselor,
    Lesson,
    SchoolClass,
    Teacher,
    TeacherAvailability,
)
from ...domain.exceptions import DataLoadingError
from ...domain.value_objects.schedule_entry import ScheduleEntry
from ...domain.value_objects.time_slot import TimeSlot
from ...shared.mixins.validation_mixin import ValidationError

T = TypeVar('T')

SCHEDULE_FIELDS = ['id', 'class_id', 'teacher_id', 'lesson_id', 'day_of_week', 'time_slot']

_TRUE_VALUES = {'1', 'true', 'yes', 'y', 'evet'}
_FALSE_VALUES = {'0', 'false', 'no', 'n', 'hayır', 'hayir'}


def _parse_bool(value: str, default: bool = True) -> bool:
    normalized = value.strip().lower()
    if not normalized:
        return default
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def _optional(value: str) -> Optional[str]:
    return value or None


def _read_csv(file_path: Path) -> List[Dict[str, str]]:
    """ヘッダー付きCSVを辞書のリストとして読む（空行は除き、前後の空白は削る）"""
    with open(file_path, 'r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f)
        if reader.fieldnames:
            reader.fieldnames = [name.strip() for name in reader.fieldnames]
        rows = []
        for row in reader:
            values = {key: (value or '').strip() for key, value in row.items() if key is not None}
            if any(values.values()):
                rows.append(values)
        return rows


def _write_csv(file_path: Path, rows: List[Dict[str, Any]], fieldnames: List[str]) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8-sig', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _load_rows(file_path: Path, parse_row: Callable[[Dict[str, str]], T],
               required: bool = True) -> List[T]:
    """CSVを読み込み、各行をparse_rowで変換する
    
    Raises:
        DataLoadingError: 必須ファイルがない場合、または行が変換できない場合
    """
    logger = logging.getLogger(__name__)
    if not file_path.exists():
        if required:
            raise DataLoadingError(f"Required file not found: {file_path}", file_path=str(file_path))
        logger.info(f"{file_path.name}がないため空として扱います")
        return []
    
    items = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        try:
            items.append(parse_row(row))
        except (KeyError, ValueError, ValidationError) as e:
            raise DataLoadingError(
                f"Invalid row at {file_path.name}:{line_no}: {e}",
                file_path=str(file_path),
                details={'line': line_no, 'row': row}
            ) from e
    logger.debug(f"{file_path.name}から{len(items)}件読み込みました")
    return items


def _parse_teacher(row: Dict[str, str]) -> Teacher:
    return Teacher(id=int(row['id']), name=row['name'], subject=_optional(row.get('subject', '')))


def _parse_class(row: Dict[str, str]) -> SchoolClass:
    return SchoolClass(
        id=int(row['id']),
        grade=int(row['grade']),
        section=row['section'],
        school_track=_optional(row.get('school_track', '')),
    )


def _parse_lesson(row: Dict[str, str]) -> Lesson:
    return Lesson(
        id=int(row['id']),
        name=row['name'],
        grade=int(row['grade']),
        weekly_hours=int(row['weekly_hours']),
        is_mandatory=_parse_bool(row.get('is_mandatory', '')),
        school_track=_optional(row.get('school_track', '')),
    )


def _parse_counselor(row: Dict[str, str]) -> GuidanceCounselor:
    return GuidanceCounselor(teacher_id=int(row['teacher_id']), class_id=int(row['class_id']))


def _parse_availability(row: Dict[str, str]) -> TeacherAvailability:
    slot = TimeSlot(int(row['day_of_week']), int(row['time_slot']))
    return TeacherAvailability(
        teacher_id=int(row['teacher_id']),
        day_of_week=slot.day,
        time_slot=slot.period,
        is_available=_parse_bool(row.get('is_available', '')),
    )


def _parse_entry(row: Dict[str, str]) -> ScheduleEntry:
    return ScheduleEntry(
        class_id=int(row['class_id']),
        teacher_id=int(row['teacher_id']),
        lesson_id=int(row['lesson_id']),
        day_of_week=int(row['day_of_week']),
        time_slot=int(row['time_slot']),
        id=int(row['id']) if row.get('id') else None,
    )


class CSVRosterRepository(InMemoryRosterRepository):
    """teachers.csv・classes.csv・lessons.csv・guidance_counselors.csvから名簿を読み込む"""
    
    def __init__(self, path_config: Optional[PathConfig] = None):
        self.path_config = path_config or PathConfig()
        data = self.path_config.get_data_path
        super().__init__(
            teachers=_load_rows(data(PathConfig.TEACHERS_FILE), _parse_teacher),
            classes=_load_rows(data(PathConfig.CLASSES_FILE), _parse_class),
            lessons=_load_rows(data(PathConfig.LESSONS_FILE), _parse_lesson),
            guidance_counselors=_load_rows(
                data(PathConfig.GUIDANCE_COUNSELORS_FILE), _parse_counselor, required=False
            ),
        )
        logging.getLogger(__name__).info(
            f"名簿を読み込みました: 教員{len(self.get_teachers())}名, "
            f"学級{len(self.get_classes())}, 授業{len(self.get_lessons())}"
        )


class CSVAvailabilityRepository(InMemoryAvailabilityRepository):
    """availability.csvから教員の空き状況を読み込む（ファイルがなければ全枠空き）"""
    
    def __init__(self, path_config: Optional[PathConfig] = None):
        self.path_config = path_config or PathConfig()
        super().__init__(_load_rows(
            self.path_config.get_data_path(PathConfig.AVAILABILITY_FILE),
            _parse_availability,
            required=False,
        ))


class CSVScheduleRepository(InMemoryScheduleRepository):
    """schedule.csvに書き戻す時間割リポジトリ
    
    通常は変更のたびにファイル全体を書き直す。batch()の中では書き出しを
    ブロックの終わりに1回だけ行う（メモリ上の状態は即座に更新される）。
    """
    
    def __init__(self, path_config: Optional[PathConfig] = None):
        self.path_config = path_config or PathConfig()
        self.file_path = self.path_config.schedule_csv
        self._batch_depth = 0
        self._dirty = False
        super().__init__(_load_rows(self.file_path, _parse_entry, required=False))
    
    def add_entry(self, entry: ScheduleEntry) -> int:
        entry_id = super().add_entry(entry)
        self._mark_dirty()
        return entry_id
    
    def update_entry(self, entry: ScheduleEntry) -> None:
        super().update_entry(entry)
        self._mark_dirty()
    
    def delete_entry(self, entry_id: int) -> bool:
        deleted = super().delete_entry(entry_id)
        if deleted:
            self._mark_dirty()
        return deleted
    
    def delete_all(self, classes: Optional[Iterable[int]] = None) -> int:
        count = super().delete_all(classes)
        self._mark_dirty()
        return count
    
    @contextmanager
    def batch(self) -> Iterator['CSVScheduleRepository']:
        """ブロック内の変更をまとめて書き出す
        
        例外で抜けた場合も、それまでに確定した変更は書き出す。
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._flush()
    
    def _mark_dirty(self) -> None:
        self._dirty = True
        if self._batch_depth == 0:
            self._flush()
    
    def _flush(self) -> None:
        rows = [
            {
                'id': entry.id,
                'class_id': entry.class_id,
                'teacher_id': entry.teacher_id,
                'lesson_id': entry.lesson_id,
                'day_of_week': entry.day_of_week,
                'time_slot': entry.time_slot,
            }
            for entry in sorted(self.get_entries(), key=lambda e: e.id)
        ]
        _write_csv(self.file_path, rows, SCHEDULE_FIELDS)
        self._dirty = False
