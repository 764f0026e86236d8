"""時間割エントリの手動編集のテスト"""
import pytest

from timetable_engine.application.services import ScheduleEntryService
from timetable_engine.domain.exceptions import (
    EntryNotFoundError,
    RosterLookupError,
    ScheduleConflictError,
)
from timetable_engine.domain.value_objects import ConflictKind, ScheduleEntry
from timetable_engine.shared.mixins.validation_mixin import ValidationError

from conftest import MATH, TURKISH, make_class, make_lesson, make_teacher, make_workspace


def entry(class_id=1, teacher_id=1, lesson_id=1, day=1, slot=1):
    return ScheduleEntry(class_id=class_id, teacher_id=teacher_id, lesson_id=lesson_id,
                         day_of_week=day, time_slot=slot)


@pytest.fixture
def workspace():
    return make_workspace(
        teachers=[make_teacher(1, MATH), make_teacher(2, TURKISH)],
        classes=[make_class(1, section="A"), make_class(2, section="B"), make_class(3, grade=6)],
        lessons=[make_lesson(1, MATH, 4), make_lesson(2, TURKISH, 4)],
    )


@pytest.fixture
def service(workspace):
    return ScheduleEntryService(workspace.schedule, workspace.roster, workspace.detector)


class TestCreateEntry:
    
    def test_creates_and_assigns_id(self, service, workspace):
        created = service.create_entry(entry())
        
        assert created.id is not None
        assert workspace.schedule.get_entry(created.id) == created
    
    def test_conflicting_entry_is_rejected_without_writing(self, service, workspace):
        service.create_entry(entry(class_id=1))
        
        with pytest.raises(ScheduleConflictError) as exc_info:
            service.create_entry(entry(class_id=2))
        
        assert [c.kind for c in exc_info.value.conflicts] == [ConflictKind.TEACHER_DOUBLE_BOOKING]
        assert len(workspace.schedule.get_entries()) == 1
    
    def test_unavailable_teacher_is_rejected(self, service, workspace):
        workspace.availability.mark_unavailable(1, 3, 2)
        
        with pytest.raises(ScheduleConflictError):
            service.create_entry(entry(day=3, slot=2))
    
    @pytest.mark.parametrize("field, entity", [
        ("class_id", "class"),
        ("teacher_id", "teacher"),
        ("lesson_id", "lesson"),
    ])
    def test_unknown_references(self, service, field, entity):
        with pytest.raises(RosterLookupError) as exc_info:
            service.create_entry(entry(**{field: 99}))
        assert exc_info.value.entity == entity
    
    @pytest.mark.parametrize("class_id, slot", [(3, 8), (3, 12), (1, 9)])
    def test_period_beyond_class_day_is_rejected(self, service, workspace, class_id, slot):
        with pytest.raises(ValidationError):
            service.create_entry(entry(class_id=class_id, slot=slot))
        assert workspace.schedule.get_entries() == []
        assert workspace.detector.detect_all_conflicts() == []
    
    @pytest.mark.parametrize("class_id, slot", [(3, 7), (1, 8)])
    def test_last_period_of_class_day_is_accepted(self, service, class_id, slot):
        created = service.create_entry(entry(class_id=class_id, slot=slot))
        assert created.time_slot == slot


class TestUpdateEntry:
    
    def test_update_onto_own_slot_succeeds(self, service):
        created = service.create_entry(entry())
        
        updated = service.update_entry(created.id, lesson_id=2, teacher_id=2)
        
        assert updated.id == created.id
        assert updated.lesson_id == 2
    
    def test_move_to_another_slot(self, service, workspace):
        created = service.create_entry(entry())
        
        service.update_entry(created.id, day_of_week=2, time_slot=3)
        
        stored = workspace.schedule.get_entry(created.id)
        assert (stored.day_of_week, stored.time_slot) == (2, 3)
    
    def test_move_onto_occupied_slot_is_rejected(self, service, workspace):
        first = service.create_entry(entry(class_id=1, teacher_id=1, slot=1))
        service.create_entry(entry(class_id=1, teacher_id=2, lesson_id=2, slot=2))
        
        with pytest.raises(ScheduleConflictError):
            service.update_entry(first.id, time_slot=2)
        assert workspace.schedule.get_entry(first.id).time_slot == 1
    
    def test_move_beyond_class_day_is_rejected(self, service, workspace):
        created = service.create_entry(entry(class_id=3, slot=2))
        
        with pytest.raises(ValidationError):
            service.update_entry(created.id, time_slot=12)
        assert workspace.schedule.get_entry(created.id).time_slot == 2
    
    def test_unknown_entry(self, service):
        with pytest.raises(EntryNotFoundError):
            service.update_entry(42, time_slot=2)
    
    def test_unknown_field(self, service):
        created = service.create_entry(entry())
        with pytest.raises(ValueError):
            service.update_entry(created.id, room="B12")


class TestQueries:
    
    def test_delete_entry(self, service, workspace):
        created = service.create_entry(entry())
        
        assert service.delete_entry(created.id) is True
        assert service.delete_entry(created.id) is False
        assert workspace.schedule.get_entries() == []
    
    def test_class_and_teacher_schedules_are_ordered(self, service):
        service.create_entry(entry(class_id=1, teacher_id=1, day=2, slot=1))
        service.create_entry(entry(class_id=1, teacher_id=2, lesson_id=2, day=1, slot=3))
        service.create_entry(entry(class_id=2, teacher_id=1, day=1, slot=2))
        
        class_schedule = service.get_class_schedule(1)
        teacher_schedule = service.get_teacher_schedule(1)
        
        assert [(e.day_of_week, e.time_slot) for e in class_schedule] == [(1, 3), (2, 1)]
        assert [(e.day_of_week, e.time_slot) for e in teacher_schedule] == [(1, 2), (2, 1)]
