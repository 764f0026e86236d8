"""値オブジェクトの単体テスト"""
import pytest

from timetable_engine.domain.value_objects import (
    Conflict,
    ConflictKind,
    ConflictSeverity,
    ScheduleEntry,
    TimeSlot,
)
from timetable_engine.shared.mixins.validation_mixin import ValidationError


class TestTimeSlot:
    
    def test_display_uses_day_name(self):
        assert str(TimeSlot(1, 3)) == "月曜3限"
    
    @pytest.mark.parametrize("day", [0, 8, -1])
    def test_rejects_day_out_of_range(self, day):
        with pytest.raises(ValidationError):
            TimeSlot(day, 1)
    
    def test_rejects_period_below_one(self):
        with pytest.raises(ValidationError):
            TimeSlot(1, 0)
    
    def test_lunch_and_next_period(self):
        slot = TimeSlot(2, 4)
        assert not slot.is_lunch()
        assert slot.next_period() == TimeSlot(2, 5)
        assert slot.next_period().is_lunch()
    
    def test_ordering(self):
        slots = [TimeSlot(2, 1), TimeSlot(1, 7), TimeSlot(1, 2)]
        assert sorted(slots) == [TimeSlot(1, 2), TimeSlot(1, 7), TimeSlot(2, 1)]


class TestScheduleEntry:
    
    def test_invalid_day_is_rejected(self):
        with pytest.raises(ValidationError):
            ScheduleEntry(class_id=1, teacher_id=1, lesson_id=1, day_of_week=9, time_slot=1)
    
    def test_with_id_keeps_placement(self):
        candidate = ScheduleEntry(class_id=1, teacher_id=2, lesson_id=3, day_of_week=1, time_slot=4)
        stored = candidate.with_id(10)
        
        assert candidate.id is None
        assert stored.id == 10
        assert stored.placement() == candidate.placement()
        assert stored.without_id() == candidate
    
    def test_keys(self):
        entry = ScheduleEntry(class_id=1, teacher_id=2, lesson_id=3, day_of_week=4, time_slot=6)
        assert entry.teacher_key == (2, 4, 6)
        assert entry.class_key == (1, 4, 6)


class TestConflict:
    
    def test_ids_are_stored_as_tuple(self):
        conflict = Conflict(ConflictKind.CLASS_CONFLICT, "重複", affected_entry_ids=[3, 1])
        assert conflict.affected_entry_ids == (3, 1)
    
    def test_to_dict(self):
        conflict = Conflict(
            ConflictKind.TEACHER_UNAVAILABLE, "不在", (5,), severity=ConflictSeverity.MEDIUM
        )
        assert conflict.to_dict() == {
            'type': 'teacher_unavailable',
            'message': '不在',
            'schedule_items': [5],
            'severity': 'medium',
        }
