"""時間割統計のテスト"""
from timetable_engine.application.services import ScheduleStatisticsService
from timetable_engine.domain.value_objects import ScheduleEntry

from conftest import MATH, make_class, make_teacher, make_workspace


def add(ws, class_id, teacher_id, day, slot, lesson_id=1):
    ws.schedule.add_entry(ScheduleEntry(class_id=class_id, teacher_id=teacher_id, lesson_id=lesson_id,
                                        day_of_week=day, time_slot=slot))


def build(grades=(9,)):
    ws = make_workspace(
        teachers=[make_teacher(1, MATH), make_teacher(2, MATH)],
        classes=[make_class(i + 1, grade=grade, section=chr(ord("A") + i)) for i, grade in enumerate(grades)],
    )
    return ws, ScheduleStatisticsService(ws.schedule, ws.roster, ws.detector)


class TestCollect:
    
    def test_empty_schedule(self):
        _, service = build()
        
        stats = service.collect()
        
        assert stats.total_entries == 0
        assert stats.conflict_count == 0
        assert stats.daily_distribution == {}
    
    def test_distributions(self):
        ws, service = build(grades=(9, 9))
        add(ws, 1, 1, 1, 1)
        add(ws, 1, 1, 1, 2)
        add(ws, 2, 2, 3, 1)
        
        stats = service.collect()
        
        assert stats.total_entries == 3
        assert stats.classes_with_schedule == 2
        assert stats.teachers_with_schedule == 2
        assert stats.daily_distribution == {1: 2, 3: 1}
        assert stats.hourly_distribution == {1: 2, 2: 1}
    
    def test_counts_conflicts(self):
        ws, service = build(grades=(9, 9))
        add(ws, 1, 1, 1, 1)
        add(ws, 2, 1, 1, 1)
        
        assert service.collect().conflict_count == 1


class TestEmptySlots:
    
    def test_excludes_lunch_and_occupied_slots(self):
        ws, service = build(grades=(6,))
        add(ws, 1, 1, 1, 1)
        
        slots = service.empty_slots()
        
        assert (1, 1) not in slots
        assert all(period != 5 for _, period in slots)
        # 6年は7校時、昼休みを除き1日6枠
        assert len(slots) == 5 * 6 - 1
    
    def test_uses_widest_grade_band(self):
        _, service = build(grades=(6, 10))
        
        slots = service.empty_slots(days=[1])
        
        assert slots == [(1, p) for p in (1, 2, 3, 4, 6, 7, 8)]


class TestTeacherWorkload:
    
    def test_workload(self):
        ws, service = build(grades=(9, 9))
        add(ws, 1, 1, 1, 1, lesson_id=1)
        add(ws, 2, 1, 1, 2, lesson_id=1)
        add(ws, 2, 1, 2, 2, lesson_id=2)
        
        workload = service.teacher_workload(1)
        
        assert workload.total_hours == 3
        assert workload.class_count == 2
        assert workload.lesson_count == 2
        assert service.teacher_workload(2).total_hours == 0
