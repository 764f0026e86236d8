"""時間割の入出力"""
from .timetable_exporter import TimetableExporter

__all__ = ['TimetableExporter']
