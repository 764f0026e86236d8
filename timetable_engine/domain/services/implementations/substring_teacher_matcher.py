"""部分文字列による教員照合の実装"""
from ...entities.roster import Lesson, Teacher
from ...interfaces.teacher_matcher import ITeacherMatcher


class SubstringTeacherMatcher(ITeacherMatcher):
    """担当教科と授業名の部分一致で照合する
    
    大文字小文字を区別せず、担当教科が授業名に含まれるか、授業名が担当教科に
    含まれる場合に一致とする。表記ゆれを吸収するための緩い経験則であり、
    誤一致・取りこぼしがあり得る。担当教科が未設定の教員は一致させない。
    """
    
    def matches(self, teacher: Teacher, lesson: Lesson) -> bool:
        subject = teacher.normalized_subject
        if not subject:
            return False
        lesson_name = lesson.name.strip().lower()
        if not lesson_name:
            return False
        return subject in lesson_name or lesson_name in subject
