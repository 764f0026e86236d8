"""教員照合のテスト"""
import pytest

from timetable_engine.domain.services.implementations import SubstringTeacherMatcher

from conftest import MATH, PE, make_lesson, make_teacher


@pytest.fixture
def matcher():
    return SubstringTeacherMatcher()


@pytest.mark.parametrize("subject, lesson_name, expected", [
    ("Matematik", "Matematik", True),
    ("matematik", "MATEMATIK", True),
    ("Beden Eğitimi", PE, True),          # 担当教科が授業名に含まれる
    ("Fen Bilimleri ve Teknoloji", "Fen Bilimleri", True),  # 授業名が担当教科に含まれる
    ("Türkçe", MATH, False),
])
def test_substring_match(matcher, subject, lesson_name, expected):
    teacher = make_teacher(1, subject)
    lesson = make_lesson(1, lesson_name, 2)
    assert matcher.matches(teacher, lesson) is expected


@pytest.mark.parametrize("subject", [None, "", "   "])
def test_teacher_without_subject_never_matches(matcher, subject):
    assert not matcher.matches(make_teacher(1, subject), make_lesson(1, MATH, 2))


def test_eligible_teachers_keep_input_order(matcher):
    teachers = [make_teacher(3, MATH), make_teacher(1, "Türkçe"), make_teacher(2, MATH)]
    
    eligible = matcher.eligible_teachers(teachers, make_lesson(1, MATH, 4))
    
    assert [t.id for t in eligible] == [3, 2]
