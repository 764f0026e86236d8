"""ドメインサービスの実装"""
from .substring_teacher_matcher import SubstringTeacherMatcher

__all__ = ['SubstringTeacherMatcher']
