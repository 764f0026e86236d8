"""ドメインポリシー"""
from .grade_band_policy import GradeBandPolicy

__all__ = ['GradeBandPolicy']
