#!/usr/bin/env python3
"""
時間割エンジン メインエントリーポイント
"""
import sys

from timetable_engine.presentation.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
