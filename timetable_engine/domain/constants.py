"""時間割エンジン全体で共有する定数"""

# 昼休みに当たる校時（この校時には授業を配置しない）
LUNCH_PERIOD = 5

# 学級担当のガイダンス教員が受け持つ予約授業名
GUIDANCE_LESSON_NAME = "Rehberlik ve Yönlendirme"

# 曜日番号（1=月曜 … 7=日曜）
MIN_DAY = 1
MAX_DAY = 7
WEEKDAYS = [1, 2, 3, 4, 5]

DAY_NAMES = {
    1: "月曜",
    2: "火曜",
    3: "水曜",
    4: "木曜",
    5: "金曜",
    6: "土曜",
    7: "日曜",
}

# 学年帯ごとの1日の校時数
MIDDLE_SCHOOL_GRADES = range(5, 9)
MIDDLE_SCHOOL_DAILY_PERIODS = 7
DEFAULT_DAILY_PERIODS = 8

# 初回・最終校時を避ける授業の既定値
DEFAULT_AVOID_FIRST_LAST_PERIOD = ["Beden Eğitimi ve Spor"]
DEFAULT_MAX_CONSECUTIVE_LESSONS = 2


def get_day_name(day_of_week: int) -> str:
    """曜日番号から表示名を取得"""
    return DAY_NAMES.get(day_of_week, "不明")
