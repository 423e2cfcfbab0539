from typing import List, Optional

# 固定的星期順序；ScheduleBuilder 與 TableRenderer 共用，欄位才會對齊
DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
DAY_LABELS = ["周一", "周二", "周三", "周四", "周五", "周六", "周日"]

CORNER_LABEL = "时间/节次"

PERIOD_TIMES = [
    "8:00-8:45", "8:45-9:30", "9:45-10:30", "10:30-11:15", "11:25-12:10",
    "13:30-14:15", "14:15-15:00", "15:10-15:55", "15:55-16:40",
    "18:00-18:45", "18:45-19:30", "19:30-20:15",
]
SECTIONS_PER_DAY = len(PERIOD_TIMES)


def parse_week_token(token: str) -> Optional[int]:
    """
    " 3" -> 3, "" / "abc" / "0" / "-2" / "1.5" -> None
    """
    token = (token or "").strip()
    if not token:
        return None
    try:
        week = int(token)
    except ValueError:
        return None
    return week if week >= 1 else None


def parse_weeks(text: str) -> List[int]:
    """
    "1,2,5" -> [1, 2, 5]

    Invalid tokens are dropped one by one, the rest of the list is kept.
    Order follows the source text; duplicates are kept.
    """
    if not text:
        return []
    out = []
    for token in str(text).split(","):
        week = parse_week_token(token)
        if week is None:
            continue
        out.append(week)
    return out


def period_label(section_index: int) -> str:
    # 0 -> "第1节\n8:00-8:45"
    return f"第{section_index + 1}节\n{PERIOD_TIMES[section_index]}"


def sheet_title(week: int) -> str:
    return f"第{week}周"
