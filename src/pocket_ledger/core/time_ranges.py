from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

DEFAULT_TZ = ZoneInfo("Asia/Jerusalem")

YEARS_BACK = 10
YEARS_FORWARD = 5


@dataclass(frozen=True)
class MonthSelector:
    year: int
    month: int  # 1-based

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError("month must be in 1..12")
        if self.year < 1:
            raise ValueError("year must be >= 1")

    def contains(self, d: date) -> bool:
        return d.year == self.year and d.month == self.month


def today(tz: ZoneInfo | None = None) -> date:
    return datetime.now(tz=tz or DEFAULT_TZ).date()


def year_range(current_year: int) -> list[int]:
    """
    Years offered by the year selector: 10 back, 5 forward.
    Example: 2024 -> [2014 .. 2029]
    """
    return list(range(current_year - YEARS_BACK, current_year + YEARS_FORWARD + 1))
