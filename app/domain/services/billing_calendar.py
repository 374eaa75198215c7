"""
Calendar utilities for billing.
Pure date arithmetic used to place charges on valid days and to drive the monthly schedule.
"""

import calendar
from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta
from typing import Tuple
from zoneinfo import ZoneInfo


def last_day_of_month(month: int, year: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def resolve_due_date(billing_day: int, month: int, year: int) -> date:
    """
    Place a billing day inside a specific month.

    Days past the end of the month are clamped to its last day, so a client
    billed on the 31st is charged on Feb 28/29 and on the 30th of short months.
    """
    return date(year, month, min(billing_day, last_day_of_month(month, year)))


def is_last_day_of_month(day: date) -> bool:
    return (day + timedelta(days=1)).day == 1


def next_month(day: date) -> Tuple[int, int]:
    """(month, year) of the month following `day`."""
    if day.month == 12:
        return 1, day.year + 1
    return day.month + 1, day.year


def month_bounds(month: int, year: int) -> Tuple[date, date]:
    """First and last calendar day of a month."""
    return date(year, month, 1), date(year, month, last_day_of_month(month, year))


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


class Clock(ABC):
    """Source of "now" and "today" for the billing rules."""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def today(self) -> date:
        return self.now().date()

    def localize(self, moment: datetime) -> datetime:
        """Naive local time for a possibly timezone-aware moment."""
        return moment.replace(tzinfo=None)


class SystemClock(Clock):
    """
    Wall clock in the business timezone.
    Returns naive local datetimes so day boundaries match the tenants' calendar.
    """

    def __init__(self, timezone: str = "America/Sao_Paulo"):
        self.tz = ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self.tz).replace(tzinfo=None)

    def localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(self.tz).replace(tzinfo=None)
