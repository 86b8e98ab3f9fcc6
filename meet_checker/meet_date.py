"""
meet_date.py - Compact calendar dates for meet and birth date comparisons.

Provides the Date class, a calendar value packed into a single ordered integer
key (year * 10000 + month * 100 + day). Supports:
    - Parsing of ISO "YYYY-MM-DD" strings as found in meet data
    - Extraction of year, month, day and the combined month-day sub-key
    - Age derivation as of another date
    - Successor computation, treating every month as having 31 days

The 31-day simplification is deliberate: interpolation only cares whether one
(possibly nonexistent) date falls before or after another.
"""
from __future__ import annotations

import re
from datetime import date as _date
from functools import total_ordering

from meet_checker.age import Age

_ISO_DATE_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')


@total_ordering
class Date:
    """
    A calendar date stored as one ordered integer.

    Attributes:
        value (int): Packed key, e.g. 20190104 for 2019-01-04.
    """
    __slots__ = ['value']

    def __init__(self, value: int):
        self.value: int = value

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> Date:
        return cls(year * 1_00_00 + month * 1_00 + day)

    @classmethod
    def parse(cls, text: str) -> Date:
        """
        Parse an ISO "YYYY-MM-DD" string.

        Only the shape and the month/day ranges are checked here; use exists()
        for full calendar validity.

        Raises:
            ValueError: If the text is not a well-formed date.
        """
        match = _ISO_DATE_RE.match(text.strip())
        if not match:
            raise ValueError(f"Failed to parse date '{text}'")
        year, month, day = (int(g) for g in match.groups())
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month in date '{text}'")
        if not 1 <= day <= 31:
            raise ValueError(f"Invalid day in date '{text}'")
        return cls.from_ymd(year, month, day)

    @property
    def year(self) -> int:
        return self.value // 1_00_00

    @property
    def month(self) -> int:
        return (self.value // 1_00) % 1_00

    @property
    def day(self) -> int:
        return self.value % 1_00

    @property
    def monthday(self) -> int:
        """Month and day as a single comparable key, e.g. 104 for January 4th."""
        return self.value % 1_00_00

    def exists(self) -> bool:
        """Return True if this is a real calendar date."""
        try:
            _date(self.year, self.month, self.day)
        except ValueError:
            return False
        return True

    def next_day(self) -> Date:
        """
        Return the following day.

        Day 32 of any month becomes day 1 of the next month, and month 13
        becomes January of the next year.
        """
        year, month, day = self.year, self.month, self.day + 1
        if day > 31:
            day = 1
            month += 1
        if month > 12:
            month = 1
            year += 1
        return Date.from_ymd(year, month, day)

    def age_on(self, date: Date) -> Age:
        """
        Age of someone born on this date, as of the given date.

        Returns:
            Age: Exact age in whole years, or Age.UNKNOWN if the date
            precedes this birth date.
        """
        if date < self:
            return Age.UNKNOWN
        years = date.year - self.year
        if date.monthday < self.monthday:
            years -= 1
        return Age.exact(years)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.value < other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Date({self})"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
