from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from meet_checker.age import Age
from meet_checker.meet_date import Date

# Unrealistically early and late dates bounding an unconstrained range.
BDR_DEFAULT_MIN = Date.from_ymd(1100, 1, 1)
BDR_DEFAULT_MAX = Date.from_ymd(9997, 6, 15)


class NarrowResult(Enum):
    """Outcome of narrowing a BirthDateRange by one more fact."""
    INTEGRATED = "integrated"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class AgeRange:
    """Division age bounds, kept together for trace output."""
    min: Age
    max: Age

    def __str__(self) -> str:
        return f"{self.min}-{self.max}"


@dataclass
class BirthDateRange:
    """
    Closed interval of possible birth dates for one lifter.

    Narrowing never widens the range. A narrowing call that conflicts with
    the known range leaves both bounds untouched, so the pre-conflict range
    can still be inspected.

    Attributes:
        min (Date): Earliest possible birth date.
        max (Date): Latest possible birth date.
    """
    min: Date = BDR_DEFAULT_MIN
    max: Date = BDR_DEFAULT_MAX

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"BirthDateRange min {self.min} is after max {self.max}")

    @classmethod
    def default(cls) -> BirthDateRange:
        return cls(BDR_DEFAULT_MIN, BDR_DEFAULT_MAX)

    def is_default(self) -> bool:
        return self.min == BDR_DEFAULT_MIN and self.max == BDR_DEFAULT_MAX

    def __str__(self) -> str:
        return f"[{self.min}, {self.max}]"

    def age_on(self, date: Date) -> Age:
        """
        Age implied by this range on a given date.

        Exact if both bounds imply the same age, Approximate at the lower
        value if they are one year apart, otherwise Unknown.
        """
        # The minimum age comes from the maximum birth date and vice versa.
        min_inferred = self.max.age_on(date)
        max_inferred = self.min.age_on(date)

        if min_inferred == max_inferred:
            return min_inferred

        min_years = 0 if min_inferred.is_unknown() else min_inferred.years
        if max_inferred.is_unknown():
            return Age.UNKNOWN
        if min_years + 1 == max_inferred.years:
            return Age.approximate(min_years)
        return Age.UNKNOWN

    def birthyear(self) -> Optional[int]:
        """Birth year if the whole range falls within one calendar year."""
        if self.min.year == self.max.year:
            return self.min.year
        return None

    def intersect(self, other: BirthDateRange) -> NarrowResult:
        """Narrow to the overlap with another range."""
        if self.min > other.max or other.min > self.max:
            return NarrowResult.CONFLICT
        self.min = max(self.min, other.min)
        self.max = min(self.max, other.max)
        return NarrowResult.INTEGRATED

    def narrow_by_birthdate(self, birthdate: Date) -> NarrowResult:
        return self.intersect(BirthDateRange(birthdate, birthdate))

    def narrow_by_birthyear(self, birthyear: int) -> NarrowResult:
        year_range = BirthDateRange(Date.from_ymd(birthyear, 1, 1), Date.from_ymd(birthyear, 12, 31))
        return self.intersect(year_range)

    def narrow_by_age(self, age: Age, on_date: Date) -> NarrowResult:
        """
        Narrow by an age reported on a given date.

        The latest birth date has the birthday falling on on_date. The earliest
        has it falling the day after, one year further back; an approximate age
        allows one more year of slack at that end.
        """
        if age.is_unknown():
            return NarrowResult.INTEGRATED
        year, monthday = on_date.year, on_date.monthday
        slack = 2 if age.is_approximate() else 1

        latest = Date((year - age.years) * 1_00_00 + monthday)
        earliest = Date((year - age.years - slack) * 1_00_00 + monthday).next_day()
        return self.intersect(BirthDateRange(earliest, latest))

    def narrow_by_division(self, min_age: Age, max_age: Age, on_date: Date) -> NarrowResult:
        """
        Narrow by a division's inclusive age bounds on a given date.

        Unknown bounds leave that side unconstrained.
        """
        year, monthday = on_date.year, on_date.monthday

        # The youngest allowed lifter gives the latest birth date.
        # An approximate lower bound takes the younger option.
        if min_age.is_unknown():
            latest = BDR_DEFAULT_MAX
        else:
            latest = Date((year - min_age.years) * 1_00_00 + monthday)

        # The oldest allowed lifter gives the earliest birth date.
        if max_age.is_unknown():
            earliest = BDR_DEFAULT_MIN
        else:
            slack = 2 if max_age.is_approximate() else 1
            earliest = Date((year - max_age.years - slack) * 1_00_00 + monthday).next_day()

        return self.intersect(BirthDateRange(earliest, latest))
