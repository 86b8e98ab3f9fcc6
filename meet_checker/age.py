"""
age.py - Age values and age classes for meet entries.

Age is a tagged value: an exact whole number of years, an approximate one
(the true age may be one year higher), or unknown. In CSV data an approximate
age is written with a ".5" suffix, so "30.5" means Approximate(30).

AgeClass is the coarser eligibility bracket shown alongside results.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Tuple

AgeKind = Literal["exact", "approximate", "unknown"]

_AGE_RE = re.compile(r'^(\d{1,3})(\.5)?$')


@dataclass(frozen=True)
class Age:
    """
    Age in whole years, tagged by how certain it is.

    Attributes:
        kind (AgeKind): 'exact', 'approximate' or 'unknown'.
        years (Optional[int]): Whole years; None when unknown.
    """
    kind: AgeKind = "unknown"
    years: Optional[int] = None

    @classmethod
    def exact(cls, years: int) -> Age:
        return cls("exact", years)

    @classmethod
    def approximate(cls, years: int) -> Age:
        return cls("approximate", years)

    @classmethod
    def parse(cls, text: str) -> Age:
        """
        Parse the CSV notation: "" is unknown, "30" exact, "30.5" approximate.

        Raises:
            ValueError: If the text is not a valid age.
        """
        text = text.strip()
        if not text:
            return cls.UNKNOWN
        match = _AGE_RE.match(text)
        if not match:
            raise ValueError(f"Invalid age '{text}'")
        years = int(match.group(1))
        if match.group(2):
            return cls.approximate(years)
        return cls.exact(years)

    def is_exact(self) -> bool:
        return self.kind == "exact"

    def is_approximate(self) -> bool:
        return self.kind == "approximate"

    def is_unknown(self) -> bool:
        return self.kind == "unknown"

    def __str__(self) -> str:
        if self.kind == "exact":
            return str(self.years)
        if self.kind == "approximate":
            return f"{self.years}.5"
        return ""


Age.UNKNOWN = Age()


_AGECLASS_BOUNDS = {
    "5-12": (5, 12),
    "13-15": (13, 15),
    "16-17": (16, 17),
    "18-19": (18, 19),
    "20-23": (20, 23),
    "24-34": (24, 34),
    "35-39": (35, 39),
    "40-44": (40, 44),
    "45-49": (45, 49),
    "50-54": (50, 54),
    "55-59": (55, 59),
    "60-64": (60, 64),
    "65-69": (65, 69),
    "70-74": (70, 74),
    "75-79": (75, 79),
    "80-999": (80, 999),
}


class AgeClass(Enum):
    """Eligibility bracket derived from an Age or an Age range."""
    NONE = ""
    CLASS_5_12 = "5-12"
    CLASS_13_15 = "13-15"
    CLASS_16_17 = "16-17"
    CLASS_18_19 = "18-19"
    CLASS_20_23 = "20-23"
    CLASS_24_34 = "24-34"
    CLASS_35_39 = "35-39"
    CLASS_40_44 = "40-44"
    CLASS_45_49 = "45-49"
    CLASS_50_54 = "50-54"
    CLASS_55_59 = "55-59"
    CLASS_60_64 = "60-64"
    CLASS_65_69 = "65-69"
    CLASS_70_74 = "70-74"
    CLASS_75_79 = "75-79"
    CLASS_80_999 = "80-999"

    @property
    def bounds(self) -> Optional[Tuple[int, int]]:
        return _AGECLASS_BOUNDS.get(self.value)

    @classmethod
    def for_years(cls, years: int) -> AgeClass:
        for ageclass in cls:
            bounds = ageclass.bounds
            if bounds and bounds[0] <= years <= bounds[1]:
                return ageclass
        return cls.NONE

    @classmethod
    def from_age(cls, age: Age) -> AgeClass:
        """
        Bracket for an Age.

        An approximate age only maps to a bracket when both of its possible
        values fall inside the same one.
        """
        if age.is_exact():
            return cls.for_years(age.years)
        if age.is_approximate():
            lower = cls.for_years(age.years)
            if lower == cls.for_years(age.years + 1):
                return lower
        return cls.NONE

    @classmethod
    def from_range(cls, min_age: Age, max_age: Age) -> AgeClass:
        """Bracket shared by both ends of an age range, if any."""
        if min_age.is_unknown() or max_age.is_unknown():
            return cls.NONE
        lower = cls.for_years(min_age.years)
        if lower == cls.for_years(max_age.years):
            return lower
        return cls.NONE
