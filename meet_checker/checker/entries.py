"""
entries.py - Checks for the entries.csv of a meet directory.

Each row is one lifter's result at the meet. Rows are checked field by field
and then against each other (placings); problems are reported with the CSV
line number. A file with any error yields no entries.
"""
from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from meet_checker.age import Age, AgeClass
from meet_checker.meet_date import Date
from meet_checker.records import Entry
from meet_checker.report import Report

from .csv_file import read_csv
from .federation_config import FederationConfig
from .settings import CheckerSettings
from .suggest import country_names, did_you_mean, is_known_country

logger = logging.getLogger(__name__)

ENTRIES_FILENAME = "entries.csv"

REQUIRED_COLUMNS = ("Name", "Sex", "Equipment", "Place")
WEIGHT_COLUMNS = (
    "BodyweightKg", "WeightClassKg",
    "Squat1Kg", "Squat2Kg", "Squat3Kg", "Squat4Kg", "Best3SquatKg",
    "Bench1Kg", "Bench2Kg", "Bench3Kg", "Bench4Kg", "Best3BenchKg",
    "Deadlift1Kg", "Deadlift2Kg", "Deadlift3Kg", "Deadlift4Kg", "Best3DeadliftKg",
    "TotalKg",
)
KNOWN_COLUMNS = REQUIRED_COLUMNS + WEIGHT_COLUMNS + (
    "Division", "Event", "Age", "BirthYear", "BirthDate", "Country", "State", "Team",
)

KNOWN_SEXES = ("M", "F", "Mx")
KNOWN_EQUIPMENT = ("Raw", "Wraps", "Single-ply", "Multi-ply", "Unlimited", "Straps")
NON_NUMERIC_PLACES = ("G", "DQ", "DD", "NS")


@dataclass
class EntriesCheckResult:
    report: Report
    entries: Optional[List[Entry]] = None


def make_username(name: str) -> str:
    """
    Derive a lifter's username from their name.

    Accents are folded to ASCII, then everything except letters and digits is
    dropped and the result lower-cased: "José Núñez" becomes "josenunez".
    """
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return "".join(c for c in folded.lower() if c.isalnum())


def _division_ageclass(min_age: Age, max_age: Age) -> AgeClass:
    # An approximate upper bound admits one more year.
    if max_age.is_approximate():
        max_age = Age.exact(max_age.years + 1)
    return AgeClass.from_range(min_age, max_age)


class _EntriesChecker:
    """Checks the rows of one entries.csv against its meet and configuration."""

    def __init__(self, report: Report, header: List[str], meet_date: Optional[Date],
                 config: Optional[FederationConfig], settings: CheckerSettings) -> None:
        self.report = report
        self.header = header
        self.meet_date = meet_date
        self.config = config
        self.settings = settings
        self.places: Dict[Tuple[str, str, str, str], Set[int]] = {}

    def check_header(self) -> bool:
        ok = True
        seen: Set[str] = set()
        for column in self.header:
            if column in seen:
                self.report.error(f"Duplicate column '{column}'")
                ok = False
            seen.add(column)
            if column not in KNOWN_COLUMNS:
                hint = did_you_mean(column, KNOWN_COLUMNS, self.settings.fuzzy_match_threshold)
                self.report.error(f"Unknown column '{column}'{hint}")
                ok = False
        for column in REQUIRED_COLUMNS:
            if column not in seen:
                self.report.error(f"Missing required column '{column}'")
                ok = False
        return ok

    def check_row(self, line: int, row: Dict[str, str]) -> Entry:
        def err(text: str) -> None:
            self.report.error(f"Line {line}: {text}")

        def warn(text: str) -> None:
            self.report.warning(f"Line {line}: {text}")

        name = row.get("Name", "")
        if not name:
            err("Name is empty")
        elif name != " ".join(name.split()):
            err(f"Name '{name}' has extra whitespace")

        sex = row.get("Sex", "")
        if sex not in KNOWN_SEXES:
            err(f"Invalid Sex '{sex}'")

        equipment = row.get("Equipment", "")
        if equipment not in KNOWN_EQUIPMENT:
            err(f"Invalid Equipment '{equipment}'{did_you_mean(equipment, KNOWN_EQUIPMENT)}")

        for column in WEIGHT_COLUMNS:
            value = row.get(column, "")
            if value and column != "WeightClassKg":
                try:
                    float(value)
                except ValueError:
                    err(f"Invalid {column} '{value}'")

        place = row.get("Place", "")
        place_num: Optional[int] = None
        if place not in NON_NUMERIC_PLACES:
            if place.isdigit() and int(place) > 0:
                place_num = int(place)
            else:
                err(f"Invalid Place '{place}'")

        age = self._check_age(row.get("Age", ""), err, warn)
        birthyear = self._check_birthyear(row.get("BirthYear", ""), err)
        birthdate = self._check_birthdate(row.get("BirthDate", ""), err)
        self._check_consistency(age, birthyear, birthdate, err)

        division = row.get("Division", "")
        division_min, division_max = self._check_division(division, sex, age, err)

        country = row.get("Country", "")
        if country and not is_known_country(country):
            hint = did_you_mean(country, country_names(), self.settings.fuzzy_match_threshold)
            err(f"Unknown Country '{country}'{hint}")

        weightclass = row.get("WeightClassKg", "")
        if place_num is not None:
            group = self.config.equipment_group(equipment) if self.config else equipment
            key = (division, sex, group, weightclass)
            taken = self.places.setdefault(key, set())
            if place_num in taken:
                warn(f"Duplicate Place {place_num} in {division or 'no division'}/{sex}/{group}/{weightclass or 'no class'}")
            taken.add(place_num)

        ageclass = AgeClass.from_age(age)
        if ageclass == AgeClass.NONE:
            ageclass = _division_ageclass(division_min, division_max)

        return Entry(
            name=name,
            username=make_username(name),
            sex=sex,
            equipment=equipment,
            division=division,
            weightclass=weightclass,
            place=place,
            country=country,
            birthdate=birthdate,
            birthyear=birthyear,
            age=age,
            ageclass=ageclass,
            division_age_min=division_min,
            division_age_max=division_max,
        )

    def _check_age(self, value: str, err, warn) -> Age:
        try:
            age = Age.parse(value)
        except ValueError as e:
            err(str(e))
            return Age.UNKNOWN
        if not age.is_unknown():
            if age.years < self.settings.min_plausible_age or age.years > self.settings.max_plausible_age:
                warn(f"Implausible Age {age}")
        return age

    def _check_birthyear(self, value: str, err) -> Optional[int]:
        if not value:
            return None
        if not value.isdigit():
            err(f"Invalid BirthYear '{value}'")
            return None
        birthyear = int(value)
        latest = self.meet_date.year if self.meet_date else None
        if birthyear < self.settings.min_birthyear or (latest is not None and birthyear > latest):
            err(f"BirthYear {birthyear} is out of range")
            return None
        return birthyear

    def _check_birthdate(self, value: str, err) -> Optional[Date]:
        if not value:
            return None
        try:
            birthdate = Date.parse(value)
        except ValueError as e:
            err(str(e))
            return None
        if not birthdate.exists():
            err(f"BirthDate '{birthdate}' does not exist")
            return None
        if self.meet_date is not None and birthdate >= self.meet_date:
            err(f"BirthDate {birthdate} is not before the meet date {self.meet_date}")
            return None
        return birthdate

    def _check_consistency(self, age: Age, birthyear: Optional[int], birthdate: Optional[Date], err) -> None:
        if birthdate is None:
            return
        if birthyear is not None and birthyear != birthdate.year:
            err(f"BirthYear {birthyear} does not match BirthDate {birthdate}")
        if self.meet_date is None or age.is_unknown():
            return
        expected = birthdate.age_on(self.meet_date)
        if age.is_exact() and age != expected:
            err(f"Age {age} does not match BirthDate {birthdate} (expected {expected})")
        elif age.is_approximate() and expected.years not in (age.years, age.years + 1):
            err(f"Age {age} does not match BirthDate {birthdate} (expected {expected})")

    def _check_division(self, division: str, sex: str, age: Age, err) -> Tuple[Age, Age]:
        if not division or self.config is None or not self.config.divisions:
            return Age.UNKNOWN, Age.UNKNOWN
        declared = self.config.get_division(division)
        if declared is None:
            hint = did_you_mean(division, self.config.divisions, self.settings.fuzzy_match_threshold)
            err(f"Unknown Division '{division}'{hint}")
            return Age.UNKNOWN, Age.UNKNOWN
        if declared.sex and sex and declared.sex != sex:
            err(f"Division '{division}' is restricted to Sex {declared.sex}")

        if age.is_exact():
            min_age, max_age = declared.min_age, declared.max_age
            if not min_age.is_unknown() and age.years < min_age.years:
                err(f"Age {age} is below the minimum for Division '{division}'")
            if not max_age.is_unknown():
                limit = max_age.years + 1 if max_age.is_approximate() else max_age.years
                if age.years > limit:
                    err(f"Age {age} is above the maximum for Division '{division}'")
        return declared.min_age, declared.max_age


def check_entries(meet_dir: Path, meet_date: Optional[Date] = None,
                  config: Optional[FederationConfig] = None,
                  settings: Optional[CheckerSettings] = None) -> EntriesCheckResult:
    """
    Check the entries.csv of a meet directory.

    Args:
        meet_dir: Meet directory.
        meet_date: Date of the meet, if meet.csv was valid; enables date checks.
        config: Federation configuration, if any.
        settings: Checker settings; packaged defaults if omitted.

    Returns:
        EntriesCheckResult: The report, and the entries if the report has no errors.
    """
    settings = settings or CheckerSettings.default()
    entries_path = Path(meet_dir) / ENTRIES_FILENAME
    report = Report(entries_path)

    if not entries_path.exists():
        report.error(f"Missing {ENTRIES_FILENAME}")
        return EntriesCheckResult(report=report)

    header, rows = read_csv(entries_path)
    checker = _EntriesChecker(report, header, meet_date, config, settings)
    if not checker.check_header():
        return EntriesCheckResult(report=report)
    if not rows:
        report.error("No entries")
        return EntriesCheckResult(report=report)

    entries: List[Entry] = []
    for line, cells in enumerate(rows, start=2):
        if len(cells) != len(header):
            report.error(f"Line {line}: has {len(cells)} fields, expected {len(header)}")
            continue
        row = {column: cell.strip() for column, cell in zip(header, cells)}
        entries.append(checker.check_row(line, row))

    if report.has_errors():
        return EntriesCheckResult(report=report)
    logger.debug(f"Checked {len(entries)} entries in {entries_path}")
    return EntriesCheckResult(report=report, entries=entries)
