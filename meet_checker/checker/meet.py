from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from meet_checker.meet_date import Date
from meet_checker.records import Meet
from meet_checker.report import Report

from .csv_file import read_csv
from .suggest import country_names, did_you_mean, is_known_country

logger = logging.getLogger(__name__)

MEET_FILENAME = "meet.csv"
MEET_HEADER = ["Federation", "Date", "MeetCountry", "MeetState", "MeetTown", "MeetName"]


@dataclass
class MeetCheckResult:
    report: Report
    meet: Optional[Meet] = None


def check_meet(meet_dir: Path, fuzzy_threshold: int = 80) -> MeetCheckResult:
    """
    Check the meet.csv of a meet directory.

    The file must have exactly the MEET_HEADER columns and a single data row.

    Returns:
        MeetCheckResult: The report, and the Meet if the report has no errors.
    """
    meet_dir = Path(meet_dir)
    meet_path = meet_dir / MEET_FILENAME
    report = Report(meet_path)

    if not meet_path.exists():
        report.error(f"Missing {MEET_FILENAME}")
        return MeetCheckResult(report=report)

    header, rows = read_csv(meet_path)
    if header != MEET_HEADER:
        report.error(f"Header must be '{','.join(MEET_HEADER)}', got '{','.join(header)}'")
        return MeetCheckResult(report=report)
    if len(rows) != 1:
        report.error(f"Expected exactly one row of meet data, found {len(rows)}")
        return MeetCheckResult(report=report)

    row = rows[0]
    if len(row) != len(MEET_HEADER):
        report.error(f"Row has {len(row)} fields, expected {len(MEET_HEADER)}")
        return MeetCheckResult(report=report)
    federation, date_str, country, state, town, name = (cell.strip() for cell in row)

    if not federation:
        report.error("Federation is empty")
    elif federation.lower() != meet_dir.parent.name.lower():
        report.warning(f"Federation '{federation}' does not match folder '{meet_dir.parent.name}'")

    date: Optional[Date] = None
    try:
        date = Date.parse(date_str)
    except ValueError as e:
        report.error(str(e))
    if date is not None and not date.exists():
        report.error(f"Date '{date}' does not exist")

    if not country:
        report.error("MeetCountry is empty")
    elif not is_known_country(country):
        report.error(f"Unknown MeetCountry '{country}'{did_you_mean(country, country_names(), fuzzy_threshold)}")

    if not name:
        report.error("MeetName is empty")

    if report.has_errors():
        return MeetCheckResult(report=report)

    meet = Meet(
        path=str(meet_dir),
        federation=federation,
        date=date,
        country=country,
        state=state,
        town=town,
        name=name,
    )
    return MeetCheckResult(report=report, meet=meet)
