from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from meet_checker.records import Entry, Meet, SingleMeetData
from meet_checker.report import Report

from .entries import check_entries
from .federation_config import FederationConfig
from .meet import check_meet
from .settings import CheckerSettings


@dataclass
class CheckResult:
    """
    Outcome of checking one meet directory.

    Attributes:
        reports (List[Report]): One report per checked file, in check order.
        meet (Optional[Meet]): The meet, if meet.csv had no errors.
        entries (Optional[List[Entry]]): The entries, if entries.csv had no errors.
    """
    reports: List[Report] = field(default_factory=list)
    meet: Optional[Meet] = None
    entries: Optional[List[Entry]] = None

    def single_meet(self) -> Optional[SingleMeetData]:
        """The meet's data for the record store, or None if either file failed."""
        if self.meet is None or self.entries is None:
            return None
        return SingleMeetData(meet=self.meet, entries=self.entries)


def check(meet_dir: Path, config: Optional[FederationConfig] = None,
          settings: Optional[CheckerSettings] = None) -> CheckResult:
    """
    Check a meet directory's meet.csv and entries.csv.

    Invalid data is reported, never raised. Unreadable files (I/O, encoding or
    CSV syntax errors) raise, and the caller decides how to count them.
    """
    settings = settings or CheckerSettings.default()
    meet_result = check_meet(meet_dir, settings.fuzzy_match_threshold)
    meet_date = meet_result.meet.date if meet_result.meet else None
    entries_result = check_entries(meet_dir, meet_date, config, settings)
    return CheckResult(
        reports=[meet_result.report, entries_result.report],
        meet=meet_result.meet,
        entries=entries_result.entries,
    )
