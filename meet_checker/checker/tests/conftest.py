"""
Pytest fixtures for checker tests.

Builds small meet data trees under tmp_path:

    meet-data/<federation>/CONFIG.yaml
    meet-data/<federation>/<meet>/{meet.csv,entries.csv}
"""
from __future__ import annotations

import pytest
from pathlib import Path
from typing import Optional

from meet_checker.checker import CheckerSettings

DEFAULT_CONFIG = """\
options:
  combine_raw_and_wraps: true
divisions:
  - name: Open
    min: 0
    max: 999
  - name: Juniors
    min: 0
    max: 17.5
  - name: M30-34
    min: 30
    max: 34
    sex: M
"""

DEFAULT_ENTRIES = """\
Name,Sex,Equipment,Division,Age,Place
John Doe,M,Raw,Open,30,1
Jane Doe,F,Raw,Open,,1
"""


@pytest.fixture
def meet_data_root(tmp_path) -> Path:
    """Empty data root."""
    root = tmp_path / "meet-data"
    root.mkdir()
    return root


@pytest.fixture
def write_config(meet_data_root):
    """Write a federation's CONFIG.yaml and return its path."""
    def _write_config(federation: str = "testfed", text: str = DEFAULT_CONFIG) -> Path:
        fed_dir = meet_data_root / federation
        fed_dir.mkdir(parents=True, exist_ok=True)
        config_path = fed_dir / "CONFIG.yaml"
        config_path.write_text(text, encoding="utf-8")
        return config_path

    return _write_config


@pytest.fixture
def write_meet(meet_data_root):
    """
    Write a meet directory and return its path.

    meet_csv and entries default to a valid meet; pass None to leave a file out.
    """
    def _write_meet(name: str = "1901", federation: str = "testfed",
                    date: str = "2019-01-04", country: str = "USA",
                    meet_csv: Optional[str] = "",
                    entries: Optional[str] = DEFAULT_ENTRIES) -> Path:
        meet_dir = meet_data_root / federation / name
        meet_dir.mkdir(parents=True, exist_ok=True)
        if meet_csv == "":
            meet_csv = (
                "Federation,Date,MeetCountry,MeetState,MeetTown,MeetName\n"
                f"TestFed,{date},{country},CA,Fresno,Test Meet {name}\n"
            )
        if meet_csv is not None:
            (meet_dir / "meet.csv").write_text(meet_csv, encoding="utf-8")
        if entries is not None:
            (meet_dir / "entries.csv").write_text(entries, encoding="utf-8")
        return meet_dir

    return _write_meet


@pytest.fixture
def settings() -> CheckerSettings:
    """Packaged settings with a single worker for deterministic output order."""
    return CheckerSettings.from_dict({"max_workers": 1})
