"""
Pytest fixtures for interpolation tests.
"""
from __future__ import annotations

import pytest

from meet_checker.age import Age, AgeClass
from meet_checker.meet_date import Date
from meet_checker.records import Entry, Meet, RecordStore, SingleMeetData


@pytest.fixture
def make_entry():
    """Create an Entry with only the age-related fields of interest set."""
    def _create_entry(username: str = "johndoe", age: Age = Age.UNKNOWN,
                      birthyear=None, birthdate=None,
                      division_age_min: Age = Age.UNKNOWN, division_age_max: Age = Age.UNKNOWN,
                      ageclass: AgeClass = AgeClass.NONE) -> Entry:
        return Entry(
            name=username,
            username=username,
            sex="M",
            equipment="Raw",
            place="1",
            birthdate=Date.parse(birthdate) if birthdate else None,
            birthyear=birthyear,
            age=age,
            ageclass=ageclass,
            division_age_min=division_age_min,
            division_age_max=division_age_max,
        )

    return _create_entry


@pytest.fixture
def make_store():
    """
    Create a RecordStore from (meet_date, [entries]) pairs.

    Meets are stored in the order given.
    """
    def _create_store(*meets) -> RecordStore:
        single_meets = []
        for num, (meet_date, entries) in enumerate(meets):
            meet = Meet(
                path=f"meet-data/testfed/{num:03d}",
                federation="TestFed",
                date=Date.parse(meet_date),
                country="USA",
                name=f"Test Meet {num}",
            )
            single_meets.append(SingleMeetData(meet=meet, entries=list(entries)))
        return RecordStore(single_meets)

    return _create_store
