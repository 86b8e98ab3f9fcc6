"""
records.py - In-memory store of checked meets and entries.

All meets and their entries live in a RecordStore arena and are addressed by
EntryIndex handles, so later passes (such as age interpolation) can hold
cross-references to many entries without sharing ownership of them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple, Optional

from meet_checker.age import Age, AgeClass
from meet_checker.meet_date import Date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Meet:
    """
    Descriptor for a single competition, read from meet.csv.

    Attributes:
        path (str): Meet directory, used in diagnostics.
        federation (str): Sanctioning federation.
        date (Date): Date of the meet.
        country (str): Country the meet was held in.
        state (str): State or province, possibly empty.
        town (str): Town, possibly empty.
        name (str): Meet name.
    """
    path: str
    federation: str
    date: Date
    country: str
    state: str = ""
    town: str = ""
    name: str = ""


@dataclass
class Entry:
    """
    One lifter's result line in entries.csv.

    The age-related fields (age, birthyear, ageclass) may be updated in place
    by age interpolation; everything else is fixed once checked.
    """
    name: str
    username: str
    sex: str = ""
    equipment: str = ""
    division: str = ""
    weightclass: str = ""
    place: str = ""
    country: str = ""
    birthdate: Optional[Date] = None
    birthyear: Optional[int] = None
    age: Age = Age.UNKNOWN
    ageclass: AgeClass = AgeClass.NONE
    division_age_min: Age = Age.UNKNOWN
    division_age_max: Age = Age.UNKNOWN


@dataclass
class SingleMeetData:
    """Checked output for one meet directory."""
    meet: Meet
    entries: List[Entry] = field(default_factory=list)


class EntryIndex(NamedTuple):
    """Handle to an Entry: position of its meet and its position within it."""
    meet: int
    entry: int


# Username -> handles of that lifter's entries, in storage order.
LifterMap = Dict[str, List[EntryIndex]]


class RecordStore:
    """
    Arena holding every checked meet and entry.

    Meets are ordered by path, so the contents do not depend on the order in
    which meet directories finished checking.
    """

    def __init__(self, single_meets: Iterable[SingleMeetData] = ()) -> None:
        self.meets: List[SingleMeetData] = sorted(single_meets, key=lambda m: m.meet.path)

    def get_meet(self, index: EntryIndex) -> Meet:
        return self.meets[index.meet].meet

    def get_entry(self, index: EntryIndex) -> Entry:
        return self.meets[index.meet].entries[index.entry]

    def entry_count(self) -> int:
        return sum(len(m.entries) for m in self.meets)

    def indices(self) -> Iterable[EntryIndex]:
        """Yield every EntryIndex in storage order."""
        for meet_num, single_meet in enumerate(self.meets):
            for entry_num in range(len(single_meet.entries)):
                yield EntryIndex(meet_num, entry_num)

    def create_lifter_map(self) -> LifterMap:
        """
        Build the identity index from username to entry handles.

        Entries without a username cannot be cross-referenced and are left out.
        """
        lifter_map: LifterMap = {}
        for index in self.indices():
            username = self.get_entry(index).username
            if not username:
                continue
            lifter_map.setdefault(username, []).append(index)
        logger.debug(f"Built lifter map with {len(lifter_map)} lifters from {self.entry_count()} entries")
        return lifter_map
