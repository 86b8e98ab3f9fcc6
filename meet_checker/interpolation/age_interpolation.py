"""
Age interpolation across a lifter's meet history.

For each lifter with several entries, every age-related fact (birth date,
birth year, reported age, division age bounds) narrows one BirthDateRange.
The final range is then used to fill in the Age, BirthYear and AgeClass of
each of that lifter's entries.

A single contradiction discards all inference for that lifter: their entries
are left exactly as checked.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from meet_checker.age import AgeClass
from meet_checker.records import EntryIndex, LifterMap, RecordStore

from .birthdate_range import AgeRange, BirthDateRange, NarrowResult
from .trace import AgeTrace, StreamAgeTrace

logger = logging.getLogger(__name__)

# A single entry carries no cross-meet evidence.
MIN_ENTRIES_FOR_INTERPOLATION = 2


def get_birthdate_range(
    store: RecordStore,
    indices: Sequence[EntryIndex],
    trace: Optional[AgeTrace] = None,
) -> BirthDateRange:
    """
    Determine the narrowest BirthDateRange consistent with all given entries.

    Facts are applied entry by entry in storage order, and within an entry in
    the order: BirthDate, BirthYear, Age, Division.

    Returns:
        BirthDateRange: The narrowed range, or BirthDateRange.default() if
        any fact conflicted.
    """
    birthdate_range = BirthDateRange.default()

    for index in indices:
        meet = store.get_meet(index)
        entry = store.get_entry(index)
        mdate = meet.date

        facts = []
        if entry.birthdate is not None:
            facts.append(("BirthDate", entry.birthdate,
                          lambda r, v=entry.birthdate: r.narrow_by_birthdate(v)))
        if entry.birthyear is not None:
            facts.append(("BirthYear", entry.birthyear,
                          lambda r, v=entry.birthyear: r.narrow_by_birthyear(v)))
        if not entry.age.is_unknown():
            facts.append(("Age", entry.age,
                          lambda r, v=entry.age: r.narrow_by_age(v, mdate)))
        if not entry.division_age_min.is_unknown() or not entry.division_age_max.is_unknown():
            agerange = AgeRange(entry.division_age_min, entry.division_age_max)
            facts.append(("Division", agerange,
                          lambda r, v=agerange: r.narrow_by_division(v.min, v.max, mdate)))

        for fieldname, value, narrow in facts:
            if narrow(birthdate_range) == NarrowResult.CONFLICT:
                if trace:
                    trace.conflict(birthdate_range, mdate, fieldname, value, meet.path)
                return BirthDateRange.default()
            if trace:
                trace.integrated(birthdate_range, fieldname, value, meet.path)

    if trace:
        trace.final_range(birthdate_range)
    return birthdate_range


def infer_from_range(
    store: RecordStore,
    indices: Sequence[EntryIndex],
    birthdate_range: BirthDateRange,
    trace: Optional[AgeTrace] = None,
) -> None:
    """
    Fill in each entry's age fields from an already-validated range.

    Rules per entry:
        - Age is replaced unless it is already Exact.
        - BirthYear is set only if missing and the range spans a single year.
        - AgeClass is recomputed from the new Age unless the entry's AgeClass
          came from an Exact Age.
        - If still no AgeClass, the ages implied by the range's two edges are
          tried as a bracket.
    """
    birthyear = birthdate_range.birthyear()

    for index in indices:
        mdate = store.get_meet(index).date
        entry = store.get_entry(index)

        entry_had_exact_age = entry.age.is_exact()
        age_on_date = birthdate_range.age_on(mdate)

        if not age_on_date.is_unknown() and not entry.age.is_exact():
            if trace:
                trace.inferred("Age", age_on_date, mdate)
            entry.age = age_on_date

        if entry.birthyear is None and birthyear is not None:
            if trace:
                trace.inferred("BirthYear", birthyear, mdate)
            entry.birthyear = birthyear

        # An AgeClass set from an Approximate age may no longer be the best match.
        if entry.ageclass == AgeClass.NONE or not entry_had_exact_age:
            entry.ageclass = AgeClass.from_age(age_on_date)
            if entry.ageclass != AgeClass.NONE and trace:
                trace.inferred("AgeClass (via Age)", entry.ageclass.value, mdate)

        if entry.ageclass == AgeClass.NONE:
            age_min = birthdate_range.max.age_on(mdate)
            age_max = birthdate_range.min.age_on(mdate)
            entry.ageclass = AgeClass.from_range(age_min, age_max)
            if entry.ageclass != AgeClass.NONE and trace:
                trace.inferred("AgeClass (via Range)", entry.ageclass.value, mdate)


def interpolate_age_single_lifter(
    store: RecordStore,
    indices: Sequence[EntryIndex],
    trace: Optional[AgeTrace] = None,
) -> bool:
    """
    Run both passes for one lifter.

    Returns:
        bool: True if a range was found and applied to the entries.
    """
    birthdate_range = get_birthdate_range(store, indices, trace)
    if birthdate_range.is_default():
        return False
    infer_from_range(store, indices, birthdate_range, trace)
    return True


def interpolate_age(store: RecordStore, lifter_map: LifterMap) -> int:
    """
    Interpolate ages for every lifter with at least two entries.

    Returns:
        int: Number of lifters whose entries were updated from a narrowed range.
    """
    interpolated = 0
    for indices in lifter_map.values():
        if len(indices) < MIN_ENTRIES_FOR_INTERPOLATION:
            continue
        if interpolate_age_single_lifter(store, indices):
            interpolated += 1
    logger.info(f"Interpolated ages for {interpolated} of {len(lifter_map)} lifters")
    return interpolated


def interpolate_age_debug_for(
    store: RecordStore,
    lifter_map: LifterMap,
    username: str,
    trace: Optional[AgeTrace] = None,
) -> None:
    """
    Interpolate a single lifter's ages while narrating each step.

    Args:
        store: Record store; the lifter's entries are updated as by interpolate_age.
        lifter_map: Identity index built from the store.
        username: Lifter to debug.
        trace: Narration target; defaults to a StreamAgeTrace on stdout.
    """
    if trace is None:
        trace = StreamAgeTrace()
    indices = lifter_map.get(username)
    if indices is None:
        trace.message(f"Username '{username}' not found")
        return
    interpolate_age_single_lifter(store, indices, trace)
