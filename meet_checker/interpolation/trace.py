"""
trace.py - Observers for narrating age interpolation of a single lifter.

Interpolation calls an AgeTrace, when one is given, at every narrowing step
and inference decision. Tracing never affects the interpolated values.
"""
from __future__ import annotations

import sys
from typing import Any, Optional, Protocol, TextIO

from meet_checker.meet_date import Date

from .birthdate_range import BirthDateRange


class AgeTrace(Protocol):
    """
    Protocol for observers of age interpolation.

    Methods:
        integrated: A fact narrowed the running range.
        conflict: A fact contradicted the running range; interpolation stops.
        final_range: The range derived from all of a lifter's entries.
        inferred: A field of one entry was filled from the range.
        message: Free-form narration.
    """
    def integrated(self, birthdate_range: BirthDateRange, fieldname: str, value: Any, path: str) -> None:
        pass

    def conflict(self, birthdate_range: BirthDateRange, meet_date: Date, fieldname: str, value: Any, path: str) -> None:
        pass

    def final_range(self, birthdate_range: BirthDateRange) -> None:
        pass

    def inferred(self, fieldname: str, value: Any, date: Date) -> None:
        pass

    def message(self, text: str) -> None:
        pass


class StreamAgeTrace:
    """
    AgeTrace writing one plain-text line per event to a stream.

    Attributes:
        stream (TextIO): Destination, stdout unless given.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")

    def integrated(self, birthdate_range: BirthDateRange, fieldname: str, value: Any, path: str) -> None:
        self._write(f"Narrowed to {birthdate_range} by {fieldname} {value} in {path}")

    def conflict(self, birthdate_range: BirthDateRange, meet_date: Date, fieldname: str, value: Any, path: str) -> None:
        line = f"Conflict with {fieldname} {value} in {path}"
        expected = birthdate_range.age_on(meet_date)
        if not expected.is_unknown():
            line += f" -- expected Age {expected}"
        self._write(line)

    def final_range(self, birthdate_range: BirthDateRange) -> None:
        self._write(f"Final range {birthdate_range}")

    def inferred(self, fieldname: str, value: Any, date: Date) -> None:
        self._write(f"Inferred {fieldname} {value} on {date}")

    def message(self, text: str) -> None:
        self._write(text)
