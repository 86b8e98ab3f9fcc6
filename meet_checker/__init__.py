"""meet_checker package: checks competition result data and interpolates lifter ages."""

from meet_checker.age import Age, AgeClass
from meet_checker.meet_date import Date
from meet_checker.records import Entry, EntryIndex, LifterMap, Meet, RecordStore, SingleMeetData
from meet_checker.report import Message, Report, format_summary, write_report

__all__ = [
    "Age",
    "AgeClass",
    "Date",
    "Entry",
    "EntryIndex",
    "LifterMap",
    "Meet",
    "Message",
    "RecordStore",
    "Report",
    "SingleMeetData",
    "format_summary",
    "write_report",
]
