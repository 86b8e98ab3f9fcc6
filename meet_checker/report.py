"""
report.py - Diagnostics produced while checking a file or directory.

A Report collects error and warning messages for one source path, in the
order they were raised. Errors block a meet from compilation; warnings do not.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, TextIO, Tuple


@dataclass(frozen=True)
class Message:
    severity: Literal["error", "warning"]
    text: str


@dataclass
class Report:
    """
    Ordered list of messages for a single source path.

    Attributes:
        path (Path): File or directory the messages refer to.
        messages (List[Message]): Messages in the order they were raised.
    """
    path: Path
    messages: List[Message] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def error(self, text: str) -> None:
        self.messages.append(Message("error", text))

    def warning(self, text: str) -> None:
        self.messages.append(Message("warning", text))

    def count_messages(self) -> Tuple[int, int]:
        """
        Count messages by severity.

        Returns:
            Tuple[int, int]: (error_count, warning_count)
        """
        errors = sum(1 for m in self.messages if m.severity == "error")
        return errors, len(self.messages) - errors

    def has_messages(self) -> bool:
        return bool(self.messages)

    def has_errors(self) -> bool:
        return any(m.severity == "error" for m in self.messages)


def write_report(stream: TextIO, report: Report) -> None:
    """Write a report to a text stream: the path, then one indented line per message."""
    lines = [str(report.path)]
    for message in report.messages:
        label = "Error" if message.severity == "error" else "Warning"
        lines.append(f" {label}: {message.text}")
    stream.write("\n".join(lines) + "\n")


def format_summary(error_count: int, warning_count: int) -> str:
    """Format the final summary line, e.g. 'Summary: 1 error, 2 warnings'."""
    errors = f"{error_count} error{'' if error_count == 1 else 's'}"
    warnings = f"{warning_count} warning{'' if warning_count == 1 else 's'}"
    return f"Summary: {errors}, {warnings}"
