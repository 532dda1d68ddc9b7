"""Day summary rendering for the preview window."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

MINUTES_PER_DAY = 24 * 60

_ENTRY_PATTERN = re.compile(
    r"^\s*(?:[-*+]\s+)?"
    r"(?P<start>\d{1,2}:\d{2})\s*-\s*(?P<end>\d{1,2}:\d{2})"
    r"\s+(?P<description>\S.*?)\s*$"
)


class DaySummaryFormatter(Protocol):
    def day_summary(
        self,
        content: str,
        context: str,
        prefix: Optional[str],
        suffix: Optional[str],
    ) -> str: ...


@dataclass(slots=True)
class TimeEntry:
    """A single ``HH:MM-HH:MM description`` line from a tracking file."""

    start_minute: int
    end_minute: int
    description: str

    @property
    def duration_minutes(self) -> int:
        # Entries ending before they start run past midnight.
        return (self.end_minute - self.start_minute) % MINUTES_PER_DAY

    @property
    def project(self) -> str:
        head, sep, _ = self.description.partition(":")
        return head.strip() if sep and head.strip() else self.description


def parse_entries(content: str) -> list[TimeEntry]:
    entries: list[TimeEntry] = []
    for line in content.splitlines():
        match = _ENTRY_PATTERN.match(line)
        if not match:
            continue
        start = _parse_clock(match.group("start"))
        end = _parse_clock(match.group("end"))
        if start is None or end is None:
            continue
        entries.append(TimeEntry(start, end, match.group("description")))
    return entries


def aggregate_by_project(entries: Iterable[TimeEntry]) -> list[tuple[str, int]]:
    totals: defaultdict[str, int] = defaultdict(int)
    for entry in entries:
        totals[entry.project] += entry.duration_minutes
    return sorted(totals.items(), key=lambda item: (-item[1], item[0].casefold()))


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


class MarkdownDaySummary:
    """Render a per-project breakdown of the time entries in a day file."""

    def __init__(self, name_width: int = 24) -> None:
        self.name_width = name_width

    def day_summary(
        self,
        content: str,
        context: str = "",
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
    ) -> str:
        entries = parse_entries(content)
        heading = f"Summary {context}".rstrip()

        lines: list[str] = []
        if prefix:
            lines.append(prefix)
        lines.append(heading)
        lines.append("-" * max(len(heading), 32))

        if not entries:
            lines.append("No time entries recorded.")
        else:
            total = sum(entry.duration_minutes for entry in entries)
            lines.append(f"{'Total':<{self.name_width}} {format_duration(total)}")
            lines.append("")
            for project, minutes in aggregate_by_project(entries):
                label = project[: self.name_width]
                lines.append(f"{label:<{self.name_width}} {format_duration(minutes)}")

        if suffix:
            lines.append(suffix)
        return "\n".join(lines)


def _parse_clock(value: str) -> Optional[int]:
    hours, _, minutes = value.partition(":")
    hour, minute = int(hours), int(minutes)
    if hour > 23 or minute > 59:
        return None
    return hour * 60 + minute
