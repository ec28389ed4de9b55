"""
Human-readable rendering of diff events and the run summary.

Identifiers, headers and values are written as JSON string literals so that
whitespace and separators inside them stay visible. Control characters use
JSON escapes such as `\\u0001`, so this is an approximation of printf-style
`%q` quoting rather than an exact match.
"""

import json
import sys
from typing import Optional, TextIO

from .models import Added, DiffEvent, Incompatible, Modified, Removed, SummaryStats


SEPARATOR = "-" * 59


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


class ReportFormatter:
    """
    Writes one report line (or block) per event, then the summary.

    Args:
        out: Text stream to write to (default: standard output)
    """

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out if out is not None else sys.stdout

    def _write(self, line: str) -> None:
        self.out.write(line + "\n")

    def write_event(self, event: DiffEvent) -> None:
        if isinstance(event, Added):
            self._write(f"Added record #{event.row_number} with ID = {_quote(event.id)}")
        elif isinstance(event, Removed):
            self._write(f"Removed record #{event.row_number} with ID = {_quote(event.id)}")
        elif isinstance(event, Incompatible):
            self._write(
                f"Incompatible record #{event.left_row_number} - #{event.right_row_number} "
                f"with ID = {_quote(event.id)} ({event.left_width} - {event.right_width})"
            )
        elif isinstance(event, Modified):
            self._write(
                f"Changed records #{event.left_row_number} - #{event.right_row_number} "
                f"with ID = {_quote(event.id)}:"
            )
            for change in event.field_changes:
                if change.left_header == change.right_header:
                    self._write(
                        f"    {_quote(change.left_header)}: "
                        f"{_quote(change.left_value)} - {_quote(change.right_value)}"
                    )
                else:
                    self._write(
                        f"    {_quote(change.left_header)}: {_quote(change.left_value)} - "
                        f"{_quote(change.right_header)}: {_quote(change.right_value)}"
                    )
        else:
            raise TypeError(f"Unknown diff event: {event!r}")

    def write_summary(self, stats: SummaryStats) -> None:
        self._write(SEPARATOR)
        self._write(f"Added {stats.added_count} records")
        self._write(f"Removed {stats.removed_count} records")
        self._write("Changed fields:")
        for label, count in stats.sorted_field_counts():
            self._write(f"    {_quote(label)}: {count}")
        self.out.flush()
