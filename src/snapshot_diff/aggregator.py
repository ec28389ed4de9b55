"""Summary counters folded from a stream of diff events."""

from collections import defaultdict
from typing import Dict, Iterable

from .models import Added, DiffEvent, Modified, Removed, SummaryStats


class DiffAggregator:
    """
    Accumulates added, removed and per-field modification counts.

    Incompatible events are accepted but not counted.
    """

    def __init__(self):
        self.added_count = 0
        self.removed_count = 0
        self.modified_field_counts: Dict[str, int] = defaultdict(int)

    def add(self, event: DiffEvent) -> None:
        if isinstance(event, Added):
            self.added_count += 1
        elif isinstance(event, Removed):
            self.removed_count += 1
        elif isinstance(event, Modified):
            for change in event.field_changes:
                self.modified_field_counts[change.label] += 1

    def consume(self, events: Iterable[DiffEvent]) -> SummaryStats:
        """Fold a whole event sequence and return the final summary."""
        for event in events:
            self.add(event)
        return self.summary()

    def summary(self) -> SummaryStats:
        return SummaryStats(
            added_count=self.added_count,
            removed_count=self.removed_count,
            modified_field_counts=dict(self.modified_field_counts),
        )
