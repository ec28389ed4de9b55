"""
Streaming comparison of a candidate file against the baseline table.

This module provides keyed comparison that:
- Reads the candidate exactly once, one record at a time
- Classifies each record as added, modified or incompatible
- Reports baseline records never seen in the candidate as removed
- Copies every value it keeps, so the reader may reuse its row buffer
"""

import logging
from typing import Iterator, List, Optional, Set

from .config import DiffConfig
from .csv_reader import StreamingCSVReader
from .errors import IdFieldOutOfRangeError
from .models import (
    Added,
    DiffEvent,
    FieldChange,
    Incompatible,
    Modified,
    Removed,
    Table,
    build_header_maps,
    column_label,
)


class StreamingComparator:
    """
    Lazy, single-use sequence of diff events.

    Events for candidate records are produced in candidate order; the
    Removed events follow once the candidate is exhausted, in baseline order.
    Iterating a second time raises RuntimeError because the candidate
    stream cannot be rewound.

    Example:
        >>> comparator = StreamingComparator(table, candidate_reader, config)
        >>> for event in comparator:
        ...     print(event)

    Args:
        table: Indexed baseline
        candidate: Forward-only reader over the candidate file
        config: Identifier column and header flag
    """

    def __init__(self, table: Table, candidate: StreamingCSVReader, config: DiffConfig):
        self.table = table
        self.candidate = candidate
        self.config = config
        self.seen_ids: Set[str] = set()
        self._started = False

    def __iter__(self) -> Iterator[DiffEvent]:
        if self._started:
            raise RuntimeError("Candidate stream has already been consumed")
        self._started = True
        return self._events()

    def _events(self) -> Iterator[DiffEvent]:
        id_index = self.config.id_index
        left_headers = self.table.index_to_header
        right_headers = None
        headers = self.candidate.read_headers()
        if headers is not None:
            _, right_headers = build_header_maps(headers)

        position = 0
        for row in self.candidate.iterate_rows():
            if len(row) <= id_index:
                raise IdFieldOutOfRangeError(
                    position + 1,
                    len(row),
                    id_index,
                    source=self.candidate.source,
                    line=self.candidate.line_num,
                )
            record_id = row[id_index]
            self.seen_ids.add(record_id)

            event = self._classify(record_id, row, position, left_headers, right_headers)
            if event is not None:
                yield event
            position += 1

        logging.debug(f"    Compared {position} candidate rows from {self.candidate.source}")

        id_to_row_index = self.table.id_to_row_index
        for idx, left_row in enumerate(self.table.rows):
            record_id = left_row[id_index]
            if id_to_row_index[record_id] != idx:
                logging.debug(
                    f"    Baseline row #{idx + 1} shadowed by a later row with ID = {record_id!r}"
                )
            elif record_id not in self.seen_ids:
                yield Removed(record_id, idx + 1)

    def _classify(self, record_id, row, position, left_headers, right_headers) -> Optional[DiffEvent]:
        idx = self.table.lookup(record_id)
        if idx is None:
            return Added(record_id, position + 1)

        left_row = self.table.rows[idx]
        if len(left_row) != len(row):
            return Incompatible(idx + 1, position + 1, record_id, len(left_row), len(row))

        changes: List[FieldChange] = []
        for i, value in enumerate(row):
            if left_row[i] != value:
                changes.append(FieldChange(
                    left_header=column_label(left_headers, i),
                    right_header=column_label(right_headers, i),
                    left_value=left_row[i],
                    right_value=value,
                ))
        if not changes:
            return None
        return Modified(idx + 1, position + 1, record_id, tuple(changes))
