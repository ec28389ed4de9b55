"""
Baseline loader.

Reads the whole baseline file into an immutable Table indexed by the
identifier column. Duplicate identifiers are not rejected: the last row
carrying an identifier is the only one reachable through the index.
"""

import logging
from types import MappingProxyType
from typing import Dict, List

from .config import DiffConfig
from .csv_reader import StreamingCSVReader
from .errors import IdFieldOutOfRangeError
from .models import Row, Table, build_header_maps


class TableLoader:
    """
    Builds the in-memory baseline table.

    Example:
        >>> loader = TableLoader(DiffConfig(delimiter="|", id_index=0))
        >>> table = loader.load(open("baseline.psv", newline=""), "baseline.psv")
        >>> table.rows[table.lookup("42")]

    Args:
        config: Separator, header flag and identifier column
    """

    def __init__(self, config: DiffConfig):
        self.config = config

    def load(self, stream, source: str = "<stream>") -> Table:
        """
        Read every record of ``stream`` and index it by identifier.

        Raises:
            HeaderReadError: If a header is expected but the stream is empty
            RecordReadError: If a record cannot be parsed
            IdFieldOutOfRangeError: If a record has no identifier column
        """
        reader = StreamingCSVReader(
            stream,
            delimiter=self.config.delimiter,
            has_header=self.config.has_header,
            source=source,
        )
        return self.load_reader(reader)

    def load_reader(self, reader: StreamingCSVReader) -> Table:
        """Build a Table from an already constructed reader."""
        id_index = self.config.id_index

        header_to_index = index_to_header = None
        headers = reader.read_headers()
        if headers is not None:
            header_to_index, index_to_header = build_header_maps(headers)

        rows: List[Row] = []
        index: Dict[str, int] = {}
        for i, record in enumerate(reader.iterate_rows()):
            if len(record) <= id_index:
                raise IdFieldOutOfRangeError(
                    i + 1, len(record), id_index, source=reader.source, line=reader.line_num
                )
            rows.append(tuple(record))
            index[record[id_index]] = i

        collapsed = len(rows) - len(index)
        logging.debug(f"    Loaded {len(rows)} rows from {reader.source}")
        if collapsed:
            logging.debug(
                f"    {collapsed} baseline row(s) share an identifier with a later row "
                f"and are unreachable by lookup"
            )

        return Table(
            rows=tuple(rows),
            id_to_row_index=MappingProxyType(index),
            header_to_index=header_to_index,
            index_to_header=index_to_header,
            source=reader.source,
        )
