"""
Forward-only delimited-file reader.

This module provides a reader that:
- Streams records one at a time from an already open text stream
- Reads and caches an optional header record
- Optionally refills a single row buffer instead of allocating a new list
- Skips blank records
- Reports malformed input as typed read errors with line numbers
"""

import csv
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from .errors import FileOpenError, HeaderReadError, RecordReadError


# Safely set CSV field size limit to handle large fields
_max_int = sys.maxsize
while True:
    try:
        csv.field_size_limit(_max_int)
        break
    except OverflowError:
        _max_int //= 10


def open_table_file(path: str) -> TextIO:
    """
    Open a table file for reading with BOM handling.

    Raises:
        FileOpenError: If the path cannot be opened
    """
    try:
        return open(path, 'r', encoding='utf-8-sig', newline='')
    except OSError as e:
        raise FileOpenError(e.strerror or str(e), source=str(path)) from e


class StreamingCSVReader:
    """
    Forward-only reader over one delimited text stream.

    Each record is available only until the next one is read. With
    ``reuse_record`` enabled the same list object is refilled for every
    record, so callers must copy any value they keep.

    Example:
        >>> reader = StreamingCSVReader(open("data.psv", newline=""), delimiter="|")
        >>> print(reader.read_headers())
        ['code', 'id', 'name']
        >>> for row in reader.iterate_rows():
        ...     print(row[1])

    Args:
        stream: Open text stream (opened with newline='')
        delimiter: Field separator character
        has_header: Whether the first record holds column names
        source: Name used in log and error messages
        reuse_record: Refill one list for every record instead of a fresh one
    """

    def __init__(
        self,
        stream: TextIO,
        delimiter: str = "|",
        has_header: bool = True,
        source: str = "<stream>",
        reuse_record: bool = False,
    ):
        self.delimiter = delimiter
        self.has_header = has_header
        self.source = source
        self.reuse_record = reuse_record

        self._reader = csv.reader(stream, delimiter=delimiter, strict=True)
        self._headers: Optional[List[str]] = None
        self._header_read = False
        self._buffer: List[str] = []

    @property
    def line_num(self) -> int:
        """Physical line number of the last line consumed."""
        return self._reader.line_num

    def _next_record(self) -> Optional[List[str]]:
        """Return the next non-blank record, or None at end of stream."""
        while True:
            try:
                record = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as e:
                raise RecordReadError(
                    f"Malformed record ({e})", source=self.source, line=self.line_num
                ) from e
            except UnicodeDecodeError as e:
                raise RecordReadError(
                    f"Undecodable bytes ({e.reason})", source=self.source, line=self.line_num
                ) from e
            if record:
                return record

    def read_headers(self) -> Optional[List[str]]:
        """
        Read and return column headers.

        Headers are cached after the first read. Returns None when the reader
        was created with ``has_header=False``.

        Raises:
            HeaderReadError: If a header is expected but the stream is empty
        """
        if not self.has_header:
            return None
        if self._header_read:
            return self._headers

        record = self._next_record()
        self._header_read = True
        if record is None:
            raise HeaderReadError("Can't read header", source=self.source)
        self._headers = record
        logging.debug(f"    Headers of {self.source}: {record}")
        return self._headers

    def iterate_rows(self) -> Iterator[List[str]]:
        """
        Iterate through data records one at a time.

        The header, if expected, is consumed first. The stream is read only
        once, so a second call continues where the first one stopped.

        Yields:
            List of field values for each record
        """
        self.read_headers()

        while True:
            record = self._next_record()
            if record is None:
                return
            if self.reuse_record:
                self._buffer[:] = record
                yield self._buffer
            else:
                yield record
