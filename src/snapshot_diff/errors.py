"""
Exception hierarchy for Snapshot Diff.

Every failure the core can hit is raised as a subclass of SnapshotDiffError;
only the command-line driver turns them into a message and an exit code.
"""

from typing import Optional


class SnapshotDiffError(Exception):
    """Base class for all Snapshot Diff failures."""


class ConfigError(SnapshotDiffError, ValueError):
    """Invalid separator or identifier column."""


class ReadError(SnapshotDiffError):
    """
    A table file could not be read.

    Args:
        message: What went wrong
        source: Name of the file or stream being read
        line: Physical line number the reader had reached, if known
    """

    def __init__(self, message: str, source: str = "<stream>", line: Optional[int] = None):
        self.message = message
        self.source = source
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        location = f"file {self.source!r}"
        if self.line:
            location += f" at line {self.line}"
        return f"{self.message} in {location}"


class FileOpenError(ReadError):
    """The file could not be opened."""

    def __str__(self) -> str:
        return f"Can't open file {self.source!r}: {self.message}"


class HeaderReadError(ReadError):
    """A header row was expected but the file has no records."""


class RecordReadError(ReadError):
    """A record could not be parsed."""


class IdFieldOutOfRangeError(RecordReadError):
    """A record is too short to contain the identifier column."""

    def __init__(
        self,
        row_number: int,
        width: int,
        id_index: int,
        source: str = "<stream>",
        line: Optional[int] = None,
    ):
        self.row_number = row_number
        self.width = width
        self.id_index = id_index
        super().__init__(
            f"Record #{row_number} has {width} field(s), "
            f"identifier column {id_index + 1} is out of range",
            source=source,
            line=line,
        )
