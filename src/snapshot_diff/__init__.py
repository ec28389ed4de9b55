"""Snapshot Diff - keyed comparison of two delimited table exports."""

from .aggregator import DiffAggregator
from .config import DiffConfig
from .csv_reader import StreamingCSVReader, open_table_file
from .differ import StreamingComparator
from .errors import (
    ConfigError,
    FileOpenError,
    HeaderReadError,
    IdFieldOutOfRangeError,
    ReadError,
    RecordReadError,
    SnapshotDiffError,
)
from .loader import TableLoader
from .models import (
    Added,
    FieldChange,
    Incompatible,
    Modified,
    Removed,
    SummaryStats,
    Table,
)
from .report import ReportFormatter

__all__ = [
    "Added",
    "ConfigError",
    "DiffAggregator",
    "DiffConfig",
    "FieldChange",
    "FileOpenError",
    "HeaderReadError",
    "IdFieldOutOfRangeError",
    "Incompatible",
    "Modified",
    "ReadError",
    "RecordReadError",
    "Removed",
    "ReportFormatter",
    "SnapshotDiffError",
    "StreamingCSVReader",
    "StreamingComparator",
    "SummaryStats",
    "Table",
    "TableLoader",
    "open_table_file",
]
