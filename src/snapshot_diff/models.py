"""
Value types shared by the loader, comparator, aggregator and report.

All types are immutable: a Table is built once by the loader and only read
afterwards, and events carry owned copies of the values they report.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union


Row = Tuple[str, ...]


def column_label(headers: Optional[Mapping[int, str]], index: int) -> str:
    """Name of a column, or a positional placeholder when the file has none."""
    if headers is not None and index in headers:
        return headers[index]
    return f"#{index + 1}"


def build_header_maps(headers: List[str]) -> Tuple[Mapping[str, int], Mapping[int, str]]:
    """
    Build the name -> position and position -> name maps for a header record.

    A repeated header name maps to its last position.
    """
    header_to_index: Dict[str, int] = {}
    index_to_header: Dict[int, str] = {}
    for i, name in enumerate(headers):
        header_to_index[name] = i
        index_to_header[i] = name
    return MappingProxyType(header_to_index), MappingProxyType(index_to_header)


@dataclass(frozen=True)
class Table:
    """
    Baseline file held in memory and indexed by identifier.

    Attributes:
        rows: Records in file order
        id_to_row_index: Identifier -> position in ``rows`` (last occurrence wins)
        header_to_index: Column name -> position, None without a header
        index_to_header: Position -> column name, None without a header
        source: Name of the file the table was read from
    """

    rows: Tuple[Row, ...]
    id_to_row_index: Mapping[str, int]
    header_to_index: Optional[Mapping[str, int]] = None
    index_to_header: Optional[Mapping[int, str]] = None
    source: str = "<stream>"

    def __len__(self) -> int:
        return len(self.rows)

    def lookup(self, record_id: str) -> Optional[int]:
        """Position of the row reachable by ``record_id``, or None."""
        return self.id_to_row_index.get(record_id)


@dataclass(frozen=True)
class FieldChange:
    """One differing column of a modified record."""

    left_header: str
    right_header: str
    left_value: str
    right_value: str

    @property
    def label(self) -> str:
        """Header name, or both names when the files disagree on this column."""
        if self.left_header == self.right_header:
            return self.left_header
        return f"{self.left_header} - {self.right_header}"


@dataclass(frozen=True)
class Added:
    """Candidate record whose identifier is not in the baseline."""

    id: str
    row_number: int


@dataclass(frozen=True)
class Removed:
    """Baseline record whose identifier never appeared in the candidate."""

    id: str
    row_number: int


@dataclass(frozen=True)
class Modified:
    """Matched records of equal width with at least one differing value."""

    left_row_number: int
    right_row_number: int
    id: str
    field_changes: Tuple[FieldChange, ...]


@dataclass(frozen=True)
class Incompatible:
    """Matched records whose widths differ; their values are not compared."""

    left_row_number: int
    right_row_number: int
    id: str
    left_width: int
    right_width: int


DiffEvent = Union[Added, Removed, Modified, Incompatible]


@dataclass(frozen=True)
class SummaryStats:
    """Final counters of a comparison run."""

    added_count: int = 0
    removed_count: int = 0
    modified_field_counts: Mapping[str, int] = field(default_factory=dict)

    def sorted_field_counts(self) -> List[Tuple[str, int]]:
        """Per-label change counts ordered by label."""
        return sorted(self.modified_field_counts.items())
