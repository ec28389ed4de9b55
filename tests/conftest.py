"""
Pytest configuration and shared fixtures.
"""

import io

import pytest
from pathlib import Path

from snapshot_diff import DiffConfig, StreamingCSVReader, TableLoader


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def baseline_psv(fixtures_dir):
    """Path to pipe-separated baseline snapshot."""
    return fixtures_dir / "baseline.psv"


@pytest.fixture
def candidate_psv(fixtures_dir):
    """Path to pipe-separated candidate snapshot."""
    return fixtures_dir / "candidate.psv"


@pytest.fixture
def malformed_psv(fixtures_dir):
    """Path to a snapshot with a broken quoted field on its second row."""
    return fixtures_dir / "malformed.psv"


@pytest.fixture
def load_table():
    """Build a baseline Table from text."""
    def _load(text, config=None):
        config = config or DiffConfig(id_index=0)
        return TableLoader(config).load(io.StringIO(text), source="baseline")
    return _load


@pytest.fixture
def candidate_reader():
    """Build a candidate reader from text."""
    def _reader(text, config=None, reuse_record=True):
        config = config or DiffConfig(id_index=0)
        return StreamingCSVReader(
            io.StringIO(text),
            delimiter=config.delimiter,
            has_header=config.has_header,
            source="candidate",
            reuse_record=reuse_record,
        )
    return _reader
