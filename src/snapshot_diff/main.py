"""
Main execution logic for Snapshot Diff.

Wires the loader, comparator, aggregator and report together, and is the
only place where failures become log messages and exit codes.
"""

import logging
import sys
from datetime import datetime
from typing import Optional, TextIO

from .aggregator import DiffAggregator
from .config import DiffConfig
from .csv_reader import StreamingCSVReader, open_table_file
from .differ import StreamingComparator
from .errors import SnapshotDiffError
from .loader import TableLoader
from .models import SummaryStats
from .report import ReportFormatter


def run_local_diff(
    config: DiffConfig,
    baseline_file: str,
    candidate_file: str,
    out: Optional[TextIO] = None,
) -> SummaryStats:
    """
    Compare two local table files and write the report.

    Events are written as they are produced; the summary is written only if
    the whole candidate file was read.

    Args:
        config: Separator, header flag and identifier column
        baseline_file: Path to the reference snapshot
        candidate_file: Path to the newer snapshot
        out: Report stream (default: standard output)

    Returns:
        The final summary counters

    Raises:
        SnapshotDiffError: On any open, load or read failure
    """
    logging.debug(f"Comparing local files:\n  Baseline: {baseline_file}\n  Candidate: {candidate_file}")

    with open_table_file(baseline_file) as f:
        table = TableLoader(config).load(f, source=baseline_file)

    formatter = ReportFormatter(out)
    aggregator = DiffAggregator()

    with open_table_file(candidate_file) as f:
        candidate = StreamingCSVReader(
            f,
            delimiter=config.delimiter,
            has_header=config.has_header,
            source=candidate_file,
            reuse_record=True,
        )
        for event in StreamingComparator(table, candidate, config):
            formatter.write_event(event)
            aggregator.add(event)

    stats = aggregator.summary()
    formatter.write_summary(stats)
    return stats


def run_main(args) -> int:
    """
    Run a comparison from parsed command line arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Process exit code
    """
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s %(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    run_start_time = datetime.now()
    try:
        config = DiffConfig.from_id_column(
            args.id_column, delimiter=args.sep, has_header=args.has_header
        )
        logging.debug(
            f"Using separator {config.delimiter!r}, identifier column {config.id_index + 1}"
        )
        run_local_diff(config, args.baseline, args.candidate)
    except SnapshotDiffError as e:
        sys.stdout.flush()
        logging.error(str(e))
        return 1

    duration = (datetime.now() - run_start_time).total_seconds()
    logging.debug(f"Runtime: {duration:.2f}s")
    return 0
