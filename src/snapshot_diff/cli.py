"""
Command-line interface for Snapshot Diff.

Provides argument parsing and CLI entry point.
"""

import argparse
from typing import List, Optional

from .config import DEFAULT_DELIMITER, DEFAULT_ID_COLUMN, get_config_value


class CustomHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter for prettier help output."""

    def __init__(self, prog, indent_increment=2, max_help_position=40, width=100):
        super().__init__(prog, indent_increment, max_help_position, width)

    def _format_action_invocation(self, action):
        if not action.option_strings:
            return super()._format_action_invocation(action)
        return ', '.join(action.option_strings)


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    description = """
  Compare two snapshot exports of a table, keyed by an identifier column.

  The baseline file is loaded into memory and the candidate file is streamed
  against it. Every added, removed, incompatible or changed record is printed
  as it is found, followed by a summary of per-field change counts.
"""

    epilog = """
┌─────────────────────────────────────────────────────────────────────────────┐
│  EXAMPLES                                                                   │
└─────────────────────────────────────────────────────────────────────────────┘

  Compare two pipe-separated exports keyed by the second column:
  ───────────────────────────────────────────────────────────────
    %(prog)s old.psv new.psv

  Comma-separated files keyed by the first column:
  ─────────────────────────────────────────────────
    %(prog)s -sep , -id 1 before.csv after.csv

  Tab-separated files without a header row:
  ──────────────────────────────────────────
    %(prog)s -sep '\\t' --no-header before.tsv after.tsv

┌─────────────────────────────────────────────────────────────────────────────┐
│  NOTES                                                                      │
└─────────────────────────────────────────────────────────────────────────────┘

  • Records are matched by identifier only; row order does not matter
  • If an identifier repeats in the baseline, only its last row is compared
  • Records of different width are reported as incompatible, not compared
  • Defaults for -sep and -id can be set in a local .snapshot-diff.json
"""

    parser = argparse.ArgumentParser(
        prog='snapshot-diff',
        usage='%(prog)s [flags] BASELINE CANDIDATE',
        description=description,
        epilog=epilog,
        formatter_class=CustomHelpFormatter,
    )

    default_delimiter = get_config_value('delimiter', DEFAULT_DELIMITER)
    default_id_column = get_config_value('id_column', DEFAULT_ID_COLUMN)

    core_group = parser.add_argument_group(
        '⚙️  Core Options',
        'How records are split and matched'
    )
    core_group.add_argument(
        '-sep',
        type=str,
        default=default_delimiter,
        metavar='CHAR',
        dest='sep',
        help=f'Field separator character.\n'
             f'Use \\t for a tab.\n'
             f'(default: {default_delimiter})'
    )
    core_group.add_argument(
        '-id',
        type=int,
        default=default_id_column,
        metavar='NUM',
        dest='id_column',
        help=f'1-based column number of the record identifier.\n'
             f'(default: {default_id_column})'
    )
    core_group.add_argument(
        '--no-header',
        action='store_false',
        dest='has_header',
        help='Files have no header row; changed fields\n'
             'are labelled by column number.'
    )

    input_group = parser.add_argument_group(
        '📥 Input Files',
        'The two snapshots to compare'
    )
    input_group.add_argument(
        'baseline',
        metavar='BASELINE',
        help='Reference snapshot, loaded into memory.'
    )
    input_group.add_argument(
        'candidate',
        metavar='CANDIDATE',
        help='Newer snapshot, streamed row by row.'
    )

    debug_group = parser.add_argument_group(
        '🔍 Debugging',
        'Options for troubleshooting and verbose output'
    )
    debug_group.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose/debug output.'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    from .main import run_main

    parser = create_parser()
    args = parser.parse_args(argv)
    return run_main(args)


if __name__ == "__main__":
    raise SystemExit(main())
