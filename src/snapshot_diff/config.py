"""
Configuration and constants for Snapshot Diff.

All configurable values are centralized here for easy customization.
Users can create a local config file (.snapshot-diff.json) to override the
command-line defaults.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError


# ============================================================================
# DEFAULT VALUES
# ============================================================================

# Field separator used by the snapshot exports
DEFAULT_DELIMITER: str = "|"

# 1-based column holding the record identifier
DEFAULT_ID_COLUMN: int = 2

# Characters csv.reader cannot use as a field separator
FORBIDDEN_DELIMITERS = ('"', "\r", "\n")

# Local config file name (should be gitignored)
LOCAL_CONFIG_FILENAME: str = ".snapshot-diff.json"


def find_local_config() -> Optional[Path]:
    """
    Search for local config file in current directory and parents.

    Returns:
        Path to config file if found, None otherwise
    """
    current = Path.cwd()

    for directory in [current] + list(current.parents):
        config_path = directory / LOCAL_CONFIG_FILENAME
        if config_path.exists():
            return config_path
        # Stop at home directory
        if directory == Path.home():
            break

    return None


def load_local_config() -> Dict[str, Any]:
    """
    Load configuration from local .snapshot-diff.json file.

    Returns:
        Dictionary of configuration values, empty dict if no config found
    """
    config_path = find_local_config()
    if config_path is None:
        return {}

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return {}
    except (json.JSONDecodeError, IOError) as e:
        logging.warning(f"Error loading {config_path}: {e}")
        return {}


# Load local config once at module import
_LOCAL_CONFIG: Dict[str, Any] = load_local_config()


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a config value, checking local config first."""
    return _LOCAL_CONFIG.get(key, default)


def parse_delimiter(value: str) -> str:
    """Translate the command-line spelling of a separator into the character."""
    if value == "\\t":
        return "\t"
    return value


@dataclass(frozen=True)
class DiffConfig:
    """
    Settings shared by the loader and the comparator.

    Attributes:
        delimiter: Single field separator character
        has_header: Whether the first record of each file names the columns
        id_index: 0-based position of the identifier column
    """

    delimiter: str = DEFAULT_DELIMITER
    has_header: bool = True
    id_index: int = DEFAULT_ID_COLUMN - 1

    def __post_init__(self):
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ConfigError(
                f"Separator must be a single character, got {self.delimiter!r}"
            )
        if self.delimiter in FORBIDDEN_DELIMITERS:
            raise ConfigError(f"Separator {self.delimiter!r} is not allowed")
        if self.id_index < 0:
            raise ConfigError(
                f"Identifier column must be 1 or greater, got {self.id_index + 1}"
            )

    @classmethod
    def from_id_column(
        cls,
        id_column: int = DEFAULT_ID_COLUMN,
        delimiter: str = DEFAULT_DELIMITER,
        has_header: bool = True,
    ) -> "DiffConfig":
        """Create config from the 1-based identifier column used on the command line."""
        return cls(
            delimiter=parse_delimiter(delimiter),
            has_header=has_header,
            id_index=id_column - 1,
        )
