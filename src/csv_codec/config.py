"""
Configuration and constants for CSV Codec.

All option defaults are centralized here. Users can create a local config
file (.csv-codec.json) to override the command-line defaults; the library
functions themselves never read it.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


# ============================================================================
# FORMAT CONSTANTS
# ============================================================================

QUOTE: str = '"'

# Byte-order mark, stripped on decode and optionally written on encode
BOM: str = "\ufeff"

# Delimiters considered by auto-detection, in tie-break priority order
CANDIDATE_DELIMITERS: tuple = (",", ";", "\t", "|")

# Characters that terminate a line outside quotes
LINE_TERMINATORS: str = "\r\n"

# Extra fields in relaxed mode are keyed as _col<index>
SYNTHETIC_COLUMN_PREFIX: str = "_col"


# ============================================================================
# DEFAULT VALUES
# ============================================================================

DEFAULT_DELIMITER: str = ","
AUTO_DELIMITER: str = "auto"

# Number of leading logical lines sampled by delimiter detection
DETECTION_SAMPLE_SIZE: int = 10

DEFAULT_NEWLINE: str = "\n"

# Local config file name (should be gitignored)
LOCAL_CONFIG_FILENAME: str = ".csv-codec.json"

Columns = Union[List[str], Dict[str, str], None]


def find_local_config() -> Optional[Path]:
    """
    Search for local config file in current directory and parents.
    
    Returns:
        Path to config file if found, None otherwise
    """
    current = Path.cwd()
    
    # Check current directory and parents up to home or root
    for directory in [current] + list(current.parents):
        config_path = directory / LOCAL_CONFIG_FILENAME
        if config_path.exists():
            return config_path
        # Stop at home directory
        if directory == Path.home():
            break
    
    return None


def load_local_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a local .csv-codec.json file.
    
    Args:
        config_path: Explicit file to read (searched for when omitted)
    
    Returns:
        Dictionary of configuration values, empty dict if no config found
    """
    if config_path is None:
        config_path = find_local_config()
    if config_path is None:
        return {}
    
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logging.warning(f"Error loading {config_path}: {e}")
        return {}
    
    if not isinstance(data, dict):
        logging.warning(f"Ignoring {config_path}: top level must be an object")
        return {}
    return data


def _check_delimiter(delimiter: str, allow_auto: bool) -> None:
    if allow_auto and delimiter == AUTO_DELIMITER:
        return
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        expected = "a single character"
        if allow_auto:
            expected += f" or {AUTO_DELIMITER!r}"
        raise ValueError(f"delimiter must be {expected}, got {delimiter!r}")
    if delimiter == QUOTE or delimiter in LINE_TERMINATORS:
        raise ValueError(f"delimiter cannot be {delimiter!r}")


@dataclass
class DecodeConfig:
    """Options for one decode call."""
    
    header: bool = True
    delimiter: str = AUTO_DELIMITER
    skip_empty_lines: bool = True
    trim: bool = True
    relaxed: bool = False
    
    def __post_init__(self) -> None:
        _check_delimiter(self.delimiter, allow_auto=True)


@dataclass
class EncodeConfig:
    """Options for one encode call."""
    
    header: bool = True
    delimiter: str = DEFAULT_DELIMITER
    columns: Columns = None
    newline: str = DEFAULT_NEWLINE
    bom: bool = False
    
    def __post_init__(self) -> None:
        _check_delimiter(self.delimiter, allow_auto=False)
        if not self.newline:
            raise ValueError("newline cannot be empty")
        if self.columns is not None and not isinstance(self.columns, (list, tuple, dict)):
            raise ValueError(
                "columns must be a list of keys or a mapping of key to header name"
            )


@dataclass
class CLIDefaults:
    """Command-line defaults, overridable from the local config file."""
    
    delimiter: str = AUTO_DELIMITER
    encode_delimiter: str = DEFAULT_DELIMITER
    newline: str = DEFAULT_NEWLINE
    bom: bool = False
    trim: bool = True
    relaxed: bool = False
    skip_empty_lines: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)
    
    @classmethod
    def from_local_config(cls, config_path: Optional[Path] = None) -> "CLIDefaults":
        """Build defaults from the local config file, ignoring unknown keys."""
        data = load_local_config(config_path)
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and k != "extra"}
        unknown = {k: v for k, v in data.items() if k not in known}
        if unknown:
            logging.debug(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(extra=unknown, **known)
