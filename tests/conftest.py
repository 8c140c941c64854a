"""
Pytest configuration and shared fixtures.
"""

import gzip

import pytest
from pathlib import Path


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def basic_csv(fixtures_dir):
    """Path to a basic comma-delimited CSV."""
    return fixtures_dir / "basic.csv"


@pytest.fixture
def semicolon_bom_csv(fixtures_dir):
    """Path to a semicolon CSV with a UTF-8 BOM, CRLF endings and quoted line breaks."""
    return fixtures_dir / "semicolon_bom.csv"


@pytest.fixture
def ragged_csv(fixtures_dir):
    """Path to a CSV whose rows have too few and too many fields."""
    return fixtures_dir / "ragged.csv"


@pytest.fixture
def single_field_header_csv(fixtures_dir):
    """Path to a pipe CSV whose header has a single field."""
    return fixtures_dir / "single_field_header.csv"


@pytest.fixture
def rows_json(fixtures_dir):
    """Path to a JSON array of row objects with mixed value types."""
    return fixtures_dir / "rows.json"


@pytest.fixture
def gzipped_csv(tmp_path, basic_csv):
    """Gzipped copy of basic.csv."""
    path = tmp_path / "basic.csv.gz"
    with gzip.open(path, "wb") as f:
        f.write(basic_csv.read_bytes())
    return path
