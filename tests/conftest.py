"""Pytest configuration and shared fixtures for postmap tests."""

import pytest
import tempfile
import gzip
from pathlib import Path

GEONAMES_HEADER = ("country code;postal code;place name;admin name1;admin code1;admin name2;"
                   "admin code2;admin name3;admin code3;latitude;longitude;accuracy")


def geonames_row(country, lat, lon, postal_code="00000", place="Somewhere"):
    """One record in the GeoNames postal code layout (12 fields)."""
    return [country, postal_code, place, "", "", "", "", "", "", lat, lon, "4"]


def write_geonames_csv(path, rows):
    lines = [GEONAMES_HEADER] + [";".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


SAMPLE_ROWS = [
    geonames_row("US", "40.0", "-75.0", "19019", "Philadelphia"),
    geonames_row("US", "41.0", "-74.0", "10001", "New York"),
    geonames_row("US", "34.05", "-118.24", "90001", "Los Angeles"),
    geonames_row("us", "47.6", "-122.3", "98101", "Seattle"),
    geonames_row("US", "not-a-number", "-80.0", "33101", "Miami"),
    geonames_row("US", "95.0", "-80.0", "00001", "Nowhere"),
    geonames_row("CA", "45.0", "-75.0", "K1A", "Ottawa"),
    geonames_row("DE", "52.52", "13.40", "10115", "Berlin"),
    geonames_row("DE", "48.14", "11.58", "80331", "Munich"),
]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_records():
    """Records as the record source yields them (tuples of text fields)."""
    return [tuple(row) for row in SAMPLE_ROWS]


@pytest.fixture
def sample_postal_csv(temp_dir):
    """Create a sample semicolon-delimited postal code file."""
    return str(write_geonames_csv(temp_dir / "postal_codes.csv", SAMPLE_ROWS))


@pytest.fixture
def sample_postal_csv_gz(temp_dir):
    """Gzip-compressed copy of the sample postal code file."""
    gz_path = temp_dir / "postal_codes.csv.gz"
    lines = [GEONAMES_HEADER] + [";".join(row) for row in SAMPLE_ROWS]
    with gzip.open(gz_path, "wt", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return str(gz_path)


@pytest.fixture
def uk_postcodes_csv(temp_dir):
    """Create a small ukpostcodes.csv (id,postcode,latitude,longitude)."""
    csv_path = temp_dir / "ukpostcodes.csv"
    data = [
        "id,postcode,latitude,longitude",
        "1,AB10 1XG,57.144165,-2.114848",
        "2,EC1A 1BB,51.520180,-0.097400",
        "3,BT1 1AA,54.597480,-5.930120",
        "4,PL1 1AA,50.371400,-4.142000",
        "5,ZZ99 3WZ,99.999999,0.000000",
        "6,GY1 1AA,,",
    ]
    csv_path.write_text("\n".join(data) + "\n", encoding="utf-8")
    return str(csv_path)


@pytest.fixture
def mock_config_file(temp_dir):
    """Create a mock configuration file."""
    config_path = temp_dir / "postmap.yaml"
    config = {
        "map_defaults": {
            "width": 40,
            "height": 20,
            "density_radius": 2,
            "color": False,
        }
    }

    import yaml
    with open(config_path, 'w') as f:
        yaml.dump(config, f)

    return str(config_path)


def strip_ansi_codes(text):
    """Remove ANSI escape codes from text for testing."""
    import re
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
    return ansi_escape.sub('', text)
