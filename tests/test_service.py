"""Tests for the country map service."""

import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from postmap.cache import CoordinateCache
from postmap.config import map_settings
from postmap.errors import InvalidInputError, NoDataError
from postmap.models import Coordinate
from postmap.service import MapService


@pytest.fixture
def service(sample_postal_csv):
    return MapService(CoordinateCache(sample_postal_csv, max_workers=1))


def test_render_country_map_uses_default_dimensions(service):
    rendered = service.render_country_map("us")
    assert rendered.width == 120
    assert rendered.height == 60
    assert rendered.mark_count > 0


def test_dimensions_are_capped(service):
    rendered = service.render_country_map("US", width=500, height=300)
    assert (rendered.width, rendered.height) == (200, 100)


def test_non_positive_dimensions_use_defaults(service):
    assert service.resolve_dimensions(0, -3) == (120, 60)
    assert service.resolve_dimensions(None, 20) == (120, 20)


def test_too_small_dimensions_raise_invalid_input(service):
    with pytest.raises(InvalidInputError):
        service.render_country_map("US", width=5, height=20)


def test_unknown_country_raises_no_data(service):
    with pytest.raises(NoDataError) as excinfo:
        service.render_country_map("zz", width=20, height=10)
    assert excinfo.value.country_code == "ZZ"
    assert str(excinfo.value) == "No data found for country code: ZZ"


@pytest.mark.parametrize("code", [None, "", "   "])
def test_blank_country_code_is_invalid(service, code):
    with pytest.raises(InvalidInputError):
        service.render_country_map(code)


def test_color_setting_comes_from_config(sample_postal_csv):
    settings = map_settings()
    settings["color"] = True
    service = MapService(CoordinateCache(sample_postal_csv), settings)

    assert "\033[32m" in service.render_country_map("DE", 20, 10).text
    assert "\033[32m" not in service.render_country_map("DE", 20, 10, color=False).text


def test_single_coordinate_country_renders(service):
    rendered = service.render_country_map("CA", width=20, height=10)
    assert rendered.mark_count == 3
    assert rendered.cells[9][0] == "*"


def test_available_countries_have_names(service):
    assert service.available_countries() == {
        "US": "United States",
        "CA": "Canada",
        "DE": "Germany",
    }


def test_render_uk_map(sample_postal_csv, uk_postcodes_csv):
    service = MapService(CoordinateCache(sample_postal_csv))
    rendered = service.render_uk_map(uk_postcodes_csv, width=40, height=20)

    assert rendered.width == 40
    # four usable postcodes, well apart on a 40x20 grid
    assert rendered.mark_count >= 4 * 3


def test_uk_map_uses_uk_padding(sample_postal_csv, uk_postcodes_csv):
    service = MapService(CoordinateCache(sample_postal_csv))

    with patch('postmap.service.MapRenderer') as mock_renderer:
        service.render_uk_map(uk_postcodes_csv, width=40, height=20)

    options = mock_renderer.call_args[0][2]
    assert options.padding_fraction == 0.05
    mock_renderer.return_value.render.assert_called_once()


def test_service_reads_cached_coordinates():
    cache = MagicMock(spec=CoordinateCache)
    cache.coordinates_for.return_value = (Coordinate(10.0, 10.0), Coordinate(20.0, 20.0))
    service = MapService(cache)

    rendered = service.render_country_map("XX", width=10, height=5)
    cache.coordinates_for.assert_called_once_with("XX")
    assert rendered.height == 5
