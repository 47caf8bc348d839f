"""Country map rendering on top of the coordinate cache."""

import logging
from typing import Any, Dict, Optional

from .cache import CoordinateCache
from .config import map_settings
from .countries import country_name
from .errors import InvalidInputError, NoDataError
from .extractor import extract_uk_coordinates
from .map_renderer import MapRenderer
from .models import RenderedMap, RenderOptions
from .records import UK_POSTCODES_DELIMITER, read_records

logger = logging.getLogger(__name__)


class MapService:
    """Renders maps for country codes, applying configured defaults and limits."""

    def __init__(self, cache: CoordinateCache, settings: Optional[Dict[str, Any]] = None):
        self.cache = cache
        self.settings = settings if settings is not None else map_settings()

    def available_countries(self) -> Dict[str, str]:
        """Country code -> display name, for every country present in the data."""
        return {code: country_name(code) for code in self.cache.available_country_codes()}

    def resolve_dimensions(self, width: Optional[int], height: Optional[int]):
        """Fill in default dimensions and cap them at the configured maximums."""
        if width is None or width <= 0:
            width = self.settings["width"]
        if height is None or height <= 0:
            height = self.settings["height"]
        return min(width, self.settings["max_width"]), min(height, self.settings["max_height"])

    def _renderer(self, width: int, height: int, padding_fraction: float,
                  color: Optional[bool], density_radius: Optional[int]) -> MapRenderer:
        options = RenderOptions(
            density_radius=self.settings["density_radius"] if density_radius is None else density_radius,
            padding_fraction=padding_fraction,
            color_enabled=self.settings["color"] if color is None else color,
        )
        return MapRenderer(width, height, options,
                           min_width=self.settings["min_width"],
                           min_height=self.settings["min_height"])

    def render_country_map(self, country_code: Optional[str], width: Optional[int] = None,
                           height: Optional[int] = None, color: Optional[bool] = None,
                           density_radius: Optional[int] = None,
                           padding_fraction: Optional[float] = None) -> RenderedMap:
        """Render the map of one country.

        Raises:
            InvalidInputError: blank country code or dimensions below the minimums.
            NoDataError: no coordinates for the country code.
        """
        if country_code is None or not country_code.strip():
            raise InvalidInputError("Country code is required")
        code = country_code.strip().upper()
        width, height = self.resolve_dimensions(width, height)
        if padding_fraction is None:
            padding_fraction = self.settings["padding_fraction"]
        renderer = self._renderer(width, height, padding_fraction, color, density_radius)

        coordinates = self.cache.coordinates_for(code)
        if not coordinates:
            logger.warning("No data found for country code: %s", code)
            raise NoDataError(code)

        logger.info("Rendering ASCII map for country: %s, dimensions: %dx%d", code, width, height)
        return renderer.render(coordinates)

    def render_uk_map(self, path: str, width: Optional[int] = None, height: Optional[int] = None,
                      color: Optional[bool] = None,
                      density_radius: Optional[int] = None) -> RenderedMap:
        """Render the UK from a ukpostcodes.csv file (id,postcode,latitude,longitude).

        Raises:
            NoDataError: the file holds no usable UK coordinates.
        """
        width, height = self.resolve_dimensions(width, height)
        renderer = self._renderer(width, height, self.settings["uk_padding_fraction"],
                                  color, density_radius)

        records = read_records(path, self.settings["batch_size"], delimiter=UK_POSTCODES_DELIMITER)
        coordinates = extract_uk_coordinates(records)
        if not coordinates:
            raise NoDataError("GB")

        logger.info("Rendering UK postcode map from %s, dimensions: %dx%d", path, width, height)
        return renderer.render(coordinates)
