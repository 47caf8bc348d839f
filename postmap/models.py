"""Value types shared by the extractor, boundary calculator, grid builder and renderer."""

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidInputError, ParseError

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# Rendering symbols and ANSI color markers
MARK_SYMBOL = '*'
BLANK_SYMBOL = ' '
ANSI_GREEN = '\033[32m'
ANSI_RESET = '\033[0m'


@dataclass(frozen=True)
class Coordinate:
    """A validated (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ParseError(f"Non-finite coordinate: ({self.latitude}, {self.longitude})")
        if not MIN_LATITUDE <= self.latitude <= MAX_LATITUDE:
            raise ParseError(f"Invalid latitude: {self.latitude}")
        if not MIN_LONGITUDE <= self.longitude <= MAX_LONGITUDE:
            raise ParseError(f"Invalid longitude: {self.longitude}")


@dataclass(frozen=True)
class BoundingBox:
    """Geographic rectangle used to scale coordinates onto the grid.

    A box is never changed in place; padding and merging return new boxes.
    Equal min/max values on an axis are allowed (all points share that value).
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def __post_init__(self):
        if self.min_lat > self.max_lat:
            raise InvalidInputError(f"min_lat {self.min_lat} is greater than max_lat {self.max_lat}")
        if self.min_lon > self.max_lon:
            raise InvalidInputError(f"min_lon {self.min_lon} is greater than max_lon {self.max_lon}")

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    def with_padding(self, padding_fraction: float) -> 'BoundingBox':
        """Return a copy grown outward by ``padding_fraction`` of each axis range, on both sides."""
        lat_padding = self.lat_range * padding_fraction
        lon_padding = self.lon_range * padding_fraction
        return BoundingBox(
            self.min_lat - lat_padding,
            self.max_lat + lat_padding,
            self.min_lon - lon_padding,
            self.max_lon + lon_padding,
        )

    def combine(self, other: 'BoundingBox') -> 'BoundingBox':
        """Smallest box covering both boxes (element-wise min/max)."""
        return BoundingBox(
            min(self.min_lat, other.min_lat),
            max(self.max_lat, other.max_lat),
            min(self.min_lon, other.min_lon),
            max(self.max_lon, other.max_lon),
        )

    def contains(self, coordinate: Coordinate) -> bool:
        return (self.min_lat <= coordinate.latitude <= self.max_lat
                and self.min_lon <= coordinate.longitude <= self.max_lon)


@dataclass(frozen=True)
class RenderOptions:
    """Knobs for a single render call."""

    density_radius: int = 1
    padding_fraction: float = 0.01
    color_enabled: bool = False
    mark_symbol: str = MARK_SYMBOL
    blank_symbol: str = BLANK_SYMBOL
    color_on: str = ANSI_GREEN
    color_off: str = ANSI_RESET

    def __post_init__(self):
        if isinstance(self.density_radius, bool) or not isinstance(self.density_radius, int):
            raise InvalidInputError(f"Density radius must be an integer, got {self.density_radius!r}")
        if self.density_radius < 0:
            raise InvalidInputError(f"Density radius must not be negative, got {self.density_radius}")
        check_padding_fraction(self.padding_fraction)


def check_padding_fraction(padding_fraction: float) -> None:
    """Raise InvalidInputError unless ``padding_fraction`` is a finite number >= 0."""
    if isinstance(padding_fraction, bool) or not isinstance(padding_fraction, (int, float)):
        raise InvalidInputError(f"Padding fraction must be a number, got {padding_fraction!r}")
    if not math.isfinite(padding_fraction) or padding_fraction < 0:
        raise InvalidInputError(f"Padding fraction must be finite and not negative, got {padding_fraction}")


@dataclass(frozen=True)
class RenderedMap:
    """Finished character grid plus its printable text."""

    cells: Tuple[str, ...]
    text: str
    blank_symbol: str = BLANK_SYMBOL

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def mark_count(self) -> int:
        """Number of non-blank cells."""
        return sum(1 for row in self.cells for symbol in row if symbol != self.blank_symbol)

    def __str__(self) -> str:
        return self.text
