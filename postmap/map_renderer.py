#!/usr/bin/env python3
"""
ASCII map renderer for postal-code coordinates.
Marks every grid cell that any coordinate's density blob reaches and leaves the rest blank.
"""

import logging
from typing import List, Optional, Sequence

from .boundary import DEFAULT_PADDING_FRACTION, calculate_boundary
from .density import DEFAULT_DENSITY_RADIUS, DensityGrid, build_density_grid
from .errors import InvalidInputError
from .models import Coordinate, RenderedMap, RenderOptions

logger = logging.getLogger(__name__)

MIN_WIDTH = 10
MIN_HEIGHT = 5


def threshold_grid(grid: DensityGrid, options: RenderOptions) -> List[str]:
    """Reduce densities to presence/absence: mark symbol where density > 0, blank elsewhere."""
    return [
        ''.join(options.mark_symbol if value > 0 else options.blank_symbol for value in row)
        for row in grid
    ]


def grid_to_text(rows: Sequence[str], options: RenderOptions) -> str:
    """Serialize rows top to bottom, each followed by a newline (the last one included).

    In color mode every non-blank symbol is wrapped in the color on/off
    markers; blanks are written as they are.
    """
    parts = []
    for row in rows:
        if options.color_enabled:
            for symbol in row:
                if symbol != options.blank_symbol:
                    parts.append(options.color_on + symbol + options.color_off)
                else:
                    parts.append(symbol)
        else:
            parts.append(row)
        parts.append('\n')
    return ''.join(parts)


class MapRenderer:
    """Renders coordinate sets as fixed-size ASCII density maps."""

    def __init__(self, width: int, height: int, options: Optional[RenderOptions] = None,
                 min_width: int = MIN_WIDTH, min_height: int = MIN_HEIGHT):
        """Initialize map renderer with dimensions.

        Args:
            width: Canvas width in characters
            height: Canvas height in lines
            options: Density radius, padding, symbols and color settings
            min_width: Smallest accepted width
            min_height: Smallest accepted height

        Raises:
            InvalidInputError: if width or height is below its minimum.
        """
        if width < min_width or height < min_height:
            raise InvalidInputError(
                f"Map must be at least {min_width}x{min_height} characters, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.options = options or RenderOptions()

    def build_grid(self, coordinates: Sequence[Coordinate]) -> DensityGrid:
        """Scale the coordinates to their padded bounding box and accumulate densities."""
        boundary = calculate_boundary(coordinates, self.options.padding_fraction)
        return build_density_grid(coordinates, boundary, self.width, self.height,
                                  self.options.density_radius)

    def render(self, coordinates: Sequence[Coordinate]) -> RenderedMap:
        """Render coordinates as a map.

        Raises:
            InvalidInputError: if ``coordinates`` is empty.
        """
        if not coordinates:
            raise InvalidInputError("No coordinates provided for rendering")

        logger.debug("Rendering %d coordinates on a %dx%d grid", len(coordinates), self.width, self.height)
        rows = threshold_grid(self.build_grid(coordinates), self.options)
        return RenderedMap(
            cells=tuple(rows),
            text=grid_to_text(rows, self.options),
            blank_symbol=self.options.blank_symbol,
        )


def render_map(coordinates: Sequence[Coordinate], width: int, height: int,
               density_radius: int = DEFAULT_DENSITY_RADIUS,
               padding_fraction: float = DEFAULT_PADDING_FRACTION,
               color_enabled: bool = False) -> str:
    """Convenience function to render a map straight to text."""
    options = RenderOptions(
        density_radius=density_radius,
        padding_fraction=padding_fraction,
        color_enabled=color_enabled,
    )
    return MapRenderer(width, height, options).render(coordinates).text

