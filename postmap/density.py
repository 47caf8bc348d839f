"""Project coordinates onto a fixed grid and accumulate blob-shaped densities."""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidInputError
from .models import BoundingBox, Coordinate

logger = logging.getLogger(__name__)

DEFAULT_DENSITY_RADIUS = 1

DensityGrid = List[List[int]]


def _fraction(value: float, lower: float, upper: float) -> float:
    # Degenerate axis: every point sits on the lower edge
    span = upper - lower
    if span == 0:
        return 0.0
    return (value - lower) / span


def project(coordinate: Coordinate, box: BoundingBox,
            width: int, height: int) -> Optional[Tuple[int, int]]:
    """Map a coordinate to its (row, col) grid cell.

    Longitude scales linearly to columns, latitude to rows with north at
    row 0. Returns None when the cell would fall outside the grid.
    """
    col = math.floor(_fraction(coordinate.longitude, box.min_lon, box.max_lon) * (width - 1))
    row = (height - 1) - math.floor(_fraction(coordinate.latitude, box.min_lat, box.max_lat) * (height - 1))
    if 0 <= row < height and 0 <= col < width:
        return row, col
    return None


def _spread(grid: DensityGrid, row: int, col: int, radius: int) -> None:
    height = len(grid)
    width = len(grid[0])
    for y in range(max(0, row - radius), min(height - 1, row + radius) + 1):
        dy = abs(y - row)
        for x in range(max(0, col - radius), min(width - 1, col + radius) + 1):
            weight = radius + 1 - (dy + abs(x - col))
            if weight > 0:
                grid[y][x] += weight


def build_density_grid(coordinates: Sequence[Coordinate], box: BoundingBox,
                       width: int, height: int,
                       radius: int = DEFAULT_DENSITY_RADIUS) -> DensityGrid:
    """Build a ``height`` x ``width`` grid of accumulated densities.

    Every coordinate adds ``radius + 1 - d`` to each cell at Manhattan
    distance ``d <= radius`` from its projected cell, clipped at the grid
    edges. Overlapping blobs add up.
    """
    if width < 1 or height < 1:
        raise InvalidInputError(f"Grid must be at least 1x1, got {width}x{height}")
    if radius < 0:
        raise InvalidInputError(f"Density radius must not be negative, got {radius}")

    grid = [[0] * width for _ in range(height)]
    dropped = 0
    for coordinate in coordinates:
        cell = project(coordinate, box, width, height)
        if cell is None:
            dropped += 1
            continue
        _spread(grid, cell[0], cell[1], radius)

    if dropped:
        logger.debug("Dropped %d coordinates projected outside the %dx%d grid", dropped, width, height)
    return grid
