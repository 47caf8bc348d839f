"""Bounding box calculation over a set of coordinates."""

import logging
from functools import reduce
from typing import Sequence

from .errors import InvalidInputError
from .extractor import iter_batches
from .models import BoundingBox, Coordinate, check_padding_fraction

logger = logging.getLogger(__name__)

DEFAULT_PADDING_FRACTION = 0.01
UK_PADDING_FRACTION = 0.05

_REDUCE_CHUNK = 4096


def _chunk_bounds(chunk: Sequence[Coordinate]) -> BoundingBox:
    lats = [c.latitude for c in chunk]
    lons = [c.longitude for c in chunk]
    return BoundingBox(min(lats), max(lats), min(lons), max(lons))


def raw_bounds(coordinates: Sequence[Coordinate]) -> BoundingBox:
    """Exact min/max box over ``coordinates``, without padding.

    Each chunk is reduced on its own and the partial boxes are merged with
    ``BoundingBox.combine``, which is associative, so chunks may come from
    independent workers.

    Raises:
        InvalidInputError: when ``coordinates`` is empty.
    """
    if not coordinates:
        raise InvalidInputError("Cannot compute a bounding box from zero coordinates")
    partials = [_chunk_bounds(chunk) for chunk in iter_batches(coordinates, _REDUCE_CHUNK)]
    return reduce(BoundingBox.combine, partials)


def calculate_boundary(coordinates: Sequence[Coordinate],
                       padding_fraction: float = DEFAULT_PADDING_FRACTION) -> BoundingBox:
    """Bounding box of ``coordinates`` grown by ``padding_fraction`` of each axis range.

    When every point shares the same latitude (or longitude) that axis has a
    zero range, so its padding is zero too and the box stays degenerate.
    """
    check_padding_fraction(padding_fraction)
    box = raw_bounds(coordinates).with_padding(padding_fraction)
    logger.debug("Boundary for %d coordinates: lat [%f, %f], lon [%f, %f]",
                 len(coordinates), box.min_lat, box.max_lat, box.min_lon, box.max_lon)
    return box
