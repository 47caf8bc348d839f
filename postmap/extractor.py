"""Turn raw postal-code records into validated coordinates for one country.

Records are sequences of text fields as produced by the record source. The
GeoNames postal-code layout keeps the country code in field 0 and the
latitude/longitude in fields 9 and 10. Rows that fail to parse or fall outside
the valid coordinate range are dropped silently.
"""

import logging
import re
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from itertools import islice
from typing import Deque, Iterable, Iterator, List, Optional, Sequence

from .errors import InvalidInputError, ParseError
from .models import Coordinate

logger = logging.getLogger(__name__)

COUNTRY_FIELD = 0
LATITUDE_FIELD = 9
LONGITUDE_FIELD = 10
MIN_FIELDS = 11

# Plain ASCII decimal notation, optionally with an exponent
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

DEFAULT_BATCH_SIZE = 1000
DEFAULT_MAX_WORKERS = 4
# Batches read ahead of the oldest unfinished one, per worker
IN_FLIGHT_PER_WORKER = 2

# ukpostcodes.csv layout: id,postcode,latitude,longitude
UK_LATITUDE_FIELD = 2
UK_LONGITUDE_FIELD = 3
UK_MIN_FIELDS = 4
UK_LAT_MIN, UK_LAT_MAX = 49.0, 61.0
UK_LON_MIN, UK_LON_MAX = -9.0, 3.0


def _parse_decimal(value: Optional[str]) -> float:
    if value is None:
        raise ParseError("Missing coordinate field")
    if not isinstance(value, str) or not DECIMAL_PATTERN.fullmatch(value.strip()):
        raise ParseError(f"Not a decimal number: {value!r}")
    return float(value)


def parse_coordinate(record: Sequence[Optional[str]],
                     lat_field: int = LATITUDE_FIELD,
                     lon_field: int = LONGITUDE_FIELD) -> Coordinate:
    """Parse the latitude/longitude fields of a record.

    Raises:
        ParseError: when a field is missing, not a number, or out of range.
    """
    try:
        lat_text = record[lat_field]
        lon_text = record[lon_field]
    except IndexError:
        raise ParseError(f"Record has only {len(record)} fields")
    return Coordinate(_parse_decimal(lat_text), _parse_decimal(lon_text))


def is_country_record(record: Sequence[Optional[str]], country_code: str) -> bool:
    """True when the record is long enough and belongs to ``country_code`` (case-insensitive)."""
    if len(record) < MIN_FIELDS:
        return False
    code = record[COUNTRY_FIELD]
    return code is not None and code.upper() == country_code.upper()


def extract_batch(records: Iterable[Sequence[Optional[str]]], country_code: str) -> List[Coordinate]:
    """Extract the valid coordinates of ``country_code`` from one batch of records."""
    coordinates = []
    for record in records:
        if not is_country_record(record, country_code):
            continue
        try:
            coordinates.append(parse_coordinate(record))
        except ParseError:
            continue
    return coordinates


def iter_batches(records: Iterable, batch_size: int) -> Iterator[list]:
    """Split a record stream into lists of at most ``batch_size`` records."""
    if batch_size < 1:
        raise InvalidInputError(f"Batch size must be at least 1, got {batch_size}")
    iterator = iter(records)
    while True:
        batch = list(islice(iterator, batch_size))
        if not batch:
            return
        yield batch


def _bounded_results(executor: ThreadPoolExecutor, batches: Iterable[list], code: str,
                     limit: int) -> Iterator[List[Coordinate]]:
    """Yield batch results in submission order with at most ``limit`` batches pending."""
    pending: Deque[Future] = deque()

    def collect() -> List[Coordinate]:
        try:
            return pending.popleft().result()
        except Exception:
            logger.exception("Error processing batch for country code %s", code.upper())
            raise

    for batch in batches:
        pending.append(executor.submit(extract_batch, batch, code))
        if len(pending) >= limit:
            yield collect()
    while pending:
        yield collect()


def extract_coordinates(records: Iterable[Sequence[Optional[str]]], country_code: str,
                        batch_size: int = DEFAULT_BATCH_SIZE,
                        max_workers: int = DEFAULT_MAX_WORKERS) -> List[Coordinate]:
    """Collect every valid coordinate of ``country_code`` found in ``records``.

    The stream is cut into batches that are extracted on a thread pool and
    concatenated. The order of the result is not meaningful; a serial run
    (``max_workers <= 1``) yields the same elements.

    Args:
        records: Raw records, each a sequence of text fields
        country_code: Two-letter code compared case-insensitively against field 0
        batch_size: Records per batch
        max_workers: Thread pool size; 1 or less processes in the calling thread

    Returns:
        List of coordinates, empty when nothing matched.
    """
    code = country_code.strip()
    batches = iter_batches(records, batch_size)

    coordinates: List[Coordinate] = []
    batch_count = 0
    if max_workers <= 1:
        for batch in batches:
            coordinates.extend(extract_batch(batch, code))
            batch_count += 1
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for result in _bounded_results(executor, batches, code, max_workers * IN_FLIGHT_PER_WORKER):
                coordinates.extend(result)
                batch_count += 1

    logger.info("Extracted %d coordinates for country code %s from %d batches",
                len(coordinates), code.upper(), batch_count)
    return coordinates


def _in_uk_window(coordinate: Coordinate) -> bool:
    return (UK_LAT_MIN <= coordinate.latitude <= UK_LAT_MAX
            and UK_LON_MIN <= coordinate.longitude <= UK_LON_MAX)


def extract_uk_coordinates(records: Iterable[Sequence[Optional[str]]]) -> List[Coordinate]:
    """Extract coordinates from ukpostcodes.csv records.

    Only points inside the UK window (lat 49..61, lon -9..3) are kept; the
    file uses placeholder coordinates such as (99.999999, 0) for postcodes
    without a location.
    """
    coordinates = []
    skipped = 0
    for record in records:
        if len(record) < UK_MIN_FIELDS:
            skipped += 1
            continue
        try:
            coordinate = parse_coordinate(record, UK_LATITUDE_FIELD, UK_LONGITUDE_FIELD)
        except ParseError:
            skipped += 1
            continue
        if not _in_uk_window(coordinate):
            skipped += 1
            continue
        coordinates.append(coordinate)

    logger.info("Extracted %d UK postcode coordinates, skipped %d rows", len(coordinates), skipped)
    return coordinates
