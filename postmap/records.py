"""Record source: stream delimited postal-code files as tuples of text fields.

DuckDB reads the file with every column kept as text, so the extractor sees
exactly what was in the file (or None for an empty field). Compressed files
(``.gz``) are decompressed transparently based on their extension.
"""

import logging
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, Tuple

import duckdb

from .errors import InvalidInputError, ResourceError

logger = logging.getLogger(__name__)

Record = Tuple[Optional[str], ...]

GEONAMES_DELIMITER = ';'
UK_POSTCODES_DELIMITER = ','


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _build_query(path: str, delimiter: str, header: bool) -> str:
    return f"""
        SELECT * FROM read_csv(
            {_sql_literal(path)},
            delim={_sql_literal(delimiter)},
            header={'true' if header else 'false'},
            all_varchar=true,
            null_padding=true,
            ignore_errors=true
        )
    """


def iter_record_batches(path: str, batch_size: int = 1000,
                        delimiter: str = GEONAMES_DELIMITER,
                        header: bool = True) -> Iterator[List[Record]]:
    """Yield the records of ``path`` in lists of at most ``batch_size``.

    Raises:
        ResourceError: if the file does not exist or cannot be read.
    """
    if batch_size < 1:
        raise InvalidInputError(f"Batch size must be at least 1, got {batch_size}")
    file_path = Path(path)
    if not file_path.is_file():
        raise ResourceError(f"Record file not found: {path}", path=str(path))

    abs_path = str(file_path.resolve())
    conn = duckdb.connect(':memory:')
    try:
        try:
            result = conn.execute(_build_query(abs_path, delimiter, header))
        except duckdb.Error as e:
            raise ResourceError(f"Could not read {path}: {e}", path=str(path)) from e

        total = 0
        while True:
            rows = result.fetchmany(batch_size)
            if not rows:
                break
            total += len(rows)
            yield rows
        logger.debug("Read %d records from %s", total, path)
    finally:
        conn.close()


def read_records(path: str, batch_size: int = 1000,
                 delimiter: str = GEONAMES_DELIMITER,
                 header: bool = True) -> Iterator[Record]:
    """Yield the records of ``path`` one at a time."""
    for batch in iter_record_batches(path, batch_size, delimiter, header):
        yield from batch


def read_country_codes(path: str, batch_size: int = 1000,
                       delimiter: str = GEONAMES_DELIMITER,
                       header: bool = True) -> FrozenSet[str]:
    """Distinct upper-cased, non-empty values of the first field."""
    codes = set()
    for record in read_records(path, batch_size, delimiter, header):
        if record and record[0] and record[0].strip():
            codes.add(record[0].strip().upper())
    logger.info("Loaded %d country codes from %s", len(codes), path)
    return frozenset(codes)
