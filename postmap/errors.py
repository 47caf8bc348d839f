"""Exception types raised by the postmap rendering pipeline."""

from typing import Optional


class PostmapError(Exception):
    """Base class for every error raised by postmap."""


class ParseError(PostmapError, ValueError):
    """A single record's latitude/longitude could not be turned into a Coordinate.

    Raised while parsing one row and always caught by the extractor; a bad row
    is dropped, never reported to the caller.
    """


class InvalidInputError(PostmapError, ValueError):
    """The caller handed the pipeline something it cannot work with.

    Covers empty coordinate sequences reaching the boundary calculator and
    map dimensions below the configured minimums.
    """


class NoDataError(PostmapError):
    """No coordinates matched the requested country code."""

    def __init__(self, country_code: str):
        self.country_code = country_code
        super().__init__(f"No data found for country code: {country_code}")


class ResourceError(PostmapError):
    """The record source could not be opened or read."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
