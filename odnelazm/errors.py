"""Exceptions raised while fetching and parsing hansard pages."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for every error raised by the package."""

    prefix = "Scraper error"

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class HttpError(ScraperError):
    """An HTTP request failed or returned an error status."""

    prefix = "HTTP request failed"


class ParseError(ScraperError):
    """A page or URL could not be turned into structured data."""

    prefix = "Parse error"


class UrlParseError(ParseError):
    """A URL did not have the expected shape."""

    prefix = "Failed to parse URL"


class DateParseError(ParseError):
    """A date could not be parsed."""

    prefix = "Failed to parse date"


class TimeParseError(ParseError):
    """A time could not be parsed."""

    prefix = "Failed to parse time"


class InvalidHouseError(ParseError):
    """A house name was neither 'senate' nor 'national_assembly'."""

    prefix = (
        "Invalid house type, accepted values are 'senate' and 'national_assembly'"
    )


class MissingFieldError(ParseError):
    """A required field was absent from a page."""

    prefix = "Missing required field"