"""Filtering and summary helpers for hansard listings."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from odnelazm.errors import InvalidHouseError
from odnelazm.types import HansardListing, House


def _optional_date(data: Mapping[str, Any], key: str) -> dt.date | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a date string in YYYY-MM-DD form")
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"Invalid {key}: {value}") from exc


def _optional_count(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer")
    return value


def _optional_house(data: Mapping[str, Any], key: str) -> House | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, House):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    try:
        return House.from_str(value)
    except InvalidHouseError as exc:
        raise ValueError(str(exc)) from exc


@dataclass
class ListingFilter:
    """Date, house and pagination criteria for sitting listings."""

    start_date: dt.date | None = None
    end_date: dt.date | None = None
    house: House | None = None
    limit: int | None = 10
    offset: int | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ListingFilter:
        """Build a filter from JSON-style data; absent keys mean no criterion."""
        return cls(
            start_date=_optional_date(data, "start_date"),
            end_date=_optional_date(data, "end_date"),
            house=_optional_house(data, "house"),
            limit=_optional_count(data, "limit"),
            offset=_optional_count(data, "offset"),
        )

    def apply(self, listings: Iterable[HansardListing]) -> list[HansardListing]:
        """Return the listings that match, after offset and limit."""
        selected = [
            listing
            for listing in listings
            if (self.start_date is None or listing.date >= self.start_date)
            and (self.end_date is None or listing.date <= self.end_date)
            and (self.house is None or listing.house == self.house)
        ]
        if self.offset is not None:
            selected = selected[self.offset :]
        if self.limit is not None:
            selected = selected[: self.limit]
        return selected

    def validate(self) -> ListingFilter:
        """Return self, or raise ValueError if the criteria are inconsistent."""
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise ValueError(
                f"Start date ({self.start_date.isoformat()}) cannot be after "
                f"end date ({self.end_date.isoformat()})"
            )
        if self.offset == 0:
            raise ValueError("Offset must be greater than 0")
        if self.limit == 0:
            raise ValueError("Limit must be greater than 0")
        return self


@dataclass(frozen=True)
class ListingStats:
    """Counts of sittings per house."""

    senate: int
    national_assembly: int
    total: int

    @classmethod
    def from_listings(cls, listings: Iterable[HansardListing]) -> ListingStats:
        items = list(listings)
        return cls(
            senate=sum(1 for item in items if item.house is House.SENATE),
            national_assembly=sum(
                1 for item in items if item.house is House.NATIONAL_ASSEMBLY
            ),
            total=len(items),
        )

    def __str__(self) -> str:
        return (
            "\nStatistics:\n"
            f"  Senate sittings:            {self.senate}\n"
            f"  National Assembly sittings: {self.national_assembly}\n"
            f"  Total:                      {self.total}\n"
        )