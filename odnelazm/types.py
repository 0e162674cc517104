"""Data types describing hansard listings, sittings and speakers."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from odnelazm.errors import InvalidHouseError

BASE_URL = "https://info.mzalendo.com"


def _format_time(value: dt.time) -> str:
    text = value.strftime("%H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    return text


def _time_or_none(value: dt.time | None) -> str | None:
    return None if value is None else _format_time(value)


class House(Enum):
    """A house of the Kenyan parliament."""

    SENATE = "senate"
    NATIONAL_ASSEMBLY = "national_assembly"

    @classmethod
    def from_str(cls, value: str) -> House:
        """Parse the snake_case name used in URLs."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidHouseError(value) from None

    def __str__(self) -> str:
        return "Senate" if self is House.SENATE else "National Assembly"


@dataclass(kw_only=True)
class PersonDetails:
    """Profile of a member of parliament."""

    name: str
    slug: str
    summary: str | None = None
    party: str | None = None
    party_url: str | None = None
    email: str | None = None
    telephone: str | None = None
    current_position: str | None = None
    constituency: str | None = None

    def __str__(self) -> str:
        text = self.name
        if self.current_position is not None:
            text += f" · {self.current_position}"
        if self.party is not None:
            text += f" · {self.party}"
        if self.constituency is not None:
            text += f"\n      Constituency: {self.constituency}"
        if self.email is not None:
            text += f"\n      Email:          {self.email}"
        if self.telephone is not None:
            text += f"\n      Tel:            {self.telephone}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "summary": self.summary,
            "party": self.party,
            "party_url": self.party_url,
            "email": self.email,
            "telephone": self.telephone,
            "current_position": self.current_position,
            "constituency": self.constituency,
        }


@dataclass(kw_only=True)
class Contribution:
    """A single speech within a section of a sitting."""

    speaker_name: str
    content: str
    speaker_role: str | None = None
    speaker_url: str | None = None
    speaker_details: PersonDetails | None = None
    procedural_notes: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        text = f"  ▸ {self.speaker_name}"
        if self.speaker_role is not None:
            text += f" ({self.speaker_role})"
        text += "\n"
        if self.speaker_details is not None:
            text += f"    {self.speaker_details}\n"
        text += f"    {self.content}\n"
        text += "".join(f"    [{note}]\n" for note in self.procedural_notes)
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "speaker_name": self.speaker_name,
            "speaker_role": self.speaker_role,
            "speaker_url": self.speaker_url,
            "speaker_details": (
                None if self.speaker_details is None else self.speaker_details.to_dict()
            ),
            "content": self.content,
            "procedural_notes": list(self.procedural_notes),
        }


@dataclass(kw_only=True)
class HansardSection:
    """A headed part of a sitting and the speeches under it."""

    section_type: str
    title: str | None = None
    contributions: list[Contribution] = field(default_factory=list)

    def __str__(self) -> str:
        text = f"── {self.section_type}"
        if self.title is not None:
            text += f": {self.title}"
        text += "\n"
        text += "".join(str(contribution) for contribution in self.contributions)
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "section_type": self.section_type,
            "title": self.title,
            "contributions": [c.to_dict() for c in self.contributions],
        }


@dataclass(kw_only=True)
class HansardListing:
    """An entry in the list of available sittings."""

    house: House
    date: dt.date
    url: str
    display_text: str
    start_time: dt.time | None = None
    end_time: dt.time | None = None

    def __str__(self) -> str:
        text = f"[{self.house}] {self.date.isoformat()} — {self.display_text}"
        if self.start_time is not None:
            start = _format_time(self.start_time)
            if self.end_time is not None:
                text += f"\n   Time: {start} – {_format_time(self.end_time)}"
            else:
                text += f"\n   Start: {start}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "house": self.house.value,
            "date": self.date.isoformat(),
            "start_time": _time_or_none(self.start_time),
            "end_time": _time_or_none(self.end_time),
            "url": self.url,
            "display_text": self.display_text,
        }


@dataclass(kw_only=True)
class HansardDetail:
    """The full transcript of a sitting."""

    house: House
    date: dt.date
    parliament_number: str
    session_number: str
    session_type: str
    speaker_in_chair: str
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    sections: list[HansardSection] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [f"┌─ {self.house} ─ {self.date.isoformat()}\n"]
        if self.start_time is not None:
            time_line = f"│  Time:    {_format_time(self.start_time)}"
            if self.end_time is not None:
                time_line += f" – {_format_time(self.end_time)}"
            lines.append(time_line + "\n")
        lines.append(
            f"│  Parliament: {self.parliament_number} · "
            f"Session: {self.session_number} ({self.session_type})\n"
        )
        lines.append(f"│  Chair: {self.speaker_in_chair}\n")
        lines.append(f"└─ {len(self.sections)} section(s)\n")
        lines.append("\n")
        lines.extend(
            f"{number:>2}. {section}\n"
            for number, section in enumerate(self.sections, start=1)
        )
        return "".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "house": self.house.value,
            "date": self.date.isoformat(),
            "start_time": _time_or_none(self.start_time),
            "end_time": _time_or_none(self.end_time),
            "parliament_number": self.parliament_number,
            "session_number": self.session_number,
            "session_type": self.session_type,
            "speaker_in_chair": self.speaker_in_chair,
            "sections": [s.to_dict() for s in self.sections],
        }