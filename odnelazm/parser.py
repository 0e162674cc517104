"""Parsers that turn mzalendo hansard pages into structured data."""

from __future__ import annotations

import datetime as dt
import logging
import re

from bs4 import BeautifulSoup, Tag

from odnelazm.errors import (
    DateParseError,
    MissingFieldError,
    ParseError,
    TimeParseError,
    UrlParseError,
)
from odnelazm.types import (
    BASE_URL,
    Contribution,
    HansardDetail,
    HansardListing,
    HansardSection,
    House,
    PersonDetails,
)

log = logging.getLogger(__name__)

_RE_SESSION_TYPE = re.compile(r"(Special|Morning|Afternoon) Sitting", re.IGNORECASE)
_RE_NAME_PREFIX = re.compile(r"(Hon\.|Sen\.)\s(Dr\.\s)?", re.IGNORECASE)
_RE_ROLE_PREFIX = re.compile(
    r"(The\s)?(Ayes|Noes|Teller|Temporary Speaker|Speaker|Chairperson|"
    r"Majority Leader|Minority Leader|Majority Whip|Minority Whip)",
    re.IGNORECASE,
)
_RE_CONSTITUENCY = re.compile(r"[^,]+,\s*.+")
_RE_NAME_IN_PARENS = re.compile(r"(.+?)\s*\((.+?)\)")
_RE_END_TIME = re.compile(r"\bto\s+(\d{1,2}):(\d{2})\b")

_RE_UNSIGNED = re.compile(r"\+?[0-9]+")
_RE_SIGNED = re.compile(r"[+-]?[0-9]+")
_U32_MAX = 2**32 - 1
_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1

_HOUSE_HEADINGS = ("PARLIAMENT", "SENATE", "NATIONAL ASSEMBLY")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def _extract_parenthesized(text: str) -> str | None:
    start = text.find("(")
    end = text.rfind(")")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start + 1 : end].strip()


def _strip_prefix_repeatedly(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix) :]
    return text


def _parse_unsigned(text: str) -> int | None:
    if not _RE_UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def _parse_signed(text: str) -> int | None:
    if not _RE_SIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if _I32_MIN <= value <= _I32_MAX else None


def _url_parts(url: str) -> list[str]:
    return [part for part in url.split("/") if part]


def parse_hansard_list(html: str) -> list[HansardListing]:
    """Parse the hansard index page; entries that cannot be parsed are skipped."""
    listings: list[HansardListing] = []
    for link in _soup(html).select("ul.listing li a"):
        href = link.get("href")
        if href is None:
            raise MissingFieldError("href attribute")
        display_text = link.get_text()
        try:
            listings.append(_parse_hansard_entry(href, display_text))
        except ParseError as exc:
            log.warning("Skipping entry '%s': %s", display_text, exc)
    return listings


def parse_hansard_detail(html: str, url: str) -> HansardDetail:
    """Parse a sitting transcript; the house and date come from the URL."""
    parts = _url_parts(url)
    if len(parts) < 2:
        raise UrlParseError("Could not extract house from URL")
    house = House.from_str(parts[-2])
    date, start_time, _ = parse_date_time(parts[-1], "")

    document = _soup(html)
    headings = [_normalize_whitespace(h2.get_text()) for h2 in document.select("h2")]
    parliament_number = next(
        (text for text in headings if "PARLIAMENT" in text), "PARLIAMENT OF KENYA"
    )
    session_number = next(
        (text for text in headings if "Session" in text), "Unknown Session"
    )

    session_type = "Regular Sitting"
    page_number = document.select_one("li.page_number")
    if page_number is not None:
        match = _RE_SESSION_TYPE.search(page_number.get_text())
        if match:
            session_type = match.group(0)

    speaker_in_chair = next(
        (
            _normalize_whitespace(text)
            for text in (scene.get_text() for scene in document.select("li.scene"))
            if "in the Chair" in text
        ),
        "[Speaker information not found]",
    )

    return HansardDetail(
        house=house,
        date=date,
        start_time=start_time,
        end_time=None,
        parliament_number=parliament_number,
        session_number=session_number,
        session_type=session_type,
        speaker_in_chair=speaker_in_chair,
        sections=_parse_sections(document),
    )


def parse_person_details(html: str, url: str) -> PersonDetails:
    """Parse a member's profile page; the slug is the last URL segment."""
    slug = url.rstrip("/").split("/")[-1]
    document = _soup(html)

    heading = document.select_one("h1")
    if heading is None:
        raise MissingFieldError("name")
    name = _normalize_whitespace(heading.get_text())

    summary = None
    for paragraph in document.select("p"):
        text = paragraph.get_text()
        if text.strip() and "Email" not in text and "Telephone" not in text and "@" not in text:
            summary = _normalize_whitespace(text)
            break

    party = party_url = None
    membership = document.select_one(".party-membership")
    if membership is not None:
        party = _normalize_whitespace(membership.get_text())
        party_url = membership.get("href")

    email = None
    mail_link = document.select_one("a[href^='mailto:']")
    if mail_link is not None:
        email = _strip_prefix_repeatedly(mail_link.get("href", ""), "mailto:")

    telephone = None
    tel_link = document.select_one("a[href^='tel:']")
    if tel_link is not None:
        telephone = _strip_prefix_repeatedly(tel_link.get("href", ""), "tel:")

    position = document.select_one(".position.ongoing h4")
    place = document.select_one(".position.ongoing a[href^='/place/']")

    return PersonDetails(
        name=name,
        slug=slug,
        summary=summary,
        party=party,
        party_url=party_url,
        email=email,
        telephone=telephone,
        current_position=None if position is None else _normalize_whitespace(position.get_text()),
        constituency=None if place is None else _normalize_whitespace(place.get_text()),
    )


def _parse_hansard_entry(url: str, display_text: str) -> HansardListing:
    parts = _url_parts(url)
    if len(parts) < 4:
        raise UrlParseError(f"URL has insufficient parts: {url}")
    house = House.from_str(parts[-2])
    date, start_time, end_time = parse_date_time(parts[-1], display_text)
    full_url = url if url.startswith("http") else f"{BASE_URL}{url}"
    return HansardListing(
        house=house,
        date=date,
        start_time=start_time,
        end_time=end_time,
        url=full_url,
        display_text=display_text,
    )


def parse_date_time(
    value: str, display_text: str
) -> tuple[dt.date, dt.time | None, dt.time | None]:
    """Parse 'YYYY-MM-DD[-HH-MM-SS]' and an optional 'to HH:MM' end time."""
    parts = value.split("-")
    if len(parts) < 3:
        raise DateParseError(f"Invalid date format: {value}")

    def unsigned(text: str, label: str) -> int:
        number = _parse_unsigned(text)
        if number is None:
            raise DateParseError(f"Invalid {label}: {text}")
        return number

    year = _parse_signed(parts[0])
    if year is None:
        raise DateParseError(f"Invalid year: {parts[0]}")
    month = unsigned(parts[1], "month")
    day = unsigned(parts[2], "day")
    try:
        date = dt.date(year, month, day)
    except ValueError:
        raise DateParseError(f"Invalid date: {year}-{month}-{day}") from None

    start_time = None
    if len(parts) >= 6:
        hour = unsigned(parts[3], "hour")
        minute = unsigned(parts[4], "minute")
        second = unsigned(parts[5], "second")
        try:
            start_time = dt.time(hour, minute, second)
        except ValueError:
            raise TimeParseError(f"Invalid time: {hour}:{minute}:{second}") from None

    return date, start_time, _parse_end_time(display_text)


def _parse_end_time(display_text: str) -> dt.time | None:
    match = _RE_END_TIME.search(display_text)
    if match is None:
        return None
    hour = _parse_unsigned(match.group(1))
    if hour is None:
        raise TimeParseError(f"Invalid end hour: {match.group(1)}")
    minute = _parse_unsigned(match.group(2))
    if minute is None:
        raise TimeParseError(f"Invalid end minute: {match.group(2)}")
    try:
        return dt.time(hour, minute, 0)
    except ValueError:
        raise TimeParseError(f"Invalid end time: {hour}:{minute}") from None


def _parse_sections(document: BeautifulSoup) -> list[HansardSection]:
    sections: list[HansardSection] = []
    current: HansardSection | None = None

    for element in document.select("li.heading, li.speech, li.scene"):
        css_class = " ".join(element.get("class", []))
        if "heading" in css_class:
            if current is not None:
                sections.append(current)
                current = None
            heading = _normalize_whitespace(element.get_text())
            if any(word in heading for word in _HOUSE_HEADINGS):
                continue
            current = HansardSection(section_type=heading)
        elif "speech" in css_class:
            if current is not None:
                try:
                    current.contributions.append(_parse_contribution(element))
                except ParseError:
                    pass
        elif "scene" in css_class and current is not None:
            scene = _normalize_whitespace(element.get_text())
            if scene and current.contributions:
                current.contributions[-1].procedural_notes.append(scene)

    if current is not None:
        sections.append(current)
    return sections


def _parse_contribution(element: Tag) -> Contribution:
    strong = element.select_one("strong")
    if strong is None:
        raise MissingFieldError("speaker name")
    link = strong.select_one("a")
    if link is not None:
        speaker_name = _normalize_whitespace(link.get_text())
        speaker_url = link.get("href")
    else:
        speaker_name = _normalize_whitespace(strong.get_text())
        speaker_url = None

    paragraphs = element.select("p")
    content_text = "".join(p.get_text() for p in paragraphs)
    header_text = element.get_text().replace(strong.get_text(), "").replace(content_text, "")
    speaker_role = _extract_parenthesized(header_text)

    # Hansard authors are inconsistent about where the name and the role go:
    # "<strong>Hon. X</strong> (The Speaker)", "<strong>The Speaker (Hon. X)</strong>"
    # and "<strong>Mwala, UDA</strong> (Hon. X)" all occur.
    if speaker_role is not None:
        name_is_constituency = bool(
            _RE_CONSTITUENCY.match(speaker_name)
        ) and not _RE_NAME_PREFIX.match(speaker_name)
        if name_is_constituency and _RE_NAME_PREFIX.match(speaker_role):
            speaker_name, speaker_role = speaker_role, speaker_name

    if speaker_role is not None:
        if _RE_NAME_PREFIX.match(speaker_role) and _RE_ROLE_PREFIX.match(speaker_name):
            speaker_name, speaker_role = speaker_role, speaker_name

    if speaker_role is None:
        match = _RE_NAME_IN_PARENS.fullmatch(speaker_name)
        if match:
            outer = match.group(1).strip()
            inner = match.group(2).strip()
            if _RE_NAME_PREFIX.match(inner) and _RE_ROLE_PREFIX.match(outer):
                speaker_name, speaker_role = inner, outer

    content = "\n\n".join(_normalize_whitespace(p.get_text()) for p in paragraphs)

    return Contribution(
        speaker_name=speaker_name,
        speaker_role=speaker_role,
        speaker_url=speaker_url,
        speaker_details=None,
        content=content,
        procedural_notes=[],
    )