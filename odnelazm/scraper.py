"""Asynchronous HTTP client that fetches and parses hansard pages."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

import httpx

from odnelazm.errors import HttpError, MissingFieldError, ScraperError
from odnelazm.parser import (
    parse_hansard_detail,
    parse_hansard_list,
    parse_person_details,
)
from odnelazm.types import BASE_URL, HansardDetail, HansardListing, PersonDetails

log = logging.getLogger(__name__)

USER_AGENT = "odnelazm/1.0.0-beta.3"
REQUEST_TIMEOUT = 30.0


class WebScraper:
    """Fetches listings, sitting transcripts and member profiles."""

    def __init__(
        self, base_url: str = BASE_URL, client: httpx.AsyncClient | None = None
    ) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )

    async def __aenter__(self) -> WebScraper:
        return self

    async def __aexit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this scraper created it."""
        if self._owns_client:
            await self._client.aclose()

    def _resolve(self, url_or_slug: str) -> str:
        if url_or_slug.startswith("http"):
            return url_or_slug
        return f"{self.base_url}{url_or_slug}"

    async def _get_text(self, url: str) -> str:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPError as exc:
            log.error("HTTP error: %r", exc)
            raise HttpError(exc) from exc

    async def fetch_hansard_list(self) -> list[HansardListing]:
        """Fetch and parse the index of available sittings."""
        log.info("Fetching hansard listings...")
        html = await self._get_text(f"{self.base_url}/hansard/")
        return parse_hansard_list(html)

    async def fetch_hansard_detail(
        self, url_or_slug: str, fetch_speakers: bool = False
    ) -> HansardDetail:
        """Fetch a sitting transcript, optionally with each speaker's profile."""
        url = self._resolve(url_or_slug)
        log.info("Fetching hansard details...")
        html = await self._get_text(url)
        sitting = parse_hansard_detail(html, url)

        if not fetch_speakers:
            log.info("Nested speaker profile fetch skipped")
            return sitting

        contributions = [
            contribution
            for section in sitting.sections
            for contribution in section.contributions
        ]
        speaker_urls = sorted(
            {c.speaker_url for c in contributions if c.speaker_url is not None}
        )
        if not speaker_urls:
            return sitting

        log.info("Fetching %d speaker profiles...", len(speaker_urls))
        results = await asyncio.gather(
            *(self._try_fetch_person(speaker_url) for speaker_url in speaker_urls)
        )
        speakers = {
            speaker_url: details
            for speaker_url, details in zip(speaker_urls, results)
            if details is not None
        }

        for contribution in contributions:
            if contribution.speaker_url is not None:
                contribution.speaker_details = speakers.get(contribution.speaker_url)

        log.info("Successfully fetched %d speaker profiles", len(speakers))
        return sitting

    async def _try_fetch_person(self, url: str) -> PersonDetails | None:
        try:
            return await self.fetch_person_details(url)
        except ScraperError as exc:
            log.warning("Failed to fetch speaker %s: %s", url, exc)
            return None

    async def fetch_person_details(self, url_or_slug: str) -> PersonDetails:
        """Fetch and parse a member's profile page."""
        url = self._resolve(url_or_slug)
        html = await self._get_text(url)
        if not html.strip():
            raise MissingFieldError(f"Empty response for {url}")
        return parse_person_details(html, url)