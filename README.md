# odnelazm

Fetch and read the hansard of the Kenyan Parliament (Senate and National
Assembly) as published on Mzalendo. The package turns the listing of
sittings and each sitting's transcript into plain Python objects: sections,
contributions, speakers and the procedural notes that follow them. It can
also look up the profile page of each speaker.

It comes with:

- a library, built on `httpx` and `beautifulsoup4`;
- the `odnelazm` command for the terminal;
- the `odnelazm-mcp` command, an MCP server over standard input and output
  so that an LLM client can query sittings.

## Installing

```
pip install odnelazm
```

Python 3.10 or later is required.

## Command line

List the sittings, in the order the site gives them:

```
odnelazm list
odnelazm list --house senate --limit 5
odnelazm list --start-date 2025-07-01 --end-date 2025-07-31 --offset 2
odnelazm list -o json
```

Options of `list`:

| Option | Meaning |
| --- | --- |
| `--limit N` | at most N results (1 to 65535); all results when left out |
| `--offset N` | skip the first N results (1 to 65535) |
| `--start-date YYYY-MM-DD` | only sittings on or after this date |
| `--end-date YYYY-MM-DD` | only sittings on or before this date |
| `--house senate\|national_assembly` | only one house |
| `-o, --output text\|json` | output format, `text` by default |

A start date after the end date is rejected. Text output numbers each
sitting, shows its time range when known, and ends with a count of Senate and
National Assembly sittings; with no matches it prints `No entries to display.`

Fetch the full transcript of one sitting, by full URL or by path on the site:

```
odnelazm detail /hansard/sitting/senate/2020-12-29-14-30-00
odnelazm detail /hansard/sitting/senate/2020-12-29-14-30-00 -o json
odnelazm detail /hansard/sitting/senate/2020-12-29-14-30-00 --fetch-speakers
```

`--fetch-speakers` also loads each speaker's profile page (party, position,
constituency, contact details) and attaches it to their contributions. A
profile that cannot be fetched is logged and left out.

Every command takes `-l, --log-level` with one of `off`, `error`, `warn`,
`info` (the default), `debug` or `trace`. Errors while fetching or parsing,
and inconsistent filters, are logged and the command exits with status 1.

## Library

```python
import asyncio
from datetime import date

from odnelazm.scraper import WebScraper
from odnelazm.types import House
from odnelazm.utils import ListingFilter, ListingStats


async def main():
    async with WebScraper() as scraper:
        listings = await scraper.fetch_hansard_list()

        wanted = ListingFilter(
            start_date=date(2025, 7, 1),
            house=House.SENATE,
            limit=3,
        ).validate()
        for listing in wanted.apply(listings):
            print(listing)
        print(ListingStats.from_listings(listings))

        detail = await scraper.fetch_hansard_detail(
            "/hansard/sitting/senate/2020-12-29-14-30-00",
            fetch_speakers=False,
        )
        for section in detail.sections:
            for contribution in section.contributions:
                print(contribution.speaker_name, contribution.speaker_role)

        person = await scraper.fetch_person_details("/person/example-member/")
        print(person)


asyncio.run(main())
```

`WebScraper` takes an optional `base_url` and an optional `httpx.AsyncClient`
of your own; a client it creates itself is closed by `aclose()` or on leaving
the `async with` block.

`ListingFilter()` with no arguments keeps at most 10 listings;
`ListingFilter.from_mapping(data)` builds one from JSON-style data, where a
missing key means no criterion (and so no limit). `validate()` raises
`ValueError` when the start date is after the end date or when the offset or
limit is 0.

The objects (`HansardListing`, `HansardDetail`, `HansardSection`,
`Contribution`, `PersonDetails`) print in a readable form and convert to
JSON-ready dictionaries with `to_dict()`. `House.from_str("senate")` and
`House.from_str("national_assembly")` parse the names used in URLs.

The parsing functions work on HTML you already have:

```python
from odnelazm.parser import (
    parse_date_time,
    parse_hansard_detail,
    parse_hansard_list,
    parse_person_details,
)
```

Every error the package raises is a subclass of
`odnelazm.errors.ScraperError`: `HttpError` for network failures and error
status codes, and `ParseError` with its subclasses `UrlParseError`,
`DateParseError`, `TimeParseError`, `InvalidHouseError` and
`MissingFieldError` for pages and URLs that do not have the expected shape.
Listing entries that cannot be parsed are skipped with a warning.

## MCP server

```
odnelazm-mcp
odnelazm-mcp --log-level info
```

starts an MCP server speaking newline-delimited JSON-RPC over standard input
and output; logs go to standard error (`-l, --log-level` takes `error`,
`warn`, `info` or `debug`, the default). It offers three tools:

- `list_sittings` – the sitting listing, with optional `start_date`,
  `end_date`, `house`, `limit` and `offset`; returns JSON.
- `get_sitting` – the text transcript of a sitting, given `url_or_slug` and
  `fetch_speakers`.
- `get_person` – a speaker's profile as text, given `url_or_slug`.

Point your MCP client at the `odnelazm-mcp` command to use it. From Python,
`odnelazm.mcp.McpServer` handles single messages with `handle_message()` and
serves a reader and writer pair with `serve_stdio()`.

## What it does not do

The MCP server only speaks over standard input and output; there is no HTTP
transport for it.

## Running the tests

```
pip install "odnelazm[test]"
pytest
```