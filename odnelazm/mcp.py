"""Model Context Protocol server exposing hansard tools over JSON-RPC."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from odnelazm.errors import ScraperError
from odnelazm.scraper import WebScraper
from odnelazm.utils import ListingFilter

log = logging.getLogger(__name__)

SERVER_NAME = "odnelazm-mcp"
SERVER_VERSION = "1.0.0-beta.1"
DEFAULT_PROTOCOL_VERSION = "2025-03-26"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

_NULLABLE_DATE = {"type": ["string", "null"], "format": "date"}
_NULLABLE_COUNT = {"type": ["integer", "null"], "minimum": 0}

TOOLS: list[dict[str, Any]] = [
    {
        "name": "list_sittings",
        "description": (
            "List available parliamentary sittings with optional filtering and "
            "pagination."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "start_date": _NULLABLE_DATE,
                "end_date": _NULLABLE_DATE,
                "house": {
                    "type": ["string", "null"],
                    "enum": ["senate", "national_assembly", None],
                },
                "limit": _NULLABLE_COUNT,
                "offset": _NULLABLE_COUNT,
            },
        },
    },
    {
        "name": "get_sitting",
        "description": (
            "Fetch the full transcript of a sitting including sections, "
            "contributions and procedural notes"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "url_or_slug": {"type": "string"},
                "fetch_speakers": {"type": "boolean"},
            },
            "required": ["url_or_slug", "fetch_speakers"],
        },
    },
    {
        "name": "get_person",
        "description": "Fetch speaker details from person profile pages",
        "inputSchema": {
            "type": "object",
            "properties": {"url_or_slug": {"type": "string"}},
            "required": ["url_or_slug"],
        },
    },
]


class McpError(Exception):
    """An error reported to the client as a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    @classmethod
    def invalid_params(cls, message: str, data: Any = None) -> McpError:
        return cls(INVALID_PARAMS, message, data)

    @classmethod
    def internal_error(cls, message: str, data: Any = None) -> McpError:
        return cls(INTERNAL_ERROR, message, data)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


def _require(arguments: Mapping[str, Any], key: str, kind: type) -> Any:
    if key not in arguments:
        raise McpError.invalid_params(f"missing field `{key}`")
    value = arguments[key]
    if not isinstance(value, kind):
        raise McpError.invalid_params(f"field `{key}` must be of type {kind.__name__}")
    return value


class McpServer:
    """Serves the list_sittings, get_sitting and get_person tools."""

    def __init__(self, scraper: WebScraper | None = None) -> None:
        self.scraper = scraper if scraper is not None else WebScraper()
        self._tools: dict[str, Callable[[Mapping[str, Any]], Awaitable[str]]] = {
            "list_sittings": self._call_list_sittings,
            "get_sitting": self._call_get_sitting,
            "get_person": self._call_get_person,
        }

    async def list_sittings(self, params: Mapping[str, Any] | None = None) -> str:
        """Return the filtered listings as pretty-printed JSON."""
        try:
            filters = ListingFilter.from_mapping(params or {}).validate()
        except ValueError as exc:
            log.error("Invalid params: %s", exc)
            raise McpError.invalid_params(str(exc)) from exc

        try:
            listings = await self.scraper.fetch_hansard_list()
        except ScraperError as exc:
            log.error("Failed to fetch hansard list: %r", exc)
            raise McpError.internal_error(
                f"Failed to fetch hansard list: {exc!r}"
            ) from exc

        selected = filters.apply(listings)
        return json.dumps(
            [listing.to_dict() for listing in selected], indent=2, ensure_ascii=False
        )

    async def get_sitting(self, url_or_slug: str, fetch_speakers: bool) -> str:
        """Return the text rendering of a sitting transcript."""
        try:
            sitting = await self.scraper.fetch_hansard_detail(
                url_or_slug, fetch_speakers
            )
        except ScraperError as exc:
            log.error("Failed to fetch hansard detail: %s", exc)
            raise McpError.internal_error(f"Failed to fetch sitting: {exc}") from exc
        return str(sitting)

    async def get_person(self, url_or_slug: str) -> str:
        """Return the text rendering of a member's profile."""
        try:
            person = await self.scraper.fetch_person_details(url_or_slug)
        except ScraperError as exc:
            raise McpError.internal_error(f"Failed to fetch sitting: {exc}") from exc
        return str(person)

    async def _call_list_sittings(self, arguments: Mapping[str, Any]) -> str:
        return await self.list_sittings(arguments)

    async def _call_get_sitting(self, arguments: Mapping[str, Any]) -> str:
        url_or_slug = _require(arguments, "url_or_slug", str)
        fetch_speakers = _require(arguments, "fetch_speakers", bool)
        return await self.get_sitting(url_or_slug, fetch_speakers)

    async def _call_get_person(self, arguments: Mapping[str, Any]) -> str:
        return await self.get_person(_require(arguments, "url_or_slug", str))

    async def _dispatch(self, method: str, params: Mapping[str, Any]) -> Any:
        if method == "initialize":
            requested = params.get("protocolVersion")
            return {
                "protocolVersion": (
                    requested if isinstance(requested, str) else DEFAULT_PROTOCOL_VERSION
                ),
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            }
        if method == "ping":
            return {}
        if method == "tools/list":
            return {"tools": TOOLS}
        if method == "tools/call":
            name = params.get("name")
            tool = self._tools.get(name) if isinstance(name, str) else None
            if tool is None:
                raise McpError.invalid_params(f"tool not found: {name}")
            arguments = params.get("arguments") or {}
            if not isinstance(arguments, Mapping):
                raise McpError.invalid_params("tool arguments must be an object")
            text = await tool(arguments)
            return {"content": [{"type": "text", "text": text}], "isError": False}
        raise McpError(METHOD_NOT_FOUND, f"Method not found: {method}")

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Handle one JSON-RPC message; notifications produce no response."""
        if not isinstance(message, Mapping) or not isinstance(
            message.get("method"), str
        ):
            request_id = message.get("id") if isinstance(message, Mapping) else None
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": McpError(INVALID_REQUEST, "Invalid request").to_dict(),
            }

        if "id" not in message:
            log.debug("Notification received: %s", message["method"])
            return None

        request_id = message["id"]
        params = message.get("params") or {}
        try:
            if not isinstance(params, Mapping):
                raise McpError.invalid_params("params must be an object")
            result = await self._dispatch(message["method"], params)
        except McpError as exc:
            return {"jsonrpc": "2.0", "id": request_id, "error": exc.to_dict()}
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    async def serve_stdio(self, reader: Any, writer: Any) -> None:
        """Serve newline-delimited JSON-RPC messages until the reader is exhausted."""
        while True:
            line = await reader.readline()
            if not line:
                break
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            if not line.strip():
                continue
            try:
                message = json.loads(line)
            except json.JSONDecodeError as exc:
                response: dict[str, Any] | None = {
                    "jsonrpc": "2.0",
                    "id": None,
                    "error": McpError(PARSE_ERROR, f"Parse error: {exc}").to_dict(),
                }
            else:
                response = await self.handle_message(message)
            if response is None:
                continue
            writer.write((json.dumps(response, ensure_ascii=False) + "\n").encode())
            drain = getattr(writer, "drain", None)
            if drain is not None:
                await drain()


class _StdinReader:
    async def readline(self) -> bytes:
        return await asyncio.to_thread(sys.stdin.buffer.readline)


class _StdoutWriter:
    def write(self, data: bytes) -> None:
        sys.stdout.buffer.write(data)

    async def drain(self) -> None:
        sys.stdout.buffer.flush()


async def _serve() -> None:
    async with WebScraper() as scraper:
        await McpServer(scraper).serve_stdio(_StdinReader(), _StdoutWriter())


def main(argv: Sequence[str] | None = None) -> int:
    """Run the MCP server over standard input and output."""
    parser = argparse.ArgumentParser(
        prog="odnelazm-mcp-local", description="Hansard MCP server over stdio"
    )
    parser.add_argument(
        "-l",
        "--log-level",
        choices=("error", "warn", "info", "debug"),
        default="debug",
        help="Set the logging level",
    )
    args = parser.parse_args(argv)
    level = {
        "error": logging.ERROR,
        "warn": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
    }[args.log_level]
    logging.basicConfig(level=level, stream=sys.stderr)

    log.info("Starting odnelazm MCP server")
    asyncio.run(_serve())
    return 0