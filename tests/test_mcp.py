import asyncio
import json

import httpx
import pytest

from odnelazm.mcp import McpError, McpServer
from odnelazm.scraper import WebScraper

BASE = "https://hansard.test"

LISTING_HTML = """
<ul class="listing">
  <li><a href="https://info.mzalendo.com/hansard/sitting/senate/2025-07-17">Senate 2025-07-17</a></li>
  <li><a href="https://info.mzalendo.com/hansard/sitting/senate/2025-07-16">Senate 2025-07-16</a></li>
  <li><a href="https://info.mzalendo.com/hansard/sitting/national_assembly/2025-07-01-14-30-00">National Assembly 2025-07-01: 14:30 to 18:42</a></li>
</ul>
"""

DETAIL_HTML = """
<h2>THE PARLIAMENT OF KENYA</h2>
<h2>Fourth Session</h2>
<ul>
  <li class="heading">PRAYERS</li>
  <li class="speech"><strong><a href="/person/jane-doe/">Hon. Jane Doe</a></strong><p>Thank you.</p></li>
</ul>
"""

PERSON_HTML = """
<h1>Jane Doe</h1>
<p>Senator for a county.</p>
<a href="mailto:jane@example.com">mail</a>
"""

SITTING_PATH = "/hansard/sitting/senate/2020-12-29-14-30-00"


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/hansard/":
        return httpx.Response(200, text=LISTING_HTML)
    if path == SITTING_PATH:
        return httpx.Response(200, text=DETAIL_HTML)
    if path == "/person/jane-doe/":
        return httpx.Response(200, text=PERSON_HTML)
    return httpx.Response(404, text="missing")


def _server(handler=_handler) -> McpServer:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return McpServer(WebScraper(base_url=BASE, client=client))


def _failing(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, text="boom")


@pytest.mark.asyncio
async def test_list_sittings_filters_by_house():
    result = json.loads(await _server().list_sittings({"house": "senate"}))
    assert [item["house"] for item in result] == ["senate", "senate"]
    assert result[0]["date"] == "2025-07-17"


@pytest.mark.asyncio
async def test_list_sittings_without_params_returns_all():
    result = json.loads(await _server().list_sittings({}))
    assert len(result) == 3
    assert result[2]["start_time"] == "14:30:00"


@pytest.mark.asyncio
async def test_list_sittings_limit_and_offset():
    result = json.loads(await _server().list_sittings({"offset": 1, "limit": 1}))
    assert [item["date"] for item in result] == ["2025-07-16"]


@pytest.mark.asyncio
async def test_list_sittings_rejects_reversed_dates():
    with pytest.raises(McpError) as info:
        await _server().list_sittings(
            {"start_date": "2025-07-17", "end_date": "2025-07-01"}
        )
    assert info.value.code == -32602
    assert "cannot be after" in info.value.message


@pytest.mark.asyncio
async def test_list_sittings_rejects_zero_offset():
    with pytest.raises(McpError) as info:
        await _server().list_sittings({"offset": 0})
    assert info.value.message == "Offset must be greater than 0"


@pytest.mark.asyncio
async def test_list_sittings_fetch_failure_is_internal_error():
    with pytest.raises(McpError) as info:
        await _server(_failing).list_sittings({})
    assert info.value.code == -32603
    assert info.value.message.startswith("Failed to fetch hansard list")


@pytest.mark.asyncio
async def test_get_sitting_renders_transcript():
    text = await _server().get_sitting(SITTING_PATH, False)
    assert text.startswith("┌─ Senate ─ 2020-12-29")
    assert "Hon. Jane Doe" in text
    assert "Thank you." in text


@pytest.mark.asyncio
async def test_get_sitting_with_speakers_includes_profile():
    text = await _server().get_sitting(SITTING_PATH, True)
    assert "jane@example.com" in text


@pytest.mark.asyncio
async def test_get_sitting_missing_page_is_internal_error():
    with pytest.raises(McpError) as info:
        await _server().get_sitting("/hansard/sitting/senate/2020-01-01", False)
    assert info.value.code == -32603
    assert info.value.message.startswith("Failed to fetch sitting")


@pytest.mark.asyncio
async def test_get_person_renders_profile():
    text = await _server().get_person("/person/jane-doe/")
    assert text.startswith("Jane Doe")
    assert "jane@example.com" in text


@pytest.mark.asyncio
async def test_initialize_reports_tools_capability():
    response = await _server().handle_message(
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}
    )
    assert response["id"] == 1
    assert "tools" in response["result"]["capabilities"]


@pytest.mark.asyncio
async def test_notification_gets_no_response():
    response = await _server().handle_message(
        {"jsonrpc": "2.0", "method": "notifications/initialized"}
    )
    assert response is None


@pytest.mark.asyncio
async def test_tools_list_names():
    response = await _server().handle_message(
        {"jsonrpc": "2.0", "id": 2, "method": "tools/list"}
    )
    names = {tool["name"] for tool in response["result"]["tools"]}
    assert names == {"list_sittings", "get_sitting", "get_person"}


@pytest.mark.asyncio
async def test_tools_call_list_sittings():
    response = await _server().handle_message(
        {
            "jsonrpc": "2.0",
            "id": 3,
            "method": "tools/call",
            "params": {"name": "list_sittings", "arguments": {"house": "national_assembly"}},
        }
    )
    content = response["result"]["content"]
    listings = json.loads(content[0]["text"])
    assert [item["house"] for item in listings] == ["national_assembly"]


@pytest.mark.asyncio
async def test_tools_call_unknown_tool():
    response = await _server().handle_message(
        {"jsonrpc": "2.0", "id": 4, "method": "tools/call", "params": {"name": "nope"}}
    )
    assert response["error"]["code"] == -32602


@pytest.mark.asyncio
async def test_tools_call_get_sitting_requires_fetch_speakers():
    response = await _server().handle_message(
        {
            "jsonrpc": "2.0",
            "id": 5,
            "method": "tools/call",
            "params": {"name": "get_sitting", "arguments": {"url_or_slug": SITTING_PATH}},
        }
    )
    assert response["error"]["code"] == -32602
    assert "fetch_speakers" in response["error"]["message"]


@pytest.mark.asyncio
async def test_unknown_method():
    response = await _server().handle_message(
        {"jsonrpc": "2.0", "id": 6, "method": "resources/list"}
    )
    assert response["error"]["code"] == -32601


class _Writer:
    def __init__(self):
        self.data = b""

    def write(self, chunk):
        self.data += chunk

    async def drain(self):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_serve_stdio_answers_each_line():
    reader = asyncio.StreamReader()
    reader.feed_data(b'{"jsonrpc": "2.0", "id": 7, "method": "ping"}\n')
    reader.feed_data(b'{"jsonrpc": "2.0", "method": "notifications/initialized"}\n')
    reader.feed_data(b"not json\n")
    reader.feed_eof()
    writer = _Writer()

    await _server().serve_stdio(reader, writer)

    responses = [json.loads(line) for line in writer.data.decode().splitlines()]
    assert len(responses) == 2
    assert responses[0] == {"jsonrpc": "2.0", "id": 7, "result": {}}
    assert responses[1]["error"]["code"] == -32700