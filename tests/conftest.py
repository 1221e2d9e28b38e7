"""Shared fixtures: settings, a fake clock and a stubbed upstream network."""

from __future__ import annotations

import asyncio
import random
from collections import Counter
from typing import Any, Callable

import httpx
import pytest

from orbitiq.config import Settings
from orbitiq.designator_cache import DesignatorCache
from orbitiq.pipeline import PositionPipeline

API_KEY = "test-n2yo-key-0123456789"

ISS_LINE1 = "1 25544U 98067A   24001.50000000  .00016717  00000-0  10270-3 0  9003"
ISS_LINE2 = "2 25544  51.6400 208.5000 0007417  68.0000 292.1000 15.49560000400000"

STARLINK_LINE1 = "1 44713U 19074A   24001.50000000  .00001264  00000-0  10270-3 0  9991"
STARLINK_LINE2 = "2 44713  53.0536 100.0000 0001400  90.0000 270.0000 15.06400000 10000"

# Handlers may also be async; MockTransport awaits them.
Handler = Callable[[httpx.Request], Any]

# Clients handed out by Upstream.client(), closed after each test.
_open_clients: list[httpx.AsyncClient] = []


def run(coro):
    return asyncio.run(coro)


def json_reply(data, status: int = 200) -> Handler:
    return lambda request: httpx.Response(status, json=data)


def text_reply(text: str, status: int = 200) -> Handler:
    return lambda request: httpx.Response(status, text=text)


def timeout_reply(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectTimeout("timed out", request=request)


def slow_reply(delay: float, status: int = 503) -> Handler:
    async def reply(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delay)
        return httpx.Response(status, text="busy")

    return reply


def upstream_kind(request: httpx.Request) -> str:
    url = request.url
    if url.host == "api.n2yo.com":
        if "/tle/" in url.path:
            return "n2yo-tle"
        return "n2yo-above" if "/above/" in url.path else "n2yo-positions"
    if url.host == "celestrak.org":
        group = url.params.get("GROUP")
        return f"group-{group}" if group else "celestrak"
    if url.host == "api.open-notify.org":
        return "open-notify"
    return "unknown"


class Upstream:
    """MockTransport handler dispatching on upstream kind; unknown kinds 404."""

    def __init__(self, replies: dict[str, Handler] | None = None):
        self.replies = replies or {}
        self.hits: Counter[str] = Counter()
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        kind = upstream_kind(request)
        self.hits[kind] += 1
        self.requests.append(request)
        reply = self.replies.get(kind)
        if reply is None:
            return httpx.Response(404, text="not found")
        return reply(request)

    def client(self) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        _open_clients.append(client)
        return client


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def n2yo_positions(
    lat: float = 51.6,
    lon: float = -0.1,
    alt: float = 408.0,
    velocity: float | None = None,
    satname: str = "SPACE STATION",
    intldes: str | None = None,
    timestamp: int = 1700000000,
) -> dict:
    fix = {
        "satlatitude": lat,
        "satlongitude": lon,
        "sataltitude": alt,
        "azimuth": 10.0,
        "elevation": -20.0,
        "timestamp": timestamp,
    }
    if velocity is not None:
        fix["velocity"] = velocity
    info = {"satname": satname, "satid": 25544, "transactionscount": 1}
    if intldes is not None:
        info["intldes"] = intldes
    return {"info": info, "positions": [fix]}


@pytest.fixture(autouse=True)
def close_http_clients():
    yield
    while _open_clients:
        run(_open_clients.pop().aclose())


@pytest.fixture
def keyed_settings() -> Settings:
    return Settings(n2yo_api_key=API_KEY)


@pytest.fixture
def keyless_settings() -> Settings:
    return Settings(n2yo_api_key="")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_pipeline(
    upstream: Upstream,
    settings: Settings,
    cache: DesignatorCache | None = None,
    seed: int = 7,
) -> PositionPipeline:
    return PositionPipeline.create(
        settings, upstream.client(), cache=cache, rng=random.Random(seed)
    )
