# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient against a local aiohttp server."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from aiohttp import test_utils, web

from slack_release_notify.clients.http import AsyncHttpClient
from slack_release_notify.config.config import ApiSettings, Settings
from slack_release_notify.exceptions import RateLimitError, UpstreamAPIError


def _app(hits: dict[str, int]) -> web.Application:
    app = web.Application()

    async def ok(request: web.Request) -> web.Response:
        return web.json_response(
            {"page": request.query.get("page"), "auth": request.headers.get("Authorization")}
        )

    async def flaky(request: web.Request) -> web.Response:
        hits["flaky"] += 1
        if hits["flaky"] == 1:
            return web.Response(status=503)
        return web.json_response([1, 2, 3])

    async def missing(request: web.Request) -> web.Response:
        return web.Response(status=404)

    async def broken(request: web.Request) -> web.Response:
        return web.Response(status=500)

    async def limited(request: web.Request) -> web.Response:
        return web.Response(status=429, headers={"Retry-After": "0"})

    app.router.add_get("/ok", ok)
    app.router.add_get("/flaky", flaky)
    app.router.add_get("/missing", missing)
    app.router.add_get("/broken", broken)
    app.router.add_get("/limited", limited)
    return app


@pytest.fixture
def hits() -> dict[str, int]:
    """Request counters per route."""
    return {"flaky": 0}


@pytest.fixture
async def server(hits: dict[str, int]) -> AsyncIterator[test_utils.TestServer]:
    test_server = test_utils.TestServer(_app(hits))
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest.fixture
async def http_client() -> AsyncIterator[AsyncHttpClient]:
    client = AsyncHttpClient(Settings(api=ApiSettings(max_retries=3, timeout_seconds=5)))
    # no real waiting between attempts
    setattr(client, "_backoff_delay", lambda attempt: 0.0)
    async with client:
        yield client


def _url(server: test_utils.TestServer, path: str) -> str:
    return str(server.make_url(path))


async def test_get_returns_json_with_params_and_headers(
    server: test_utils.TestServer,
    http_client: AsyncHttpClient,
) -> None:
    data = await http_client.get(
        _url(server, "/ok"), params={"page": "2"}, headers={"Authorization": "Bearer t"}
    )

    assert data == {"page": "2", "auth": "Bearer t"}


async def test_get_retries_server_errors(
    server: test_utils.TestServer,
    hits: dict[str, int],
    http_client: AsyncHttpClient,
) -> None:
    data = await http_client.get(_url(server, "/flaky"))

    assert data == [1, 2, 3]
    assert hits["flaky"] == 2


async def test_get_client_error_fails_immediately(
    server: test_utils.TestServer,
    http_client: AsyncHttpClient,
) -> None:
    with pytest.raises(UpstreamAPIError) as exc_info:
        await http_client.get(_url(server, "/missing"))

    assert exc_info.value.status_code == 404


async def test_get_gives_up_after_max_retries(
    server: test_utils.TestServer,
    http_client: AsyncHttpClient,
) -> None:
    with pytest.raises(UpstreamAPIError, match="after 3 attempts") as exc_info:
        await http_client.get(_url(server, "/broken"))

    assert exc_info.value.status_code == 500


async def test_get_rate_limit_exhausted(
    server: test_utils.TestServer,
    http_client: AsyncHttpClient,
) -> None:
    with pytest.raises(RateLimitError) as exc_info:
        await http_client.get(_url(server, "/limited"))

    assert exc_info.value.status_code == 429
