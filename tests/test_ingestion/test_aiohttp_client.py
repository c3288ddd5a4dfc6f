"""
Tests for AiohttpClient against a local aiohttp test server.
"""

import asyncio

import pytest
from aiohttp import test_utils, web

from token_merge.ingestion.config.value_objects import HttpClientConfig
from token_merge.ingestion.connectors.aiohttp_client import AiohttpClient


async def markets_handler(request: web.Request) -> web.Response:
    ids = request.query.get("ids", "").split(",")
    return web.json_response(
        [{"id": i, "seen_key": request.headers.get("x-cg-pro-api-key")} for i in ids]
    )


async def failing_handler(request: web.Request) -> web.Response:
    return web.Response(status=500, text="upstream exploded")


async def slow_handler(request: web.Request) -> web.Response:
    await asyncio.sleep(0.5)
    return web.json_response([])


def make_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/coins/markets", markets_handler)
    app.router.add_get("/broken", failing_handler)
    app.router.add_get("/slow", slow_handler)
    return app


@pytest.mark.asyncio
async def test_get_decodes_json_body():
    async with test_utils.TestServer(make_app()) as server:
        async with AiohttpClient(HttpClientConfig(timeout=5.0)) as client:
            resp = await client.get(
                str(server.make_url("/coins/markets")),
                params={"vs_currency": "USD", "ids": "polkadot,kusama"},
                headers={"x-cg-pro-api-key": "k"},
            )

    assert resp.ok
    assert [item["id"] for item in resp.body] == ["polkadot", "kusama"]
    assert resp.body[0]["seen_key"] == "k"


@pytest.mark.asyncio
async def test_error_status_keeps_text_body():
    async with test_utils.TestServer(make_app()) as server:
        async with AiohttpClient(HttpClientConfig(timeout=5.0)) as client:
            resp = await client.get(str(server.make_url("/broken")))

    assert resp.status_code == 500
    assert not resp.ok
    assert resp.body == "upstream exploded"


@pytest.mark.asyncio
async def test_timeout_raises():
    async with test_utils.TestServer(make_app()) as server:
        async with AiohttpClient(HttpClientConfig(timeout=5.0)) as client:
            with pytest.raises(asyncio.TimeoutError):
                await client.get(str(server.make_url("/slow")), timeout=0.05)


@pytest.mark.asyncio
async def test_close_is_idempotent():
    client = AiohttpClient(HttpClientConfig())
    await client.close()
    await client.close()
