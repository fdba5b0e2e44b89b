import asyncio
import socket

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


def make_app(delay: float = 0.0) -> web.Application:
    app = web.Application()
    app["hits"] = 0
    app["inflight"] = 0
    app["peak"] = 0

    async def ok(request: web.Request) -> web.Response:
        return web.Response(text="ok")

    async def teapot(request: web.Request) -> web.Response:
        return web.Response(status=418, text="short and stout")

    async def alternating(request: web.Request) -> web.Response:
        app["hits"] += 1
        status = 200 if app["hits"] % 2 else 500
        return web.Response(status=status, text=str(app["hits"]))

    async def slow(request: web.Request) -> web.Response:
        app["inflight"] += 1
        app["peak"] = max(app["peak"], app["inflight"])
        try:
            await asyncio.sleep(delay)
        finally:
            app["inflight"] -= 1
        return web.Response(text="slow")

    async def trickle(request: web.Request) -> web.StreamResponse:
        resp = web.StreamResponse()
        await resp.prepare(request)
        await resp.write(b"first ")
        await asyncio.sleep(delay)
        await resp.write(b"last")
        await resp.write_eof()
        return resp

    app.router.add_get("/ok", ok)
    app.router.add_get("/trickle", trickle)
    app.router.add_get("/teapot", teapot)
    app.router.add_get("/alternating", alternating)
    app.router.add_get("/slow", slow)
    return app


async def serve(app: web.Application, fn):
    """Run ``fn(server)`` while ``app`` is listening on a local port."""
    async with TestServer(app) as server:
        return await fn(server)


@pytest.fixture
def closed_port_url() -> str:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/"
