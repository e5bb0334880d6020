# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""
Tests for the server runner against a real loopback socket.
"""

from __future__ import annotations

import asyncio
import os
import signal
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable

import httpx
import pytest
from fastapi import FastAPI

from servicekit.cli import bind_socket
from servicekit.common.errors import AppError, ServeError
from servicekit.common.exception_handlers import register_error_handlers
from servicekit.server import serve, shutdown_signal


def _base_url(sock) -> str:
    return f"http://127.0.0.1:{sock.getsockname()[1]}"


class TestServe:
    def test_serves_until_shutdown(self, make_app: Callable[[Path], FastAPI], manifest_path: Path) -> None:
        sock = bind_socket("127.0.0.1", 0)
        url = _base_url(sock)

        async def scenario() -> httpx.Response:
            stop = asyncio.Event()
            task = asyncio.create_task(serve(sock, make_app(manifest_path), shutdown=stop.wait()))
            async with httpx.AsyncClient(base_url=url) as client:
                resp = await client.get("/")
            stop.set()
            await asyncio.wait_for(task, timeout=10)
            return resp

        resp = asyncio.run(scenario())
        assert resp.status_code == 200
        assert resp.json() == {"version": "1.2.3"}

    def test_in_flight_request_drains(self) -> None:
        app = FastAPI()
        sock = bind_socket("127.0.0.1", 0)
        url = _base_url(sock)

        async def scenario() -> httpx.Response:
            entered = asyncio.Event()

            @app.get("/slow")
            async def slow() -> dict:
                entered.set()
                await asyncio.sleep(0.5)
                return {"done": True}

            stop = asyncio.Event()
            task = asyncio.create_task(serve(sock, app, shutdown=stop.wait()))
            async with httpx.AsyncClient(base_url=url, timeout=10) as client:
                pending = asyncio.create_task(client.get("/slow"))
                await asyncio.wait_for(entered.wait(), timeout=10)
                stop.set()
                resp = await pending
            await asyncio.wait_for(task, timeout=10)
            return resp

        resp = asyncio.run(scenario())
        assert resp.status_code == 200
        assert resp.json() == {"done": True}

    @pytest.mark.parametrize("status", [204, 304])
    def test_bodyless_error_status_reaches_client(self, status: int) -> None:
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/bodyless")
        def bodyless() -> dict:
            raise AppError(status, ["nothing here"])

        sock = bind_socket("127.0.0.1", 0)
        url = _base_url(sock)

        async def scenario() -> httpx.Response:
            stop = asyncio.Event()
            task = asyncio.create_task(serve(sock, app, shutdown=stop.wait(), http="h11"))
            async with httpx.AsyncClient(base_url=url, timeout=10) as client:
                resp = await client.get("/bodyless")
            stop.set()
            await asyncio.wait_for(task, timeout=10)
            return resp

        resp = asyncio.run(scenario())
        assert resp.status_code == status
        assert resp.content == b""

    def test_startup_failure_is_raised(self) -> None:
        @asynccontextmanager
        async def lifespan(_app: FastAPI):
            raise RuntimeError("cannot start")
            yield

        app = FastAPI(lifespan=lifespan)
        sock = bind_socket("127.0.0.1", 0)

        async def scenario() -> None:
            stop = asyncio.Event()
            await asyncio.wait_for(serve(sock, app, shutdown=stop.wait()), timeout=10)

        with pytest.raises(ServeError, match="Failed to start server"):
            asyncio.run(scenario())
        assert sock.fileno() == -1


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX signals")
class TestShutdownSignal:
    @pytest.mark.parametrize("sig", [signal.SIGTERM, signal.SIGINT])
    def test_returns_signal_name(self, sig: signal.Signals) -> None:
        async def scenario() -> str:
            loop = asyncio.get_running_loop()
            loop.call_later(0.05, os.kill, os.getpid(), sig)
            return await asyncio.wait_for(shutdown_signal(), timeout=10)

        assert asyncio.run(scenario()) == sig.name
