# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""HTTP server 运行与优雅停机

- 监听 socket 由调用方绑定好再传入（绑定失败在调用方处理）
- 收到 SIGINT / SIGTERM 后：不再接受新连接，等待进行中的请求处理完（不设超时）
- 启动失败以 ServeError 抛给调用方，不在这里退出进程
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import socket
from typing import Any, Awaitable, Callable, Iterator, List, Optional

import uvicorn

from servicekit.common.errors import ServeError
from servicekit.infra.slogger import slogger


class _Server(uvicorn.Server):
    """信号由 shutdown_signal() 统一处理，这里关掉 uvicorn 自带的信号接管"""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


def _shutdown_signals() -> List[signal.Signals]:
    sigs = [signal.SIGINT]
    if hasattr(signal, "SIGTERM"):
        sigs.append(signal.SIGTERM)
    return sigs


async def shutdown_signal(logger: Optional[logging.Logger] = None) -> str:
    """等待 Ctrl+C 或 SIGTERM，返回收到的信号名

    不支持 loop 信号处理的平台（Windows）上，SIGINT 退回到 signal.signal，
    SIGTERM 分支永远不会触发。
    """

    log = logger or slogger
    loop = asyncio.get_running_loop()
    received: asyncio.Future = loop.create_future()
    restores: List[Callable[[], Any]] = []

    def _on_signal(sig: int) -> None:
        if not received.done():
            received.set_result(signal.Signals(sig).name)

    for sig in _shutdown_signals():
        try:
            loop.add_signal_handler(sig, _on_signal, sig)
            restores.append(lambda s=sig: loop.remove_signal_handler(s))
        except NotImplementedError:
            if sig != signal.SIGINT:
                continue
            previous = signal.signal(sig, lambda s, _frame: loop.call_soon_threadsafe(_on_signal, s))
            restores.append(lambda s=sig, p=previous: signal.signal(s, p))

    try:
        name = await received
    finally:
        for restore in restores:
            restore()

    log.info("received %s, shutting down", name)
    return name


async def serve(
    sock: socket.socket,
    app: Any,
    *,
    shutdown: Optional[Awaitable[Any]] = None,
    logger: Optional[logging.Logger] = None,
    **config_kwargs: Any,
) -> None:
    """在已绑定的 socket 上运行 app，直到 shutdown 完成（默认等待进程信号）

    sock 的所有权交给 server，停机时会被关闭。
    config_kwargs 透传给 uvicorn.Config。
    """

    log = logger or slogger
    config = uvicorn.Config(app, log_config=None, **config_kwargs)
    server = _Server(config)

    waiter = asyncio.ensure_future(shutdown if shutdown is not None else shutdown_signal(log))

    async def _watch() -> None:
        await waiter
        log.info("draining in-flight requests")
        server.should_exit = True

    watcher = asyncio.ensure_future(_watch())
    try:
        await server.serve(sockets=[sock])
    except SystemExit as e:
        raise ServeError("Failed to start server") from e
    except OSError as e:
        raise ServeError("Failed to serve") from e
    finally:
        watcher.cancel()
        waiter.cancel()
        await asyncio.gather(watcher, waiter, return_exceptions=True)

    if not server.started:
        sock.close()
        raise ServeError("Failed to start server: application startup failed")
    log.info("server stopped")
