# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from servicekit.common.trace import new_trace_id, reset_trace_id, set_trace_id
from servicekit.infra.slogger import slogger

CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]


class TraceIdMiddleware(BaseHTTPMiddleware):
    """每个请求一个 span：注入 trace_id，INFO 级别记录请求开始与结束"""

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(app)
        self.logger = logger or slogger

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = request.headers.get("X-Request-Id") or new_trace_id()
        token = set_trace_id(trace_id)
        method, path = request.method, request.url.path
        try:
            self.logger.info("started processing request method=%s path=%s", method, path)

            started = time.perf_counter()
            response: Response = await call_next(request)
            latency_ms = (time.perf_counter() - started) * 1000

            self.logger.info(
                "finished processing request method=%s path=%s status=%s latency=%.1fms",
                method,
                path,
                response.status_code,
                latency_ms,
            )
        finally:
            reset_trace_id(token)
        response.headers["X-Trace-Id"] = trace_id
        return response


def attach_tracing_cors_middleware(app: FastAPI, logger: Optional[logging.Logger] = None) -> FastAPI:
    """给 app 挂上 CORS 与请求日志中间件（日志在外层，CORS 在内层）"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
        allow_methods=CORS_ALLOW_METHODS,
    )
    app.add_middleware(TraceIdMiddleware, logger=logger)
    return app
