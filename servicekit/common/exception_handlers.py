# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""HTTP 边界：错误 -> 日志 + 响应

- 日志拿到完整错误链（含 traceback），客户端只拿到精简文本
- 所有到达边界的异常都经由 translate()，不会以原生异常的形式穿透出去
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import ASGIApp

from servicekit.common.errors import AppError
from servicekit.infra.slogger import slogger

NO_BODY_STATUSES = frozenset({204, 304})


def status_line(status_code: int) -> str:
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return str(status_code)


def render_terse(error: AppError) -> str:
    return f"{status_line(error.status_code)}: {error}"


def render_verbose(error: AppError) -> str:
    lines = [f"AppError {{ status: {status_line(error.status_code)}, causes: ["]
    for idx, cause in enumerate(error.causes):
        lines.append(f"    {idx}: {cause!r},")
    lines.append("] }")
    return "\n".join(lines)


def translate(error: AppError, logger: Optional[logging.Logger] = None) -> Response:
    """AppError -> 一条 ERROR 日志 + 一个文本响应（1xx / 204 / 304 不带 body）"""

    log = logger or slogger
    exc_info = None
    if error.error is not None:
        exc_info = (type(error.error), error.error, error.error.__traceback__)
    log.error("Error: %s", render_verbose(error), exc_info=exc_info)
    if error.status_code < 200 or error.status_code in NO_BODY_STATUSES:
        return Response(status_code=error.status_code)
    return PlainTextResponse(render_terse(error), status_code=error.status_code)


def _validation_summary(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    return "; ".join(parts) or "invalid request"


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):
    """未被 handler 处理的异常在这里转为响应，不再向上抛给 server"""

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None) -> None:
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:  # noqa: BLE001
            return translate(AppError.from_exception(exc), self.logger)


def register_error_handlers(app: FastAPI, logger: Optional[logging.Logger] = None) -> None:
    """注册边界异常处理；logger 显式传入，未传时使用库 logger"""

    async def app_error_handler(request: Request, exc: AppError) -> Response:  # noqa: ARG001
        return translate(exc, logger)

    async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:  # noqa: ARG001
        return translate(AppError(422, [_validation_summary(exc)], error=exc), logger)

    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:  # noqa: ARG001
        status_code = exc.status_code if 100 <= exc.status_code <= 599 else 500
        detail = exc.detail if exc.detail else status_line(status_code)
        response = translate(AppError(status_code, [str(detail)]), logger)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_middleware(ErrorBoundaryMiddleware, logger=logger)
