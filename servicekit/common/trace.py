# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""请求级 trace_id（contextvar），由 TraceIdMiddleware 写入，TraceIdFilter 读出写进日志"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token


_trace_id_ctx: ContextVar[str] = ContextVar("servicekit_trace_id", default="-")


def new_trace_id() -> str:
    return uuid.uuid4().hex


def set_trace_id(trace_id: str) -> Token:
    return _trace_id_ctx.set(trace_id or "-")


def reset_trace_id(token: Token) -> None:
    _trace_id_ctx.reset(token)


def get_trace_id() -> str:
    return _trace_id_ctx.get() or "-"
