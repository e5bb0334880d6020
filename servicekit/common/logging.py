# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from typing import Union

from servicekit.common.trace import get_trace_id

LOG_FORMAT = "[%(asctime)s - %(levelname)s - trace=%(trace_id)s - %(name)s - %(message)s]"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        setattr(record, "trace_id", get_trace_id())
        return True


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """初始化全局日志（进程内只需调用一次，重复调用不会重复添加 handler）"""

    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # 给现有 handler 全部加 filter
    for h in root.handlers:
        has_filter = any(isinstance(f, TraceIdFilter) for f in getattr(h, "filters", []))
        if not has_filter:
            h.addFilter(TraceIdFilter())
