# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""通用基础设施（错误/日志/trace/中间件）

约定：
- 中间层只追加上下文（raise ... from exc）并继续抛出，不在本地处理
- 错误只在边界处（HTTP 异常处理 / CLI）被转换，HTTP 侧统一经由 translate()
- trace_id 通过 middleware 注入，并写入日志，便于线上排障
"""

from __future__ import annotations
