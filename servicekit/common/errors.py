# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


class ServiceError(Exception):
    """带上下文的内部错误基类

    上层通过 `raise XxxError("Failed to ...") from exc` 追加上下文，
    由边界组件（HTTP 异常处理 / CLI）统一终止传播。
    """


class ManifestError(ServiceError):
    pass


class SpecExportError(ServiceError):
    pass


class ServeError(ServiceError):
    pass


def _message_of(exc: BaseException) -> str:
    msg = str(exc)
    return msg if msg else type(exc).__name__


def cause_chain(exc: BaseException) -> List[str]:
    """按 root cause -> 最外层上下文 的顺序返回错误链"""

    chain: List[str] = []
    seen = set()
    cur: Optional[BaseException] = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        chain.append(_message_of(cur))
        cur = cur.__cause__
    chain.reverse()
    return chain


@dataclass(eq=False)
class AppError(Exception):
    """可转换为 HTTP 响应的错误

    status_code: 响应状态码，默认 500
    causes: 错误链，root cause 在前，外层上下文在后
    error: 原始异常（可选），仅用于日志中的 traceback
    """

    status_code: int = 500
    causes: List[str] = field(default_factory=list)
    error: Optional[BaseException] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not 100 <= int(self.status_code) <= 599:
            raise ValueError(f"invalid http status code: {self.status_code}")
        self.status_code = int(self.status_code)
        self.causes = [str(c) for c in self.causes]
        if not self.causes:
            raise ValueError("AppError requires at least one cause")

    def __str__(self) -> str:
        return ": ".join(self.causes)

    @classmethod
    def from_exception(cls, exc: BaseException, status_code: int = 500) -> "AppError":
        """任意异常 -> AppError（显式转换，默认 500）"""

        if isinstance(exc, AppError):
            return exc
        return cls(status_code=status_code, causes=cause_chain(exc), error=exc)
