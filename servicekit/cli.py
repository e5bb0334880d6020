# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import argparse
import asyncio
import socket
import sys
from typing import List, Optional

from servicekit.common.errors import ServiceError, cause_chain
from servicekit.common.logging import setup_logging
from servicekit.infra.config import settings
from servicekit.infra.slogger import slogger
from servicekit.main import create_app
from servicekit.openapi import export_openapi
from servicekit.server import serve


def bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(2048)
        sock.setblocking(False)
    except OSError:
        sock.close()
        raise
    return sock


def _fail(exc: BaseException) -> int:
    print("Error: " + ": ".join(cause_chain(exc)), file=sys.stderr)
    return 1


def cmd_serve(args: argparse.Namespace) -> int:
    setup_logging(args.log_level)
    try:
        sock = bind_socket(args.host, args.port)
    except OSError as e:
        return _fail(e)

    slogger.info("listening on %s:%s", args.host, sock.getsockname()[1])
    try:
        asyncio.run(serve(sock, create_app(settings), logger=slogger))
    except ServiceError as e:
        return _fail(e)
    return 0


def cmd_openapi(args: argparse.Namespace) -> int:
    try:
        export_openapi(create_app(settings), args.output)
    except ServiceError as e:
        return _fail(e)
    print(f"OpenAPI spec written to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="servicekit", description="Web 服务辅助工具")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="启动 HTTP 服务（Ctrl+C / SIGTERM 优雅停机）")
    p_serve.add_argument("--host", type=str, default=settings.HOST, help=f"监听地址（默认：{settings.HOST}）")
    p_serve.add_argument("--port", type=int, default=settings.PORT, help=f"监听端口（默认：{settings.PORT}）")
    p_serve.add_argument("--log-level", type=str, default=settings.LOG_LEVEL, help="日志级别")
    p_serve.set_defaults(func=cmd_serve)

    p_openapi = sub.add_parser("openapi", help="导出 OpenAPI 文档")
    p_openapi.add_argument(
        "--output",
        type=str,
        default=settings.OPENAPI_OUTPUT,
        help=f"输出文件（默认：{settings.OPENAPI_OUTPUT}）",
    )
    p_openapi.set_defaults(func=cmd_openapi)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
