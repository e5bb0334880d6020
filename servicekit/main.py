# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from servicekit import __version__
from servicekit.api import version as version_api
from servicekit.api.deps import get_settings
from servicekit.common.exception_handlers import register_error_handlers
from servicekit.common.middlewares import attach_tracing_cors_middleware
from servicekit.infra import config
from servicekit.infra.config import Settings


def create_app(settings: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> FastAPI:
    """组装 app；日志初始化不在这里做，由进程入口负责"""

    app = FastAPI(
        title=(settings or config.settings).APP_TITLE,
        version=__version__,
    )
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings

    # ---------- handlers / middlewares ----------

    register_error_handlers(app, logger=logger)
    attach_tracing_cors_middleware(app, logger=logger)

    app.include_router(version_api.router)
    return app
