# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from servicekit.infra.config import Settings, settings


def get_settings() -> Settings:
    return settings
