# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """全局配置，从 .env / 环境变量读取"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_TITLE: str = Field(
        "servicekit",
        description="OpenAPI 文档中的服务名",
        validation_alias=AliasChoices("APP_TITLE", "app_title"),
    )

    # 日志
    LOG_LEVEL: str = Field(
        "INFO",
        description="日志级别: DEBUG / INFO / WARNING / ERROR",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    # HTTP 监听
    HOST: str = Field(
        "127.0.0.1",
        description="监听地址",
        validation_alias=AliasChoices("HOST", "host"),
    )
    PORT: int = Field(
        8000,
        description="监听端口",
        validation_alias=AliasChoices("PORT", "port"),
    )

    # 版本信息来源（请求时读取）
    MANIFEST_PATH: str = Field(
        "pyproject.toml",
        description="项目清单文件路径，版本号从这里读取",
        validation_alias=AliasChoices("MANIFEST_PATH", "manifest_path"),
    )

    # OpenAPI 导出
    OPENAPI_OUTPUT: str = Field(
        "openapi.json",
        description="OpenAPI 文档导出路径",
        validation_alias=AliasChoices("OPENAPI_OUTPUT", "openapi_output"),
    )


settings = Settings()
