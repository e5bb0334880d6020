# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""OpenAPI 文档导出（格式化 JSON，整文件覆盖写）"""

from __future__ import annotations

import json
from typing import Any, Mapping

from fastapi import FastAPI

from servicekit.common.errors import SpecExportError


def export_openapi_document(document: Mapping[str, Any], file_path: str) -> None:
    try:
        api_doc = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
    except (TypeError, ValueError) as e:
        raise SpecExportError("Failed to generate open API spec") from e

    try:
        f = open(file_path, "w", encoding="utf-8")
    except OSError as e:
        raise SpecExportError("Failed to create open API spec file") from e

    with f:
        try:
            f.write(api_doc)
        except OSError as e:
            raise SpecExportError("Failed to write open api spec to file") from e


def export_openapi(app: FastAPI, file_path: str) -> None:
    """从 app 生成 OpenAPI 文档并写入 file_path"""

    try:
        document = app.openapi()
    except Exception as e:  # noqa: BLE001
        raise SpecExportError("Failed to generate open API spec") from e
    export_openapi_document(document, file_path)
