# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""项目清单（TOML）读取

版本号依次从 [project] / [tool.poetry] / [package] 中查找。
"""

from __future__ import annotations

import tomllib
from typing import Any, Dict

from servicekit.common.errors import ManifestError

_VERSION_TABLES = (("project",), ("tool", "poetry"), ("package",))


def _find_version(data: Dict[str, Any]) -> str:
    for path in _VERSION_TABLES:
        node: Any = data
        for key in path:
            node = node.get(key) if isinstance(node, dict) else None
        if isinstance(node, dict) and isinstance(node.get("version"), str):
            return node["version"]
    raise KeyError("version")


def read_manifest_version(path: str) -> str:
    try:
        f = open(path, "rb")
    except OSError as e:
        raise ManifestError(f"Failed to open {path}") from e

    with f:
        try:
            text = f.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Failed to read {path}") from e

    try:
        return _find_version(tomllib.loads(text))
    except (tomllib.TOMLDecodeError, KeyError) as e:
        raise ManifestError(f"Failed to parse {path}") from e
