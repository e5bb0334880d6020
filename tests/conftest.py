# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from servicekit.infra.config import Settings
from servicekit.main import create_app

TEST_LOGGER = "servicekit.tests"


def write_manifest(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


@pytest.fixture
def logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    caplog.set_level(logging.INFO, logger=TEST_LOGGER)
    return logging.getLogger(TEST_LOGGER)


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    return write_manifest(tmp_path / "pyproject.toml", '[project]\nname = "demo"\nversion = "1.2.3"\n')


@pytest.fixture
def make_app(logger: logging.Logger) -> Callable[[Path], FastAPI]:
    def _make(manifest: Path) -> FastAPI:
        return create_app(Settings(MANIFEST_PATH=str(manifest)), logger=logger)

    return _make


@pytest.fixture
def client(make_app: Callable[[Path], FastAPI], manifest_path: Path) -> TestClient:
    return TestClient(make_app(manifest_path))


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)


def error_records(caplog: pytest.LogCaptureFixture) -> list:
    return [r for r in caplog.records if r.levelno >= logging.ERROR]
