# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from servicekit.api.deps import get_settings
from servicekit.common.errors import AppError, ManifestError
from servicekit.infra.config import Settings
from servicekit.infra.manifest import read_manifest_version


router = APIRouter(tags=["meta"])


class HomeResponse(BaseModel):
    version: str


@router.get(
    "/",
    response_model=HomeResponse,
    responses={
        200: {"description": "Version of the server"},
        500: {
            "description": "Failed to get the version of the server",
            "content": {"text/plain": {"schema": {"type": "string"}}},
        },
    },
)
def app_version(cfg: Settings = Depends(get_settings)) -> HomeResponse:
    try:
        version = read_manifest_version(cfg.MANIFEST_PATH)
    except ManifestError as e:
        raise AppError.from_exception(e) from e
    return HomeResponse(version=version)
