"""
Incident type code endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response

from core import rendering
from core.db import Store, get_store

from . import service

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/codes")
async def list_codes(
    code: str | None = Query(default=None),
    output_format: str | None = Query(default=None, alias="format"),
    store: Store = Depends(get_store),
) -> Response:
    """
    List incident type codes, optionally restricted to `code=110,120,...`.
    """
    logger.info("list_codes code=%s format=%s", code, output_format)
    body = await service.list_codes(store, code=code, output_format=output_format)
    return rendering.json_response(body)
