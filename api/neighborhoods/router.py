"""
Neighborhood endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response

from core import rendering
from core.db import Store, get_store

from . import service

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/neighborhoods")
async def list_neighborhoods(
    neighborhood_id: str | None = Query(default=None, alias="id"),
    output_format: str | None = Query(default=None, alias="format"),
    store: Store = Depends(get_store),
) -> Response:
    logger.info("list_neighborhoods id=%s format=%s", neighborhood_id, output_format)
    body = await service.list_neighborhoods(
        store,
        neighborhood_id=neighborhood_id,
        output_format=output_format,
    )
    return rendering.json_response(body)
