"""
Neighborhood lookups.
"""

from __future__ import annotations

import logging

import aiosqlite
from fastapi import HTTPException

from core import rendering
from core.db import Store, StoreUnavailableError

from . import repository

logger = logging.getLogger(__name__)


async def list_neighborhoods(
    store: Store,
    *,
    neighborhood_id: str | None = None,
    output_format: str | None = None,
) -> str:
    try:
        rows = await repository.list_neighborhoods(store, neighborhood_id=neighborhood_id)
    except (aiosqlite.Error, OverflowError, StoreUnavailableError) as exc:
        logger.exception("list_neighborhoods_failed id=%s", neighborhood_id)
        raise HTTPException(status_code=500, detail="Error retrieving neighborhoods") from exc

    return rendering.list_renderer(output_format)(rows)
