"""
Incident type code lookups.
"""

from __future__ import annotations

import logging

import aiosqlite
from fastapi import HTTPException

from core import rendering
from core.db import Store, StoreUnavailableError

from . import repository

logger = logging.getLogger(__name__)


async def list_codes(store: Store, *, code: str | None = None, output_format: str | None = None) -> str:
    try:
        rows = await repository.list_codes(store, code=code)
    except (aiosqlite.Error, OverflowError, StoreUnavailableError) as exc:
        logger.exception("list_codes_failed code=%s", code)
        raise HTTPException(status_code=500, detail="Error retrieving codes") from exc

    return rendering.list_renderer(output_format)(rows)
