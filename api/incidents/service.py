"""
Incident listing and mutation rules.

Scope:
- filtered, newest-first listing with a row limit
- create: rejected when the case_number is already stored
- remove: rejected when the case_number is not stored

Precondition failures are reported as 500 with a descriptive text body;
existing clients only distinguish "OK" from everything else.
"""

from __future__ import annotations

import logging
import os

import aiosqlite
from fastapi import HTTPException

from core import rendering
from core.db import Store, StoreUnavailableError
from core.filters import parse_int

from . import repository, schemas

DEFAULT_LIMIT = 1000

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def default_limit() -> int:
    return _env_int("INCIDENTS_DEFAULT_LIMIT", DEFAULT_LIMIT)


async def list_incidents(
    store: Store,
    *,
    limit: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    code: str | None = None,
    grid: str | None = None,
    neighborhood: str | None = None,
) -> str:
    row_limit = parse_int(limit) if limit else default_limit()
    if row_limit is None:
        logger.error("list_incidents_bad_limit limit=%r", limit)
        raise HTTPException(status_code=500, detail="Error retrieving incidents")

    try:
        rows = await repository.list_incidents(
            store,
            limit=row_limit,
            start_date=start_date,
            end_date=end_date,
            code=code,
            grid=grid,
            neighborhood=neighborhood,
        )
    except (aiosqlite.Error, OverflowError, StoreUnavailableError) as exc:
        logger.exception("list_incidents_failed")
        raise HTTPException(status_code=500, detail="Error retrieving incidents") from exc

    return rendering.render_pretty(rows)


async def create_incident(store: Store, payload: schemas.NewIncidentRequest) -> None:
    try:
        inserted = await repository.insert_incident_if_absent(
            store,
            case_number=payload.case_number,
            date_time=payload.date_time,
            code=payload.code,
            incident=payload.incident,
            police_grid=payload.police_grid,
            neighborhood_number=payload.neighborhood_number,
            block=payload.block,
        )
    except aiosqlite.IntegrityError as exc:
        if "UNIQUE" not in str(exc):
            logger.exception("create_incident_failed case_number=%s", payload.case_number)
            raise HTTPException(status_code=500, detail="Error inserting incident") from exc
        inserted = False
    except (aiosqlite.Error, OverflowError, StoreUnavailableError) as exc:
        logger.exception("create_incident_failed case_number=%s", payload.case_number)
        raise HTTPException(status_code=500, detail="Error inserting incident") from exc

    if not inserted:
        logger.warning("create_incident_conflict case_number=%s", payload.case_number)
        raise HTTPException(status_code=500, detail="Case number already exists in database")

    logger.info("incident_created case_number=%s", payload.case_number)


async def remove_incident(store: Store, payload: schemas.RemoveIncidentRequest) -> None:
    try:
        removed = await repository.delete_incident(store, payload.case_number)
    except (aiosqlite.Error, OverflowError, StoreUnavailableError) as exc:
        logger.exception("remove_incident_failed case_number=%s", payload.case_number)
        raise HTTPException(status_code=500, detail="Error deleting incident") from exc

    if removed == 0:
        logger.warning("remove_incident_missing case_number=%s", payload.case_number)
        raise HTTPException(status_code=500, detail="Case number does not exist in database")

    logger.info("incident_removed case_number=%s rows=%s", payload.case_number, removed)
