"""
Incident API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse

from core import rendering
from core.db import Store, get_store

from . import schemas, service

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/incidents")
async def list_incidents(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    code: str | None = Query(default=None),
    grid: str | None = Query(default=None),
    neighborhood: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    store: Store = Depends(get_store),
) -> Response:
    """
    Newest-first incidents. `code`, `grid` and `neighborhood` take
    comma-separated integers; dates are compared against date(date_time).
    """
    logger.info(
        "list_incidents start_date=%s end_date=%s code=%s grid=%s neighborhood=%s limit=%s",
        start_date,
        end_date,
        code,
        grid,
        neighborhood,
        limit,
    )
    body = await service.list_incidents(
        store,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        code=code,
        grid=grid,
        neighborhood=neighborhood,
    )
    return rendering.json_response(body)


@router.put("/new-incident", response_class=PlainTextResponse)
async def new_incident(
    payload: schemas.NewIncidentRequest,
    store: Store = Depends(get_store),
) -> str:
    logger.info("new_incident body=%s", payload.model_dump())
    await service.create_incident(store, payload)
    return "OK"


@router.delete("/remove-incident", response_class=PlainTextResponse)
async def remove_incident(
    payload: schemas.RemoveIncidentRequest,
    store: Store = Depends(get_store),
) -> str:
    logger.info("remove_incident case_number=%s", payload.case_number)
    await service.remove_incident(store, payload)
    return "OK"
