"""
Incident persistence (raw SQL).

Inserts and deletes are single statements so the "exists?" check and the
write cannot be interleaved with another request's write.
"""

from __future__ import annotations

from typing import Any

from core.db import Store
from core.filters import FilterBuilder


def build_filter(
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    code: str | None = None,
    grid: str | None = None,
    neighborhood: str | None = None,
) -> FilterBuilder:
    return (
        FilterBuilder()
        .add_condition("date(date_time) >= ?", start_date)
        .add_condition("date(date_time) <= ?", end_date)
        .add_in("code", code)
        .add_in("police_grid", grid)
        .add_in("neighborhood_number", neighborhood)
    )


async def list_incidents(
    store: Store,
    *,
    limit: int,
    start_date: str | None = None,
    end_date: str | None = None,
    code: str | None = None,
    grid: str | None = None,
    neighborhood: str | None = None,
) -> list[dict[str, Any]]:
    where = build_filter(
        start_date=start_date,
        end_date=end_date,
        code=code,
        grid=grid,
        neighborhood=neighborhood,
    )
    return await store.fetch_all(
        """
        SELECT
          case_number,
          date(date_time) AS date,
          time(date_time) AS time,
          code,
          incident,
          police_grid,
          neighborhood_number,
          block
        FROM Incidents
        """
        + where.where_clause()
        + " ORDER BY date_time DESC LIMIT ?",
        [*where.params, limit],
    )


async def insert_incident_if_absent(
    store: Store,
    *,
    case_number: Any,
    date_time: str,
    code: Any,
    incident: Any,
    police_grid: Any,
    neighborhood_number: Any,
    block: Any,
) -> bool:
    """
    Insert the incident unless its case_number is already stored.

    Returns False when a row with that case_number exists.
    """
    inserted = await store.execute(
        """
        INSERT INTO Incidents (case_number, date_time, code, incident, police_grid, neighborhood_number, block)
        SELECT ?, ?, ?, ?, ?, ?, ?
        WHERE NOT EXISTS (
          SELECT 1 FROM Incidents WHERE case_number = ?
        )
        """,
        [case_number, date_time, code, incident, police_grid, neighborhood_number, block, case_number],
    )
    return inserted > 0


async def delete_incident(store: Store, case_number: Any) -> int:
    """
    Delete every row matching case_number exactly. Returns the number removed.
    """
    return await store.execute(
        "DELETE FROM Incidents WHERE case_number = ?",
        [case_number],
    )
