"""
Neighborhood queries (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Store
from core.filters import FilterBuilder


def build_filter(*, neighborhood_id: str | None = None) -> FilterBuilder:
    return FilterBuilder().add_in("neighborhood_number", neighborhood_id)


async def list_neighborhoods(store: Store, *, neighborhood_id: str | None = None) -> list[dict[str, Any]]:
    where = build_filter(neighborhood_id=neighborhood_id)
    return await store.fetch_all(
        """
        SELECT neighborhood_number AS id, neighborhood_name AS name
        FROM Neighborhoods
        """
        + where.where_clause()
        + " ORDER BY neighborhood_number",
        where.params,
    )
