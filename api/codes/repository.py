"""
Incident type code queries (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Store
from core.filters import FilterBuilder


def build_filter(*, code: str | None = None) -> FilterBuilder:
    return FilterBuilder().add_in("code", code)


async def list_codes(store: Store, *, code: str | None = None) -> list[dict[str, Any]]:
    where = build_filter(code=code)
    return await store.fetch_all(
        "SELECT code, incident_type AS type FROM Codes" + where.where_clause() + " ORDER BY code",
        where.params,
    )
