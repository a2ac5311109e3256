"""
WHERE-clause construction from optional request parameters.

Every literal value coming from a request is appended to `params` and
referenced by a `?` placeholder; only column expressions written in code
end up in the SQL text.

Integer lists are parsed leniently: a token without leading digits becomes
`None` (bound as NULL, which matches no row) instead of being dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

_LEADING_INT = re.compile(r"[+-]?[0-9]+")

# SQLite binds integers as signed 64-bit.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def parse_int(token: str | None) -> int | None:
    """
    Parse the leading integer of `token` ("12abc" -> 12, " 7 " -> 7, "1.9" -> 1).

    Returns None when there is no leading integer or it does not fit a SQLite INTEGER.
    """
    if token is None:
        return None
    match = _LEADING_INT.match(token.strip())
    if match is None:
        return None
    digits = match.group(0)
    # int() refuses very long digit strings; anything past 19 digits is out of range anyway.
    if len(digits.lstrip("+-").lstrip("0")) > 19:
        return None
    value = int(digits)
    if not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
        return None
    return value


def parse_int_list(raw: str) -> list[int | None]:
    return [parse_int(token) for token in raw.split(",")]


def placeholders(count: int) -> str:
    return ",".join("?" for _ in range(count))


@dataclass
class FilterBuilder:
    conditions: list[str] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)

    def add_condition(self, sql: str, value: Any) -> FilterBuilder:
        """
        Add a condition with exactly one `?` placeholder, binding `value` as-is.
        """
        if not value:
            return self
        self.conditions.append(sql)
        self.params.append(value)
        return self

    def add_in(self, column: str, raw: str | None) -> FilterBuilder:
        """
        Add `column IN (?, ...)` for a comma-separated integer list.
        """
        if not raw:
            return self
        values = parse_int_list(raw)
        self.conditions.append(f"{column} IN ({placeholders(len(values))})")
        self.params.extend(values)
        return self

    def where_clause(self) -> str:
        if not self.conditions:
            return ""
        return " WHERE " + " AND ".join(self.conditions)
