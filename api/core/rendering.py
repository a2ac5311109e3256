"""
Response serialization strategies for list endpoints.

- plain:     compact JSON array (`format=plain`)
- lines:     one compact record per line, two-space indent (default for
             /codes and /neighborhoods; existing clients depend on the exact text)
- pretty:    fully indented JSON (always used by /incidents)
"""

from __future__ import annotations

import json
from typing import Any, Callable

from fastapi import Response

JSON_MEDIA_TYPE = "application/json; charset=utf-8"

PLAIN_FORMAT = "plain"

Renderer = Callable[[list[dict[str, Any]]], str]


def _compact(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def render_plain(rows: list[dict[str, Any]]) -> str:
    return _compact(rows)


def render_lines(rows: list[dict[str, Any]]) -> str:
    return "[\n" + ",\n".join("  " + _compact(row) for row in rows) + "\n]"


def render_pretty(rows: list[dict[str, Any]]) -> str:
    return json.dumps(rows, ensure_ascii=False, indent=2)


def list_renderer(output_format: str | None) -> Renderer:
    if output_format == PLAIN_FORMAT:
        return render_plain
    return render_lines


def json_response(body: str) -> Response:
    return Response(content=body, media_type=JSON_MEDIA_TYPE)
