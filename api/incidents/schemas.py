"""
Incident API schemas (request models).

Field values are not validated: they are handed to SQLite as sent and only
the store itself may reject them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class NewIncidentRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    case_number: Any = None
    date: Any = ""
    time: Any = ""
    code: Any = None
    incident: Any = None
    police_grid: Any = None
    neighborhood_number: Any = None
    block: Any = None

    @property
    def date_time(self) -> str:
        return f"{self.date} {self.time}"


class RemoveIncidentRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    case_number: Any = None
