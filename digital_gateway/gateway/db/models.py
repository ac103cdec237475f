"""Database record models."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


class ReportRecord(BaseModel):
    id: str
    content_name: str = "Unknown"
    score: float = 0.0
    status: str = "pass"
    details_json: str = "{}"
    source: str | None = "rules"
    source_url: str | None = None
    model: str | None = ""
    created_at: str = ""

    @property
    def details(self) -> dict[str, Any]:
        return json.loads(self.details_json or "{}")
