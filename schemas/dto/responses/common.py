"""
Common response DTOs shared across the finder endpoints.

ErrorResponse    — every non-2xx body: ``{"error": <message>}``, with
                   ``field`` / ``details`` only when set. The reveal
                   function answers 400, 403, 404, 429 and 500 in this shape.
HealthResponse   — GET /health: overall status plus per-check results
                   (``mongodb``, ``captcha``)
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Error body produced by the AppError handler; documents the finder contract."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    field: Optional[str] = None
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response body for GET /health; 503 when MongoDB is unreachable."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    checks: dict[str, str]
