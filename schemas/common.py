"""
schemas/common.py

- Shared response schemas
- Pydantic v2
- Contents:
  1) error response standard: ErrorDetail, ErrorResponse
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) Error response standard
# =========================================================

class ErrorDetail(BaseModel):
    """Smallest unit carrying an error code and message"""
    code: str = Field(..., description="Error code (e.g. INVALID_WEIGHT_CONFIGURATION, DATA_FETCH_ERROR)")
    message: str = Field(..., description="Human readable error message")

class ErrorResponse(BaseModel):
    """
    Standard error body returned by the global error handlers
    - middlewares/error_handler.py serializes exceptions into this shape
    """
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response creation time (UTC)"
    )
    latency_ms: Optional[int] = Field(
        default=None, ge=0, description="Request processing time (ms)"
    )

    model_config = ConfigDict(extra="ignore")

