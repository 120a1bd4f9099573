"""
Pydantic schemas for API request/response models.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class SeriesKind(StrEnum):
    """Chart series a client can request."""

    BALANCE = "balance"
    EQUITY = "equity"


class SaveResponse(BaseModel):
    """Response model for a stored backtest."""

    backtest_id: str
    status: str = "saved"
    schema_version: str
    trade_count: int = Field(..., ge=0)
    valid_trade_count: int = Field(..., ge=0)


class TradeDetailResponse(BaseModel):
    """Response model for a single trade with its neighbours."""

    backtest_id: str
    index: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    previous_index: int | None = None
    next_index: int | None = None
    trade: dict[str, Any]
    is_valid: bool


class SeriesPointModel(BaseModel):
    """One point of a chart series."""

    x: str
    y: float


class SeriesResponse(BaseModel):
    """Response model for a balance or equity series."""

    backtest_id: str
    kind: SeriesKind
    points: list[SeriesPointModel]


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    message: str
    details: dict | None = None
    backtest_id: str | None = None
    missing_fields: list[str] | None = None
