"""
Balance entities for Chainscope.

Snapshot fields are the indexer's fixed-point integer strings, kept unscaled.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class BalanceSnapshot(BaseModel):
    """
    One account balance as reported by the indexer.
    `total` is indexer-defined and is never recomputed from the parts.
    """
    model_config = ConfigDict(extra="ignore")

    address: Optional[str] = None
    available: str = "0"
    staked: str = "0"
    locked: str = "0"
    total: str = "0"
    free: str = "0"
    reserved: str = "0"
    unstaked: str = "0"
    canstake: str = "0"

    createdAtBlockNumber: Optional[int] = None
    updatedAtBlockNumber: Optional[int] = None
    fetchedAtBlockNumber: Optional[int] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @field_validator(
        "available", "staked", "locked", "total", "free", "reserved", "unstaked", "canstake",
        mode="before",
    )
    @classmethod
    def _as_string(cls, value):
        if value is None:
            return "0"
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Segment(BaseModel):
    """Chart wedge, value in whole units."""
    name: str
    value: int
    color: str


class BalanceTotal(BaseModel):
    name: str
    amount: str  # whole units, thousands grouped
    color: str


class BalanceResponse(BaseModel):
    address: str
    balance: BalanceSnapshot
    segments: List[Segment]
    totals: List[BalanceTotal]
