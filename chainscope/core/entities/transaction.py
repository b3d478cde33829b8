from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chainscope.core.use_cases.amount_codec import sanitize_amount


class TransactionRecord(BaseModel):
    """
    Normalized extrinsic or balance transfer, ready for display.
    `amount` is the unscaled fixed-point value (18 implied decimals).
    """
    model_config = ConfigDict(populate_by_name=True)

    hash: str
    blockNumber: int
    section: str
    method: str
    createdAt: datetime
    amount: str = "0"
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _canonical_amount(cls, value):
        # Negative, fractional or garbage amounts collapse to "0"
        return sanitize_amount(value)


class TransactionFilters(BaseModel):
    methodIn: Optional[List[str]] = None
    sectionIn: Optional[List[str]] = None
    includeTransfers: bool = False
