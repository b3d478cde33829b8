from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from chainscope.core.entities.balance import BalanceSnapshot, BalanceTotal, Segment
from chainscope.core.entities.transaction import TransactionFilters, TransactionRecord

NO_TRANSACTIONS_MESSAGE = "No transactions found for this address"
BALANCE_UNAVAILABLE_MESSAGE = "Unable to load balance data. Please check the address and try again."


class QueryState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class ScanRequest(BaseModel):
    """Explicit scan configuration: which account, which extrinsics."""
    address: str
    filters: TransactionFilters = Field(default_factory=TransactionFilters)

    @field_validator("address")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("address must not be empty")
        return value


class ScanResult(BaseModel):
    """
    View model for one account: classified history plus balance breakdown.
    Built fresh on every scan and never mutated afterwards.
    """
    address: str
    addressShort: str = ""
    accountUrl: Optional[str] = None
    category: str = "all"
    transactions: List[TransactionRecord] = Field(default_factory=list)
    categories: Dict[str, int] = Field(default_factory=dict)
    transactionsState: QueryState = QueryState.IDLE
    transactionsMessage: Optional[str] = None
    skippedRecords: int = 0

    balance: Optional[BalanceSnapshot] = None
    balanceState: QueryState = QueryState.IDLE
    balanceMessage: Optional[str] = None
    segments: List[Segment] = Field(default_factory=list)
    totals: List[BalanceTotal] = Field(default_factory=list)
