import asyncio
import logging
from typing import List, NamedTuple, Optional, Union

from pydantic import ValidationError

from chainscope.config import Settings, get_settings
from chainscope.core.entities.balance import BalanceSnapshot
from chainscope.core.entities.scan import (
    BALANCE_UNAVAILABLE_MESSAGE,
    NO_TRANSACTIONS_MESSAGE,
    QueryState,
    ScanRequest,
    ScanResult,
)
from chainscope.core.entities.transaction import TransactionFilters, TransactionRecord
from chainscope.core.exceptions import TransportError
from chainscope.core.interfaces.indexer import IIndexerSource
from chainscope.core.use_cases.balance_aggregator import derive_chart_segments, derive_totals
from chainscope.core.use_cases.category_classifier import Category, classify, count_by_category
from chainscope.core.use_cases.formatting import account_url, truncate_middle
from chainscope.core.use_cases.record_normalizer import RecordKind, normalize_batch

logger = logging.getLogger(__name__)


# --- Channel outcomes ---
class TransactionsOutcome(NamedTuple):
    records: List[TransactionRecord]
    state: QueryState
    skipped: int = 0


class BalanceOutcome(NamedTuple):
    snapshot: Optional[BalanceSnapshot]
    state: QueryState


def _require_address(address: str) -> None:
    if not address:
        raise ValueError("address must not be empty")


def _items(payload: dict) -> list:
    items = payload.get("items") if isinstance(payload, dict) else None
    if items is None:
        raise TransportError("Indexer response has no 'items' list")
    return items


# --- Orchestration ---

class QueryOrchestrator:
    """
    Owns the fetch lifecycle for one consumer (a page, a CLI run, a request).

    Each query channel moves Idle -> Loading -> Success | Failed. Transport
    failures never escape: transactions degrade to [] and balance to None.
    Every query is stamped with a token; a result is only committed when no
    newer query on the same channel (or `close`) happened while it was in
    flight.
    """

    def __init__(self, indexer: IIndexerSource, settings: Optional[Settings] = None):
        self.indexer = indexer
        self.settings = settings or get_settings()

        self.transactions_state = QueryState.IDLE
        self.balance_state = QueryState.IDLE
        self.skipped_records = 0
        self.current: Optional[ScanResult] = None
        # Request tokens: whole scans, and each channel on its own
        self._token = 0
        self._tx_token = 0
        self._balance_token = 0

    def default_request(self) -> ScanRequest:
        return ScanRequest(
            address=self.settings.default_address,
            filters=TransactionFilters(
                methodIn=self.settings.default_method_in,
                sectionIn=self.settings.default_section_in,
            ),
        )

    # --- Single channel queries ---

    async def fetch_transactions(
        self, address: str, filters: Optional[TransactionFilters] = None
    ) -> List[TransactionRecord]:
        """History for one address. Returns [] when a newer request superseded this one."""
        _require_address(address)
        self._tx_token += 1
        token = self._tx_token
        self.transactions_state = QueryState.LOADING

        outcome = await self._load_transactions(address, filters or TransactionFilters())

        if token != self._tx_token:
            logger.debug(f"Discarding stale transactions for {address}")
            return []

        self.transactions_state = outcome.state
        self.skipped_records = outcome.skipped
        return outcome.records

    async def fetch_balance(self, address: str) -> Optional[BalanceSnapshot]:
        """Balance for one address. Returns None when a newer request superseded this one."""
        _require_address(address)
        self._balance_token += 1
        token = self._balance_token
        self.balance_state = QueryState.LOADING

        outcome = await self._load_balance(address)

        if token != self._balance_token:
            logger.debug(f"Discarding stale balance for {address}")
            return None

        self.balance_state = outcome.state
        return outcome.snapshot

    # --- Full scan ---

    async def scan(
        self, request: ScanRequest, category: Union[Category, str] = Category.ALL
    ) -> Optional[ScanResult]:
        """
        Fetch history and balance concurrently and build the view model.
        Returns None when the result went stale before it resolved.
        """
        self._token += 1
        self._tx_token += 1
        self._balance_token += 1
        tokens = (self._token, self._tx_token, self._balance_token)
        self.transactions_state = QueryState.LOADING
        self.balance_state = QueryState.LOADING

        tx_outcome, balance_outcome = await asyncio.gather(
            self._load_transactions(request.address, request.filters),
            self._load_balance(request.address),
        )

        if tokens != (self._token, self._tx_token, self._balance_token):
            logger.debug(f"Discarding stale scan for {request.address}")
            return None

        self.transactions_state = tx_outcome.state
        self.balance_state = balance_outcome.state
        self.skipped_records = tx_outcome.skipped
        self.current = self._build_result(request.address, category, tx_outcome, balance_outcome)
        return self.current

    def close(self):
        """Teardown: any query still in flight will be discarded."""
        self._token += 1
        self._tx_token += 1
        self._balance_token += 1
        self.current = None
        self.transactions_state = QueryState.IDLE
        self.balance_state = QueryState.IDLE

    # --- Internals ---

    async def _load_transactions(self, address: str, filters: TransactionFilters) -> TransactionsOutcome:
        logger.info(f"Fetching transactions for address: {address}")

        queries = [
            self.indexer.query_extrinsics(
                signer_in=[address],
                method_in=filters.methodIn,
                section_in=filters.sectionIn,
            )
        ]
        if filters.includeTransfers:
            queries.append(self.indexer.query_balance_transfers(from_in=[address]))

        try:
            payloads = await asyncio.gather(*queries)
            extrinsic_items = _items(payloads[0])
            transfer_items = _items(payloads[1]) if filters.includeTransfers else []
        except TransportError as e:
            logger.error(f"Failed to fetch transactions for {address}: {e}")
            return TransactionsOutcome(records=[], state=QueryState.FAILED)

        records, skipped = normalize_batch(extrinsic_items, RecordKind.EXTRINSIC)
        transfers, transfers_skipped = normalize_batch(transfer_items, RecordKind.TRANSFER)

        skipped += transfers_skipped
        if skipped:
            logger.warning(f"Skipped {skipped} malformed records for {address}")

        return TransactionsOutcome(records=records + transfers, state=QueryState.SUCCESS, skipped=skipped)

    async def _load_balance(self, address: str) -> BalanceOutcome:
        logger.info(f"Fetching balance for address: {address}")
        try:
            payload = await self.indexer.query_account_balance(address)
            snapshot = BalanceSnapshot.model_validate(payload)
        except TransportError as e:
            logger.error(f"Failed to fetch balance for {address}: {e}")
            return BalanceOutcome(snapshot=None, state=QueryState.FAILED)
        except ValidationError as e:
            logger.error(f"Unusable balance payload for {address}: {e}")
            return BalanceOutcome(snapshot=None, state=QueryState.FAILED)

        return BalanceOutcome(snapshot=snapshot, state=QueryState.SUCCESS)

    def _build_result(
        self,
        address: str,
        category: Union[Category, str],
        tx_outcome: TransactionsOutcome,
        balance_outcome: BalanceOutcome,
    ) -> ScanResult:
        records = tx_outcome.records
        snapshot = balance_outcome.snapshot

        tx_message = None
        if tx_outcome.state == QueryState.SUCCESS and not records:
            tx_message = NO_TRANSACTIONS_MESSAGE

        return ScanResult(
            address=address,
            addressShort=truncate_middle(address),
            accountUrl=account_url(address, self.settings.explorer_base_url),
            category=category.value if isinstance(category, Category) else str(category),
            transactions=classify(records, category),
            categories=count_by_category(records),
            transactionsState=tx_outcome.state,
            transactionsMessage=tx_message,
            skippedRecords=tx_outcome.skipped,
            balance=snapshot,
            balanceState=balance_outcome.state,
            balanceMessage=BALANCE_UNAVAILABLE_MESSAGE if balance_outcome.state == QueryState.FAILED else None,
            segments=derive_chart_segments(snapshot, self.settings.chart_policy),
            totals=derive_totals(snapshot),
        )
