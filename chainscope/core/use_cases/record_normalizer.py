"""
Maps raw indexer records onto TransactionRecord.

Two raw shapes are consumed:
- extrinsic-with-events, from the extrinsics query
- balance-transfer-event, from the balance transfers query
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from chainscope.core.entities.transaction import TransactionRecord
from chainscope.core.exceptions import NormalizationError
from chainscope.core.use_cases.amount_codec import sanitize_amount

logger = logging.getLogger(__name__)

STAKE_SECTION = "appPromotion"
STAKE_EVENT_METHOD = "Stake"
STAKE_AMOUNT_INDEX = 1


class RecordKind(str, Enum):
    EXTRINSIC = "extrinsic"
    TRANSFER = "transfer"


def find_event(events: Optional[Iterable[Any]], section: str, method: str) -> Optional[dict]:
    """First event tagged section.method, or None."""
    if not isinstance(events, (list, tuple)):
        return None
    for event in events:
        if isinstance(event, dict) and event.get("section") == section and event.get("method") == method:
            return event
    return None


def event_field(event: dict, index: int) -> Optional[Any]:
    """
    Positional data field of an event. The indexer serialises `data` either
    as a list or as an object keyed by position.
    """
    data = event.get("data")
    if isinstance(data, dict):
        if str(index) in data:
            return data[str(index)]
        return data.get(index)
    if isinstance(data, (list, tuple)) and len(data) > index:
        return data[index]
    return None


def extract_stake_amount(events: Optional[Iterable[Any]]) -> str:
    stake_event = find_event(events, STAKE_SECTION, STAKE_EVENT_METHOD)
    if stake_event is None:
        return "0"
    return sanitize_amount(event_field(stake_event, STAKE_AMOUNT_INDEX))


def _require(source: dict, field: str, context: str) -> Any:
    value = source.get(field)
    if value is None:
        raise NormalizationError(f"{context} record is missing '{field}'")
    return value


def _build(context: str, **fields) -> TransactionRecord:
    try:
        return TransactionRecord(**fields)
    except ValidationError as e:
        raise NormalizationError(f"{context} record has invalid fields: {e}") from e


def _normalize_extrinsic(raw: dict) -> TransactionRecord:
    return _build(
        "extrinsic",
        hash=_require(raw, "hash", "extrinsic"),
        blockNumber=_require(raw, "blockNumber", "extrinsic"),
        section=_require(raw, "section", "extrinsic"),
        method=_require(raw, "method", "extrinsic"),
        createdAt=_require(raw, "createdAt", "extrinsic"),
        amount=extract_stake_amount(raw.get("events")),
    )


def _normalize_transfer(raw: dict) -> Optional[TransactionRecord]:
    event = raw.get("event")
    if not event:
        return None
    if not isinstance(event, dict):
        raise NormalizationError(f"transfer event is not an object: {type(event).__name__}")

    extrinsic = event.get("extrinsic") or {}
    if not isinstance(extrinsic, dict):
        raise NormalizationError(f"transfer extrinsic is not an object: {type(extrinsic).__name__}")

    return _build(
        "transfer",
        hash=_require(event, "extrinsicHash", "transfer"),
        blockNumber=_require(event, "blockNumber", "transfer"),
        section=_require(extrinsic, "section", "transfer"),
        method=_require(extrinsic, "method", "transfer"),
        # The transfer payload carries no timestamp; processing time is shown instead.
        createdAt=datetime.now(timezone.utc),
        amount=raw.get("amount"),
        from_=raw.get("from"),
        to=raw.get("to"),
    )


def normalize(raw: Optional[dict], kind: RecordKind) -> Optional[TransactionRecord]:
    """
    Normalize one raw record.

    Returns None for entries that should be skipped silently (null items,
    transfers without an event). Raises NormalizationError when a required
    field is absent.
    """
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise NormalizationError(f"{kind.value} record is not an object: {type(raw).__name__}")

    if kind == RecordKind.EXTRINSIC:
        return _normalize_extrinsic(raw)
    if kind == RecordKind.TRANSFER:
        return _normalize_transfer(raw)
    raise ValueError(f"Unknown record kind: {kind}")


def normalize_batch(items: Optional[Iterable[Any]], kind: RecordKind) -> Tuple[List[TransactionRecord], int]:
    """
    Normalize a page of raw records, keeping the indexer's order.
    Returns the records and the number of entries skipped as malformed.
    """
    records: List[TransactionRecord] = []
    skipped = 0
    for item in items or []:
        try:
            record = normalize(item, kind)
        except NormalizationError as e:
            logger.warning(f"Skipping malformed {kind.value} record: {e}")
            skipped += 1
            continue
        if record is not None:
            records.append(record)
    return records, skipped
