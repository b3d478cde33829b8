from datetime import datetime, timezone
from typing import Union

from chainscope.core.use_cases.amount_codec import DECIMALS, to_number

SUBSCAN_BASE_URL = "https://unique.subscan.io"


def format_grouped(value, decimals: int = DECIMALS) -> str:
    """Whole units with thousands separators, e.g. "1,234,567"."""
    return f"{to_number(value, decimals):,}"


def truncate_middle(text: str, head: int = 6, tail: int = 6, threshold: int = 20) -> str:
    """Shorten hashes and addresses longer than `threshold` to head...tail."""
    if len(text) > threshold:
        return f"{text[:head]}...{text[-tail:]}"
    return text


def format_utc(value: Union[datetime, str]) -> str:
    """Render as "YYYY-MM-DD HH:MM:SS (UTC)". Naive datetimes are taken as UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S") + " (UTC)"


def extrinsic_url(tx_hash: str, base_url: str = SUBSCAN_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/extrinsic/{tx_hash}?tab=event"


def account_url(address: str, base_url: str = SUBSCAN_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/account/{address}"
