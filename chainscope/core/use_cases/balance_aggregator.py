from enum import Enum
from typing import List, Optional

from chainscope.core.entities.balance import BalanceSnapshot, BalanceTotal, Segment
from chainscope.core.use_cases.amount_codec import to_number
from chainscope.core.use_cases.formatting import format_grouped

TOTAL_COLOR = "#6b7280"
AVAILABLE_COLOR = "#10b981"
STAKED_COLOR = "#3b82f6"
LOCKED_COLOR = "#f43f5e"


class ChartPolicy(str, Enum):
    # Staked wins over locked; a snapshot never shows both
    PRIORITY = "priority"
    # Available, staked and locked side by side
    COMBINED = "combined"


def derive_chart_segments(
    snapshot: Optional[BalanceSnapshot],
    policy: ChartPolicy = ChartPolicy.PRIORITY,
) -> List[Segment]:
    """
    Pie chart wedges for a balance snapshot. Zero-valued wedges are dropped.

    Under PRIORITY a non-zero staked balance hides the locked balance, so a
    snapshot with both staked and locked funds under-reports the locked part.
    """
    if snapshot is None:
        return []

    available = Segment(name="Available", value=to_number(snapshot.available), color=AVAILABLE_COLOR)
    staked = Segment(name="Staked", value=to_number(snapshot.staked), color=STAKED_COLOR)
    locked = Segment(name="Locked", value=to_number(snapshot.locked), color=LOCKED_COLOR)

    if policy == ChartPolicy.COMBINED:
        segments = [available, staked, locked]
    elif staked.value > 0:
        segments = [available, staked]
    elif locked.value > 0:
        segments = [available, locked]
    else:
        segments = [available]

    return [segment for segment in segments if segment.value > 0]


def derive_totals(snapshot: Optional[BalanceSnapshot]) -> List[BalanceTotal]:
    """Legend rows under the chart, whole units with grouping."""
    if snapshot is None:
        return []

    return [
        BalanceTotal(name="Total", amount=format_grouped(snapshot.total), color=TOTAL_COLOR),
        BalanceTotal(name="Available", amount=format_grouped(snapshot.available), color=AVAILABLE_COLOR),
        BalanceTotal(name="Staked", amount=format_grouped(snapshot.staked), color=STAKED_COLOR),
        BalanceTotal(name="Locked", amount=format_grouped(snapshot.locked), color=LOCKED_COLOR),
    ]
