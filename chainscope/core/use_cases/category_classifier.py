from enum import Enum
from typing import Callable, Dict, Iterable, List, Union

from chainscope.core.entities.transaction import TransactionRecord


class Category(str, Enum):
    ALL = "all"
    STAKING = "staking"
    TRANSFERS = "transfers"


# Keys off the extrinsic method ("stake"), not the event method ("Stake")
_PREDICATES: Dict[Category, Callable[[TransactionRecord], bool]] = {
    Category.ALL: lambda record: True,
    Category.STAKING: lambda record: record.section == "appPromotion" and record.method == "stake",
    Category.TRANSFERS: lambda record: record.section == "balances" and record.method == "transfer_keep_alive",
}


def classify(records: Iterable[TransactionRecord], category: Union[Category, str]) -> List[TransactionRecord]:
    """
    Records belonging to `category`, in input order.
    Unknown categories yield an empty list.
    """
    try:
        key = Category(category)
    except ValueError:
        return []

    predicate = _PREDICATES[key]
    return [record for record in records if predicate(record)]


def count_by_category(records: Iterable[TransactionRecord]) -> Dict[str, int]:
    records = list(records)
    return {category.value: len(classify(records, category)) for category in Category}
