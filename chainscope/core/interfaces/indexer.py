from abc import ABC, abstractmethod
from typing import Optional, Sequence


class IIndexerSource(ABC):
    """
    Read-only view of the chain indexer. Implementations return the raw JSON
    payloads and raise TransportError when a query cannot be answered.
    """

    @abstractmethod
    async def query_extrinsics(
        self,
        signer_in: Sequence[str],
        method_in: Optional[Sequence[str]] = None,
        section_in: Optional[Sequence[str]] = None,
    ) -> dict:
        """
        Returns {"items": [extrinsic, ...]}.
        """
        pass

    @abstractmethod
    async def query_balance_transfers(self, from_in: Sequence[str]) -> dict:
        """
        Returns {"items": [transfer, ...]}.
        """
        pass

    @abstractmethod
    async def query_account_balance(self, address: str) -> dict:
        pass
