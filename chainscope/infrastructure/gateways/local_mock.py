import asyncio
from typing import Dict, List, Optional, Sequence

from chainscope.core.exceptions import TransportError
from chainscope.core.interfaces.indexer import IIndexerSource


class LocalMockIndexer(IIndexerSource):
    """
    In-memory indexer keyed by address, for tests and offline runs.
    `delays` simulates slow responses per address, `failing` simulates
    transport errors for every query of an address.
    """

    def __init__(
        self,
        extrinsics: Optional[Dict[str, List[dict]]] = None,
        transfers: Optional[Dict[str, List[dict]]] = None,
        balances: Optional[Dict[str, dict]] = None,
        delays: Optional[Dict[str, float]] = None,
        failing: Sequence[str] = (),
    ):
        self.extrinsics = extrinsics or {}
        self.transfers = transfers or {}
        self.balances = balances or {}
        self.delays = delays or {}
        self.failing = set(failing)
        self.calls: List[tuple] = []

    async def _respond(self, address: str):
        await asyncio.sleep(self.delays.get(address, 0))
        if address in self.failing:
            raise TransportError(f"Mock indexer unavailable for {address}")

    async def query_extrinsics(self, signer_in, method_in=None, section_in=None) -> dict:
        self.calls.append(("extrinsics", tuple(signer_in), method_in, section_in))
        items = []
        for address in signer_in:
            await self._respond(address)
            for item in self.extrinsics.get(address, []):
                if method_in and (item or {}).get("method") not in method_in:
                    continue
                if section_in and (item or {}).get("section") not in section_in:
                    continue
                items.append(item)
        return {"items": items}

    async def query_balance_transfers(self, from_in) -> dict:
        self.calls.append(("transfers", tuple(from_in)))
        items = []
        for address in from_in:
            await self._respond(address)
            items.extend(self.transfers.get(address, []))
        return {"items": items}

    async def query_account_balance(self, address: str) -> dict:
        self.calls.append(("balance", address))
        await self._respond(address)
        if address not in self.balances:
            raise TransportError(f"No balance for {address}")
        return self.balances[address]
