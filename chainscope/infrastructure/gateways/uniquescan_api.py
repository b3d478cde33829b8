import logging
from typing import Any, Optional, Sequence

import httpx

from chainscope.config import Settings, get_settings
from chainscope.core.exceptions import TransportError
from chainscope.core.interfaces.indexer import IIndexerSource

logger = logging.getLogger(__name__)


class UniquescanGateway(IIndexerSource):
    """
    Implementation of IIndexerSource for the Uniquescan v2 REST API.
    Uses a shared httpx.AsyncClient so the history and balance queries can run
    concurrently on one event loop.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        """
        :param settings: Indexer URL, paths, timeout and page size.
        :param client: Pre-built client (tests inject one with a MockTransport).
        """
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.indexer_base_url,
            timeout=self.settings.indexer_timeout,
        )
        logger.info(f"UniquescanGateway initialized. URL: {self.settings.indexer_base_url}")

    async def query_extrinsics(
        self,
        signer_in: Sequence[str],
        method_in: Optional[Sequence[str]] = None,
        section_in: Optional[Sequence[str]] = None,
    ) -> dict:
        params = {"signerIn": list(signer_in), "limit": self.settings.page_limit}
        if method_in:
            params["methodIn"] = list(method_in)
        if section_in:
            params["sectionIn"] = list(section_in)

        return self._expect_items(await self._get(self.settings.extrinsics_path, params))

    async def query_balance_transfers(self, from_in: Sequence[str]) -> dict:
        params = {"fromIn": list(from_in), "limit": self.settings.page_limit}
        return self._expect_items(await self._get(self.settings.transfers_path, params))

    async def query_account_balance(self, address: str) -> dict:
        path = self.settings.balance_path.format(address=address)
        payload = await self._get(path)
        if not isinstance(payload, dict):
            raise TransportError(f"Balance response for {address} is not an object")
        return payload

    async def aclose(self):
        await self.client.aclose()

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise TransportError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            # Body was not JSON
            raise TransportError(f"GET {path} returned an invalid body: {e}") from e

    @staticmethod
    def _expect_items(payload: Any) -> dict:
        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            raise TransportError("Indexer response has no 'items' list")
        return payload
