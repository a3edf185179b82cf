"""
Solana RPC access for the Blink Actions server.

The only thing the server needs from the chain is a recent blockhash to
embed in freshly built transactions. Each fetch is a single round trip with
no retry; any failure is reported to the caller immediately.
"""
import logging
from typing import Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solders.hash import Hash

from ..actions.errors import FreshnessTokenUnavailable


logger = logging.getLogger(__name__)


class ChainClient:
    """Thin async wrapper around the Solana JSON-RPC client."""

    def __init__(self, rpc_url: Optional[str], timeout: float = 10.0):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._client: Optional[AsyncClient] = None

    def _get_client(self) -> AsyncClient:
        if not self.rpc_url:
            raise FreshnessTokenUnavailable("RPC_URL not set")
        if self._client is None:
            self._client = AsyncClient(self.rpc_url, commitment=Confirmed, timeout=self.timeout)
        return self._client

    async def latest_blockhash(self) -> Hash:
        """Fetch the latest blockhash at `confirmed` commitment."""
        client = self._get_client()
        try:
            response = await client.get_latest_blockhash(commitment=Confirmed)
        except Exception as e:
            logger.error(f"Failed to fetch latest blockhash from {self.rpc_url}: {e}")
            raise FreshnessTokenUnavailable(str(e)) from e

        value = getattr(response, "value", None)
        if value is None:
            logger.error(f"Unexpected getLatestBlockhash response: {response}")
            raise FreshnessTokenUnavailable(f"unexpected response: {response}")

        return value.blockhash

    async def close(self):
        """Close the underlying HTTP session."""
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("Solana RPC client closed")


# Global chain client instance
chain_client: Optional[ChainClient] = None


def init_chain_client(rpc_url: Optional[str], timeout: float = 10.0) -> ChainClient:
    """Initialize the global chain client."""
    global chain_client
    chain_client = ChainClient(rpc_url, timeout)
    if not rpc_url:
        logger.warning("RPC_URL not set; transaction building will fail until it is configured")
    return chain_client


async def get_chain_client() -> ChainClient:
    """Get the global chain client."""
    if chain_client is None:
        raise FreshnessTokenUnavailable("Chain client not initialized")
    return chain_client


async def close_chain_client():
    """Close the global chain client."""
    global chain_client
    if chain_client:
        await chain_client.close()
        chain_client = None
