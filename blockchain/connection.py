"""
Network Connection
Single RPC channel to the target node, with chain identity checks
"""

from typing import Optional
from web3 import Web3
from loguru import logger

from .exceptions import ChainIdMismatchError, NetworkConnectionError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class NetworkConnection:
    """
    HTTP connection to one blockchain node

    The chain id and name are the identity the caller expects the node to
    have. Name resolution is disabled when no ENS registry is configured.
    """

    def __init__(
        self,
        url: str,
        chain_id: Optional[int] = None,
        name: Optional[str] = None,
        ens_address: Optional[str] = None,
        request_timeout: Optional[float] = None
    ):
        """
        Initialize Network Connection

        Args:
            url: HTTP RPC endpoint
            chain_id: Expected chain id (None = accept whatever the node reports)
            name: Human-readable network name
            ens_address: ENS registry address (None or zero address = disabled)
            request_timeout: Per-request HTTP timeout in seconds (None = library default)
        """
        self.url = url
        self.chain_id = chain_id
        self.name = name or url
        self.ens_address = ens_address

        request_kwargs = {'timeout': request_timeout} if request_timeout else None
        provider = Web3.HTTPProvider(url, request_kwargs=request_kwargs)

        if self.ens_enabled:
            self.w3 = Web3(provider)
        else:
            self.w3 = Web3(provider, ens=None)

    @classmethod
    def from_network_config(cls, network) -> "NetworkConnection":
        """Build a connection from a config.NetworkConfig entry"""
        return cls(
            url=network.url,
            chain_id=network.chain_id,
            name=network.name or network.key,
            ens_address=network.ens_address
        )

    @property
    def ens_enabled(self) -> bool:
        return bool(self.ens_address) and self.ens_address != ZERO_ADDRESS

    def connect(self) -> Web3:
        """
        Check the node is reachable and on the expected chain

        Returns:
            Connected Web3 instance

        Raises:
            NetworkConnectionError: If the node does not answer
            ChainIdMismatchError: If the node reports another chain id
        """
        logger.info(f"Connecting to {self.describe()}...")

        if not self.w3.is_connected():
            raise NetworkConnectionError(f"Failed to connect to {self.url}")

        reported_chain_id = self.w3.eth.chain_id

        if self.chain_id is not None and reported_chain_id != self.chain_id:
            raise ChainIdMismatchError(
                f"{self.url} reports chain id {reported_chain_id}, "
                f"expected {self.chain_id} ({self.name})"
            )

        logger.success(f"Connected to {self.name} (chain id {reported_chain_id})")
        return self.w3

    def describe(self) -> str:
        """Short label for log lines"""
        if self.chain_id is None:
            return f"{self.name} [{self.url}]"
        return f"{self.name} [{self.url}, chain {self.chain_id}]"
