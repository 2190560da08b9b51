"""
Signer
Deployer credential loaded from the environment and bound to a connection
"""

import os
import re
from decimal import Decimal
from typing import Dict, Optional, Sequence
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from .connection import NetworkConnection
from .exceptions import InvalidCredentialError, MissingCredentialError

DEFAULT_KEY_ENV = 'PRIVATE_KEY'

_KEY_PATTERN = re.compile(r'^(0x)?[0-9a-fA-F]{64}$')


class Signer:
    """
    Signs transactions for one account on one network connection

    The connection is shared with the caller; the signer never closes it.
    """

    def __init__(self, account: LocalAccount, connection: NetworkConnection):
        """
        Initialize Signer

        Args:
            account: eth_account local account holding the private key
            connection: Network the signer sends to
        """
        self.account = account
        self.connection = connection

    @classmethod
    def from_key(cls, private_key: str, connection: NetworkConnection) -> "Signer":
        """
        Build a signer from a hex private key

        Raises:
            InvalidCredentialError: If the key is not 32 bytes of hex
        """
        key = (private_key or '').strip()

        if not _KEY_PATTERN.match(key):
            raise InvalidCredentialError("Private key must be 32 bytes of hex")

        if not key.startswith('0x'):
            key = '0x' + key

        try:
            account = Account.from_key(key)
        except ValueError as e:
            raise InvalidCredentialError(f"Invalid private key: {e}") from e

        return cls(account, connection)

    @classmethod
    def from_env(
        cls,
        connection: NetworkConnection,
        env_var: str = DEFAULT_KEY_ENV,
        fallback_keys: Optional[Sequence[str]] = None
    ) -> "Signer":
        """
        Build a signer from the environment

        Args:
            connection: Network the signer is bound to
            env_var: Environment variable holding the key
            fallback_keys: Keys embedded in a development network entry,
                used only when the variable is unset

        Returns:
            Signer

        Raises:
            MissingCredentialError: If no key is available
            InvalidCredentialError: If the key is malformed
        """
        private_key = os.getenv(env_var)

        if private_key:
            signer = cls.from_key(private_key, connection)
        elif fallback_keys:
            logger.warning(f"{env_var} not set, using development account of {connection.name}")
            signer = cls.from_key(fallback_keys[0], connection)
        else:
            raise MissingCredentialError(f"{env_var} must be set in the environment or .env")

        logger.info(f"Deployer account: {signer.address}")
        return signer

    @property
    def address(self) -> str:
        return self.account.address

    def get_nonce(self) -> int:
        """Next nonce, including transactions still in the mempool"""
        return self.connection.w3.eth.get_transaction_count(self.address, 'pending')

    def get_balance(self) -> Decimal:
        """
        Get native balance of the deployer

        Returns:
            Balance in whole native units
        """
        w3 = self.connection.w3
        balance_wei = w3.eth.get_balance(self.address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction dict

        Args:
            transaction: Fully populated transaction

        Returns:
            Signed transaction
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise
