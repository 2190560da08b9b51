"""
Contract Factory
Builds, signs and submits contract-creation transactions
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import rlp
from eth_utils import keccak, to_canonical_address, to_checksum_address
from web3 import Web3
from loguru import logger

from .artifacts import ContractArtifact
from .connection import NetworkConnection
from .exceptions import ConstructorArgumentError, DeploymentRevertedError
from .signer import Signer
from utils.gas_calculator import GasCalculator


def compute_contract_address(sender: str, nonce: int) -> str:
    """
    Address a CREATE transaction from sender at nonce will deploy to

    Args:
        sender: Deployer address
        nonce: Nonce of the creation transaction

    Returns:
        Checksummed contract address
    """
    encoded = rlp.encode([to_canonical_address(sender), nonce])
    return to_checksum_address(keccak(encoded)[12:])


@dataclass(frozen=True)
class DeploymentResult:
    """Confirmed contract creation"""

    address: str
    tx_hash: str
    receipt: Any

    @property
    def block_number(self) -> Optional[int]:
        return self.receipt.get('blockNumber')

    @property
    def gas_used(self) -> Optional[int]:
        return self.receipt.get('gasUsed')


class PendingDeployment:
    """
    Broadcast creation transaction that is not confirmed yet
    """

    def __init__(self, tx_hash: str, predicted_address: str, connection: NetworkConnection):
        self.tx_hash = tx_hash
        self.predicted_address = predicted_address
        self.connection = connection

    async def wait_for_deployment(self, timeout: Optional[float] = None) -> DeploymentResult:
        """
        Wait until the creation transaction is mined

        Args:
            timeout: Seconds to wait (None = web3 default)

        Returns:
            DeploymentResult

        Raises:
            DeploymentRevertedError: If the transaction failed on-chain
            web3.exceptions.TimeExhausted: If the receipt did not arrive in time
        """
        logger.info(f"Waiting for confirmation of {self.tx_hash}...")

        kwargs = {'timeout': timeout} if timeout is not None else {}
        receipt = self.connection.w3.eth.wait_for_transaction_receipt(self.tx_hash, **kwargs)

        if receipt['status'] != 1:
            raise DeploymentRevertedError(self.tx_hash, receipt)

        address = to_checksum_address(receipt['contractAddress'])

        if address != self.predicted_address:
            logger.warning(f"Deployed to {address}, expected {self.predicted_address}")

        return DeploymentResult(address=address, tx_hash=self.tx_hash, receipt=receipt)


class ContractFactory:
    """
    Deploys one compiled contract template with one signer
    """

    def __init__(self, artifact: ContractArtifact, signer: Signer):
        """
        Initialize Contract Factory

        Args:
            artifact: Deployable contract template
            signer: Account paying for and signing the deployment
        """
        self.artifact = artifact
        self.signer = signer
        self.gas_calculator = GasCalculator(signer.connection.w3)

    def _check_arguments(self, args: tuple):
        inputs = self.artifact.constructor_inputs

        if len(args) != len(inputs):
            expected = ", ".join(f"{i.get('type')} {i.get('name')}".strip() for i in inputs)
            raise ConstructorArgumentError(
                f"{self.artifact.contract_name} constructor takes {len(inputs)} "
                f"argument(s) ({expected}), got {len(args)}"
            )

    def build_transaction(self, *args) -> Dict:
        """
        Build the unsigned creation transaction

        Args:
            *args: Constructor arguments

        Returns:
            Transaction dict
        """
        self._check_arguments(args)

        w3 = self.signer.connection.w3
        sender = self.signer.address

        contract = w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        constructor = contract.constructor(*args)

        nonce = self.signer.get_nonce()
        gas_limit = constructor.estimate_gas({'from': sender})
        fee_params = self.gas_calculator.get_fee_params()

        logger.info(f"Gas limit: {gas_limit}")
        logger.info(
            f"Estimated deployment cost: "
            f"{self.gas_calculator.estimate_cost(gas_limit, fee_params)} (native units)"
        )

        transaction = {
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'chainId': w3.eth.chain_id
        }
        transaction.update(fee_params)

        return constructor.build_transaction(transaction)

    async def deploy(self, *args) -> PendingDeployment:
        """
        Sign and broadcast the creation transaction

        Args:
            *args: Constructor arguments

        Returns:
            PendingDeployment for the broadcast transaction
        """
        transaction = self.build_transaction(*args)
        predicted_address = compute_contract_address(self.signer.address, transaction['nonce'])

        logger.info("Signing transaction...")
        signed_tx = self.signer.sign_transaction(transaction)

        logger.info("Sending deployment transaction...")
        tx_hash = self.signer.connection.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        tx_hash = Web3.to_hex(tx_hash)

        logger.info(f"Transaction sent: {tx_hash}")

        return PendingDeployment(tx_hash, predicted_address, self.signer.connection)
