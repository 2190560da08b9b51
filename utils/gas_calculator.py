"""
Gas Calculator
Fee parameters for the deployment transaction
"""

from decimal import Decimal
from typing import Dict
from web3 import Web3
from loguru import logger

DEFAULT_PRIORITY_FEE_GWEI = 1


class GasCalculator:
    """
    Chooses between EIP-1559 and legacy pricing from the latest block
    """

    def __init__(self, w3: Web3):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
        """
        self.w3 = w3

    def get_priority_fee(self) -> int:
        """
        Get priority fee (tip) suggested by the node

        Returns:
            Priority fee in wei, 1 gwei when the node has no suggestion
        """
        try:
            return int(self.w3.eth.max_priority_fee)
        except Exception as e:
            logger.warning(f"Priority fee unavailable ({e}), using {DEFAULT_PRIORITY_FEE_GWEI} gwei")
            return self.w3.to_wei(DEFAULT_PRIORITY_FEE_GWEI, 'gwei')

    def get_fee_params(self) -> Dict[str, int]:
        """
        Get fee fields for a transaction

        Returns:
            {'maxFeePerGas', 'maxPriorityFeePerGas'} when the chain has a
            base fee, {'gasPrice'} otherwise
        """
        latest_block = self.w3.eth.get_block('latest')
        base_fee_wei = latest_block.get('baseFeePerGas')

        if base_fee_wei is None:
            gas_price_wei = int(self.w3.eth.gas_price)
            logger.debug(f"Legacy gas price: {self.w3.from_wei(gas_price_wei, 'gwei')} gwei")
            return {'gasPrice': gas_price_wei}

        priority_fee_wei = self.get_priority_fee()

        # Max fee = base fee * 2 + priority fee (buffer for fluctuations)
        max_fee_wei = (int(base_fee_wei) * 2) + priority_fee_wei

        logger.debug(
            f"EIP-1559 fees: base {self.w3.from_wei(base_fee_wei, 'gwei')} gwei, "
            f"tip {self.w3.from_wei(priority_fee_wei, 'gwei')} gwei"
        )

        return {
            'maxFeePerGas': max_fee_wei,
            'maxPriorityFeePerGas': priority_fee_wei
        }

    def estimate_cost(self, gas_limit: int, fee_params: Dict[str, int]) -> Decimal:
        """
        Upper bound of the transaction cost

        Args:
            gas_limit: Gas limit of the transaction
            fee_params: Output of get_fee_params()

        Returns:
            Cost in whole native units
        """
        price_wei = fee_params.get('maxFeePerGas', fee_params.get('gasPrice', 0))
        return Decimal(str(self.w3.from_wei(gas_limit * price_wei, 'ether')))
