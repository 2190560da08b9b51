"""
Gas Calculator Tests
"""

from decimal import Decimal
from unittest.mock import PropertyMock

import pytest
from web3 import Web3

from utils.gas_calculator import GasCalculator


class TestGasCalculator:
    """Test fee parameter selection"""

    def test_eip1559_fees(self, w3):
        """Max fee is twice the base fee plus the tip"""
        fees = GasCalculator(w3).get_fee_params()

        assert fees == {
            'maxFeePerGas': Web3.to_wei(5, 'gwei'),
            'maxPriorityFeePerGas': Web3.to_wei(1, 'gwei')
        }

    def test_legacy_fees(self, w3):
        """Chains without a base fee use gasPrice"""
        w3.eth.get_block.return_value = {'number': 100}

        assert GasCalculator(w3).get_fee_params() == {'gasPrice': Web3.to_wei(3, 'gwei')}

    def test_priority_fee_fallback(self, w3):
        """Nodes without eth_maxPriorityFeePerGas get a 1 gwei tip"""
        type(w3.eth).max_priority_fee = PropertyMock(side_effect=ValueError("method not found"))

        fees = GasCalculator(w3).get_fee_params()

        assert fees['maxPriorityFeePerGas'] == Web3.to_wei(1, 'gwei')
        assert fees['maxFeePerGas'] == Web3.to_wei(5, 'gwei')

    def test_estimate_cost(self, w3):
        calculator = GasCalculator(w3)

        cost = calculator.estimate_cost(1_000_000, {'maxFeePerGas': Web3.to_wei(5, 'gwei')})

        assert cost == Decimal("0.005")

    def test_estimate_cost_legacy(self, w3):
        calculator = GasCalculator(w3)

        cost = calculator.estimate_cost(21_000, {'gasPrice': Web3.to_wei(10, 'gwei')})

        assert cost == Decimal("0.00021")


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
