"""Shared pytest fixtures for deployment tests."""

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import Mock, patch

import pytest
from web3 import Web3

from blockchain.artifacts import ContractArtifact
from blockchain.connection import NetworkConnection

# Development account embedded in the develop_bitfinity network entry
DEV_PRIVATE_KEY = "0xe8f100acb99f812bc252ee898f2f71bd2f78c84dddc82ae73386e5c6f2cc6754"

TESTNET_URL = "https://testnet.bitfinity.network"
TESTNET_CHAIN_ID = 355113

CREATOR_FACTORY_ABI = [
    {
        "inputs": [{"internalType": "uint256", "name": "_creationFee", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "constructor"
    },
    {
        "inputs": [],
        "name": "creationFee",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]

CREATOR_FACTORY_BYTECODE = "0x608060405234801561001057600080fd5b50"


def write_artifact(
    artifacts_dir: Path,
    source_name: str = "contracts/CreatorFactory.sol",
    contract_name: str = "CreatorFactory",
    **overrides: Any
) -> Path:
    """Write a Hardhat-style artifact and return its path"""
    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": source_name,
        "abi": CREATOR_FACTORY_ABI,
        "bytecode": CREATOR_FACTORY_BYTECODE,
        "deployedBytecode": "0x6080",
        "linkReferences": {},
        "deployedLinkReferences": {}
    }
    artifact.update(overrides)

    path = artifacts_dir / source_name / f"{contract_name}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(artifact))
    return path


def write_build_info(artifact_path: Path, solc_version: str, optimizer: Dict[str, Any]) -> Path:
    """Write the .dbg.json pointer and the build-info file it references"""
    artifacts_dir = artifact_path.parents[2]
    build_info_path = artifacts_dir / "build-info" / "abc123.json"
    build_info_path.parent.mkdir(parents=True, exist_ok=True)
    build_info_path.write_text(json.dumps({
        "_format": "hh-sol-build-info-1",
        "solcVersion": solc_version,
        "input": {"language": "Solidity", "settings": {"optimizer": optimizer}}
    }))

    dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")
    dbg_path.write_text(json.dumps({
        "_format": "hh-sol-dbg-1",
        "buildInfo": "../../build-info/abc123.json"
    }))
    return build_info_path


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Artifacts directory holding a compiled CreatorFactory"""
    root = tmp_path / "artifacts"
    write_artifact(root)
    return root


@pytest.fixture
def artifact(tmp_path: Path) -> ContractArtifact:
    """In-memory CreatorFactory template"""
    return ContractArtifact(
        contract_name="CreatorFactory",
        source_name="contracts/CreatorFactory.sol",
        abi=CREATOR_FACTORY_ABI,
        bytecode=CREATOR_FACTORY_BYTECODE,
        path=tmp_path / "CreatorFactory.json"
    )


@pytest.fixture
def w3() -> Mock:
    """Mock Web3 instance behaving like a reachable EIP-1559 node"""
    w3 = Mock()
    w3.to_wei = Web3.to_wei
    w3.from_wei = Web3.from_wei
    w3.is_connected.return_value = True

    w3.eth.chain_id = TESTNET_CHAIN_ID
    w3.eth.max_priority_fee = Web3.to_wei(1, 'gwei')
    w3.eth.gas_price = Web3.to_wei(3, 'gwei')
    w3.eth.get_block.return_value = {'number': 100, 'baseFeePerGas': Web3.to_wei(2, 'gwei')}
    w3.eth.get_transaction_count.return_value = 0
    w3.eth.get_balance.return_value = Web3.to_wei(1, 'ether')
    w3.eth.send_raw_transaction.return_value = bytes.fromhex("ab" * 32)

    constructor = w3.eth.contract.return_value.constructor.return_value
    constructor.estimate_gas.return_value = 1_200_000
    constructor.build_transaction.side_effect = lambda tx: dict(
        tx, data=CREATOR_FACTORY_BYTECODE + "00" * 32, value=0
    )
    return w3


@pytest.fixture
def connection(w3: Mock) -> NetworkConnection:
    """Testnet connection backed by the mock node"""
    connection = NetworkConnection(
        TESTNET_URL,
        chain_id=TESTNET_CHAIN_ID,
        name="testnet.bitfinity.network"
    )
    connection.w3 = w3
    return connection


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep a developer's .env and shell variables out of the tests"""
    for var in ("PRIVATE_KEY", "DEPLOY_NETWORK", "DEPLOY_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)

    with patch("deploy.load_dotenv"):
        yield
