"""
Deployment Settings
Loads compiler and network declarations from deploy_config.json
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from blockchain.exceptions import ConfigError, ConfigNotFoundError, NetworkNotFoundError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "deploy_config.json"


@dataclass(frozen=True)
class OptimizerSettings:
    """Solidity optimizer switch and run count."""

    enabled: bool = False
    runs: int = 200


@dataclass(frozen=True)
class CompilerSettings:
    """A single solc compiler declaration."""

    version: str
    optimizer: OptimizerSettings = field(default_factory=OptimizerSettings)


@dataclass(frozen=True)
class NetworkConfig:
    """A named RPC endpoint."""

    key: str  # e.g. "testnet_bitfinity"
    url: str
    chain_id: Optional[int] = None
    name: Optional[str] = None
    ens_address: Optional[str] = None

    # Plain-text keys, only ever declared for local development nodes
    accounts: List[str] = field(default_factory=list)

    @property
    def has_embedded_accounts(self) -> bool:
        return bool(self.accounts)


@dataclass(frozen=True)
class DeployConfig:
    """Everything the deployment procedure reads at start-up."""

    compilers: List[CompilerSettings]
    networks: Dict[str, NetworkConfig]
    default_network: str
    artifacts_dir: str = "artifacts"

    @property
    def primary_compiler(self) -> Optional[CompilerSettings]:
        return self.compilers[0] if self.compilers else None

    def get_network(self, key: Optional[str] = None) -> NetworkConfig:
        """
        Look up a network by key

        Args:
            key: Network key (None = default network)

        Returns:
            NetworkConfig

        Raises:
            NetworkNotFoundError: If the key is not declared
        """
        key = key or self.default_network

        if key not in self.networks:
            available = ", ".join(sorted(self.networks)) or "none"
            raise NetworkNotFoundError(
                f"Network '{key}' not found in configuration (available: {available})"
            )

        return self.networks[key]


def _parse_compiler(data: Dict[str, Any]) -> CompilerSettings:
    optimizer = data.get("settings", {}).get("optimizer", {})

    return CompilerSettings(
        version=str(data["version"]),
        optimizer=OptimizerSettings(
            enabled=bool(optimizer.get("enabled", False)),
            runs=int(optimizer.get("runs", 200)),
        ),
    )


def _parse_network(key: str, data: Dict[str, Any]) -> NetworkConfig:
    chain_id = data.get("chain_id")

    return NetworkConfig(
        key=key,
        url=str(data["url"]),
        chain_id=int(chain_id) if chain_id is not None else None,
        name=data.get("name"),
        ens_address=data.get("ens_address"),
        accounts=list(data.get("accounts", [])),
    )


def load_config(path: Optional[Union[Path, str]] = None) -> DeployConfig:
    """
    Load deployment configuration from JSON

    Args:
        path: Config file path (None = deploy_config.json shipped with this package)

    Returns:
        DeployConfig

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigError: If the file is not valid JSON or misses required keys
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise ConfigNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    try:
        compilers = [
            _parse_compiler(entry)
            for entry in raw.get("solidity", {}).get("compilers", [])
        ]
        networks = {
            key: _parse_network(key, entry)
            for key, entry in raw["networks"].items()
        }
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Malformed configuration in {config_path}: {e}") from e

    default_network = raw.get("default_network") or next(iter(networks), "")

    config = DeployConfig(
        compilers=compilers,
        networks=networks,
        default_network=default_network,
        artifacts_dir=raw.get("paths", {}).get("artifacts", "artifacts"),
    )

    logger.debug(f"Loaded configuration from {config_path} ({len(networks)} networks)")
    return config
