"""
CreatorFactory Deployment
Deploys the CreatorFactory contract and prints its address
"""

import asyncio
import os
import sys
from decimal import Decimal
from typing import Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain import ContractFactory, DeploymentResult, NetworkConnection, Signer, load_artifact
from blockchain.artifacts import check_compiler_settings
from config import CompilerSettings, NetworkConfig, load_config

CONTRACT_NAME = "CreatorFactory"

# Constructor argument: 0.001 native units in the smallest denomination
FACTORY_FEE = Web3.to_wei(Decimal("0.001"), "ether")


def configure_logging():
    """Send logs to stderr, and to a rotating file when DEPLOY_LOG_FILE is set"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="INFO"
    )

    log_file = os.getenv('DEPLOY_LOG_FILE')

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


async def deploy_factory(
    network: NetworkConfig,
    artifacts_dir: str = "artifacts",
    compiler: Optional[CompilerSettings] = None,
    confirmation_timeout: Optional[float] = None
) -> DeploymentResult:
    """
    Deploy CreatorFactory to a network

    Args:
        network: Target network
        artifacts_dir: Hardhat artifacts directory
        compiler: Configured compiler, checked against the artifact build
        confirmation_timeout: Seconds to wait for the receipt (None = web3 default)

    Returns:
        DeploymentResult of the confirmed deployment
    """
    connection = NetworkConnection.from_network_config(network)
    connection.connect()

    fallback_keys = network.accounts if network.has_embedded_accounts else None
    signer = Signer.from_env(connection, fallback_keys=fallback_keys)
    logger.info(f"Account balance: {signer.get_balance()} (native units)")

    artifact = load_artifact(CONTRACT_NAME, artifacts_dir)

    for mismatch in check_compiler_settings(artifact, compiler):
        logger.warning(f"{CONTRACT_NAME} build differs from configuration: {mismatch}")

    factory = ContractFactory(artifact, signer)

    logger.info(f"Deploying {CONTRACT_NAME} with fee {FACTORY_FEE} wei")
    pending = await factory.deploy(FACTORY_FEE)

    result = await pending.wait_for_deployment(confirmation_timeout)

    logger.success(f"✅ {CONTRACT_NAME} deployed successfully!")
    logger.success(f"Transaction hash: {result.tx_hash}")
    logger.success(f"Block: {result.block_number}")
    logger.success(f"Gas used: {result.gas_used}")

    return result


async def main() -> int:
    """
    Main entry point

    Returns:
        Process exit status
    """
    load_dotenv()
    configure_logging()

    try:
        config = load_config()
        network = config.get_network(os.getenv('DEPLOY_NETWORK'))

        result = await deploy_factory(
            network,
            artifacts_dir=config.artifacts_dir,
            compiler=config.primary_compiler
        )
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        return 1

    print(f"Factory deployed to: {result.address}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        sys.exit(1)
