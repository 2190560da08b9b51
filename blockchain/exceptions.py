"""
Deployment Exceptions
Error hierarchy raised by the deployment building blocks
"""


class DeploymentError(Exception):
    """Base exception for every deployment failure."""

    pass


class ConfigError(DeploymentError, ValueError):
    """Raised when the deployment configuration is malformed."""

    pass


class ConfigNotFoundError(ConfigError, FileNotFoundError):
    """Raised when the configuration file does not exist."""

    pass


class NetworkNotFoundError(ConfigError):
    """Raised when the requested network is not declared in the configuration."""

    pass


class NetworkConnectionError(DeploymentError, ConnectionError):
    """Raised when the RPC endpoint cannot be reached."""

    pass


class ChainIdMismatchError(DeploymentError):
    """Raised when the node reports a different chain id than declared."""

    pass


class CredentialError(DeploymentError):
    """Base exception for signing key problems."""

    pass


class MissingCredentialError(CredentialError):
    """Raised when no signing key is available."""

    pass


class InvalidCredentialError(CredentialError, ValueError):
    """Raised when the signing key cannot be parsed."""

    pass


class ArtifactError(DeploymentError):
    """Base exception for compiled artifact problems."""

    pass


class ArtifactNotFoundError(ArtifactError, FileNotFoundError):
    """Raised when no compiled artifact exists for a contract name."""

    pass


class AmbiguousArtifactError(ArtifactError):
    """Raised when several sources define a contract with the same name."""

    pass


class ArtifactFormatError(ArtifactError, ValueError):
    """Raised when an artifact is unreadable or cannot be deployed."""

    pass


class ConstructorArgumentError(DeploymentError, TypeError):
    """Raised when constructor arguments do not match the contract ABI."""

    pass


class DeploymentRevertedError(DeploymentError):
    """Raised when the creation transaction is mined with a failed status."""

    def __init__(self, tx_hash: str, receipt=None):
        self.tx_hash = tx_hash
        self.receipt = receipt
        super().__init__(f"Deployment transaction {tx_hash} reverted")
