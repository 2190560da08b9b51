"""
Blockchain Interaction Package
Handles network connection, signing, artifact loading, and contract creation
"""

from .connection import NetworkConnection
from .signer import Signer
from .artifacts import ContractArtifact, load_artifact
from .contract_factory import ContractFactory, DeploymentResult, PendingDeployment

__all__ = [
    'NetworkConnection',
    'Signer',
    'ContractArtifact',
    'load_artifact',
    'ContractFactory',
    'DeploymentResult',
    'PendingDeployment'
]
