"""
Configuration Package
Compiler settings and named network endpoints
"""

from .settings import (
    CompilerSettings,
    DeployConfig,
    NetworkConfig,
    OptimizerSettings,
    load_config,
)

__all__ = [
    'CompilerSettings',
    'DeployConfig',
    'NetworkConfig',
    'OptimizerSettings',
    'load_config'
]
