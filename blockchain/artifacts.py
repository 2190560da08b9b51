"""
Contract Artifacts
Resolves compiled Hardhat artifacts into deployable templates
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from loguru import logger

from .exceptions import AmbiguousArtifactError, ArtifactFormatError, ArtifactNotFoundError

BUILD_INFO_DIR = 'build-info'


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract template"""

    contract_name: str
    source_name: str  # e.g. "contracts/CreatorFactory.sol"
    abi: List[Dict[str, Any]]
    bytecode: str
    path: Path
    link_references: Dict[str, Any] = field(default_factory=dict)

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"

    @property
    def is_deployable(self) -> bool:
        return self.bytecode not in ('', '0x') and not self.link_references

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for entry in self.abi:
            if entry.get('type') == 'constructor':
                return entry.get('inputs', [])
        return []


def find_artifact(name: str, artifacts_dir: Union[Path, str] = 'artifacts') -> Path:
    """
    Locate the artifact file for a contract

    Args:
        name: Contract name ("CreatorFactory") or fully qualified
            name ("contracts/CreatorFactory.sol:CreatorFactory")
        artifacts_dir: Hardhat artifacts directory

    Returns:
        Path to the artifact JSON

    Raises:
        ArtifactNotFoundError: If no artifact matches
        AmbiguousArtifactError: If several sources define the name
    """
    root = Path(artifacts_dir)

    if not root.is_dir():
        raise ArtifactNotFoundError(
            f"Artifacts directory not found: {root}. Compile the contracts first"
        )

    if ':' in name:
        source_name, contract_name = name.rsplit(':', 1)
        path = root / source_name / f"{contract_name}.json"

        if not path.is_file():
            raise ArtifactNotFoundError(f"Artifact for {name} not found at {path}")

        return path

    candidates = sorted(
        path for path in root.rglob(f"{name}.json")
        if BUILD_INFO_DIR not in path.relative_to(root).parts
    )

    if not candidates:
        raise ArtifactNotFoundError(
            f"Artifact for contract {name} not found in {root}. Compile the contracts first"
        )

    if len(candidates) > 1:
        qualified = [
            f"{candidate.parent.relative_to(root).as_posix()}:{name}"
            for candidate in candidates
        ]
        raise AmbiguousArtifactError(
            f"Multiple artifacts for contract {name}, use a fully qualified name: "
            + ", ".join(qualified)
        )

    return candidates[0]


def load_artifact(name: str, artifacts_dir: Union[Path, str] = 'artifacts') -> ContractArtifact:
    """
    Load a deployable contract template

    Args:
        name: Contract name or fully qualified name
        artifacts_dir: Hardhat artifacts directory

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: If no artifact matches
        ArtifactFormatError: If the artifact is unreadable, abstract, or needs linking
    """
    path = find_artifact(name, artifacts_dir)

    try:
        with open(path, 'r') as f:
            contract_json = json.load(f)
    except json.JSONDecodeError as e:
        raise ArtifactFormatError(f"Invalid JSON in artifact {path}: {e}") from e

    try:
        artifact = ContractArtifact(
            contract_name=contract_json['contractName'],
            source_name=contract_json.get('sourceName', ''),
            abi=contract_json['abi'],
            bytecode=contract_json['bytecode'],
            path=path,
            link_references=contract_json.get('linkReferences') or {}
        )
    except KeyError as e:
        raise ArtifactFormatError(f"Artifact {path} is missing field {e}") from e

    if not artifact.is_deployable:
        if artifact.link_references:
            libraries = ", ".join(
                f"{source}:{library}"
                for source, libs in artifact.link_references.items()
                for library in libs
            )
            raise ArtifactFormatError(
                f"Contract {artifact.contract_name} needs linked libraries: {libraries}"
            )

        raise ArtifactFormatError(
            f"Contract {artifact.contract_name} is abstract and can't be deployed"
        )

    logger.info(f"Loaded artifact {artifact.fully_qualified_name}")
    return artifact


def read_build_settings(artifact_path: Union[Path, str]) -> Optional[Dict[str, Any]]:
    """
    Read the compiler settings an artifact was built with

    Follows the <Name>.dbg.json pointer to the build-info file.

    Args:
        artifact_path: Path to the artifact JSON

    Returns:
        Dict with 'solc_version' and 'optimizer', or None when unavailable
    """
    artifact_path = Path(artifact_path)
    dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")

    if not dbg_path.is_file():
        return None

    try:
        with open(dbg_path, 'r') as f:
            build_info_ref = json.load(f)['buildInfo']

        with open(dbg_path.parent / build_info_ref, 'r') as f:
            build_info = json.load(f)
    except (OSError, KeyError, json.JSONDecodeError) as e:
        logger.debug(f"Build info unavailable for {artifact_path}: {e}")
        return None

    settings = build_info.get('input', {}).get('settings', {})

    return {
        'solc_version': build_info.get('solcVersion'),
        'optimizer': settings.get('optimizer', {})
    }


def check_compiler_settings(artifact: ContractArtifact, compiler) -> List[str]:
    """
    Compare an artifact's build settings with a configured compiler

    Args:
        artifact: Loaded artifact
        compiler: config.CompilerSettings

    Returns:
        List of mismatch descriptions (empty when matching or unknown)
    """
    build = read_build_settings(artifact.path)

    if build is None or compiler is None:
        return []

    mismatches = []

    if build['solc_version'] and build['solc_version'] != compiler.version:
        mismatches.append(
            f"solc {build['solc_version']} used, {compiler.version} configured"
        )

    optimizer = build['optimizer']
    enabled = bool(optimizer.get('enabled', False))

    if enabled != compiler.optimizer.enabled:
        mismatches.append(
            f"optimizer enabled={enabled}, configured {compiler.optimizer.enabled}"
        )
    elif enabled and optimizer.get('runs') != compiler.optimizer.runs:
        mismatches.append(
            f"optimizer runs={optimizer.get('runs')}, configured {compiler.optimizer.runs}"
        )

    return mismatches
