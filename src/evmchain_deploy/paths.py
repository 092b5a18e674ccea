"""Path management utilities for evmchain-deploy library."""

from pathlib import Path
from typing import Optional, Union


def get_default_artifacts_dir() -> Path:
    """
    Get default Hardhat artifacts directory.

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_artifact_paths(
    contract_name: str,
    artifacts_root: Optional[Union[Path, str]] = None,
    source_name: Optional[str] = None,
) -> tuple[Path, Path]:
    """
    Get compiled artifact file paths for a contract.

    Args:
        contract_name: Contract name, e.g. "Pos25"
        artifacts_root: Custom artifacts directory (defaults to ./artifacts)
        source_name: Solidity source path (defaults to contracts/{contract_name}.sol)

    Returns:
        Tuple of (artifact_path, build_info_dir)
    """
    if artifacts_root is None:
        artifacts_root = get_default_artifacts_dir()
    else:
        artifacts_root = Path(artifacts_root).absolute()

    if source_name is None:
        source_name = f"contracts/{contract_name}.sol"

    artifact_path = artifacts_root / source_name / f"{contract_name}.json"
    build_info_dir = artifacts_root / "build-info"

    return (artifact_path, build_info_dir)
