"""Hardhat compiler artifact loading for evmchain-deploy library."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ArtifactNotFoundError, CompilerVersionMismatchError, DefectiveArtifactError
from .paths import get_artifact_paths
from .types import CompiledContract


def _read_json(file_path: Path) -> Dict[str, Any]:
    try:
        with open(file_path) as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(f"Compiled artifact not found at {file_path}") from e
    except json.JSONDecodeError as e:
        raise DefectiveArtifactError(f"Invalid JSON in {file_path}: {e}") from e


def parse_hardhat_artifact(file_path: Path) -> Dict[str, Any]:
    """
    Parse a Hardhat contract artifact JSON file.

    Args:
        file_path: Path to artifacts/{source}/{Name}.json

    Returns:
        Dictionary with keys: name, source_name, abi, bytecode

    Raises:
        ArtifactNotFoundError: If the file does not exist
        DefectiveArtifactError: If abi or creation bytecode is missing
    """
    data = _read_json(file_path)

    abi = data.get("abi")
    bytecode = data.get("bytecode")
    # Interfaces and abstract contracts compile to "0x"
    if abi is None or not bytecode or bytecode == "0x":
        raise DefectiveArtifactError(f"Artifact {file_path} is missing abi or bytecode")

    if not bytecode.startswith("0x"):
        bytecode = f"0x{bytecode}"

    return {
        "name": data.get("contractName", file_path.stem),
        "source_name": data.get("sourceName"),
        "abi": abi,
        "bytecode": bytecode,
    }


def find_build_info(artifact_path: Path, build_info_dir: Path) -> Optional[Path]:
    """
    Locate the build-info file an artifact was produced from.

    Hardhat writes a {Name}.dbg.json beside each artifact pointing at its
    build-info file. Falls back to the only file in build_info_dir when the
    debug file is absent.

    Returns:
        Path to the build-info JSON, or None if it cannot be determined
    """
    dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")
    if dbg_path.exists():
        dbg = _read_json(dbg_path)
        if "buildInfo" in dbg:
            return (dbg_path.parent / dbg["buildInfo"]).resolve()

    if build_info_dir.exists():
        candidates = sorted(build_info_dir.glob("*.json"))
        if len(candidates) == 1:
            return candidates[0]

    return None


def parse_build_info(file_path: Path) -> Dict[str, Any]:
    """
    Parse a Hardhat build-info file.

    Returns:
        Dictionary with keys: solc_version, solc_long_version, input

    Raises:
        ArtifactNotFoundError: If the file does not exist
        DefectiveArtifactError: If solc version or compiler input is missing
    """
    data = _read_json(file_path)

    for required in ("solcVersion", "input"):
        if required not in data:
            raise DefectiveArtifactError(f"Build info {file_path} is missing '{required}'")

    return {
        "solc_version": data["solcVersion"],
        "solc_long_version": data.get("solcLongVersion", data["solcVersion"]),
        "input": data["input"],
    }


def load_compiled_contract(
    contract_name: str,
    artifacts_root: Optional[Union[Path, str]] = None,
    expected_compiler_version: Optional[str] = None,
) -> CompiledContract:
    """
    Load a contract's ABI, bytecode and, when available, its compiler input.

    Args:
        contract_name: Contract name, e.g. "Pos25"
        artifacts_root: Hardhat artifacts directory (defaults to ./artifacts)
        expected_compiler_version: Pinned solc version, checked against build info

    Returns:
        CompiledContract

    Raises:
        ArtifactNotFoundError: If the contract artifact is not found
        DefectiveArtifactError: If the artifact or build info is incomplete
        CompilerVersionMismatchError: If build info was produced by another solc
    """
    artifact_path, build_info_dir = get_artifact_paths(contract_name, artifacts_root)
    artifact = parse_hardhat_artifact(artifact_path)

    compiled = CompiledContract(
        name=artifact["name"],
        source_name=artifact["source_name"] or f"contracts/{contract_name}.sol",
        abi=artifact["abi"],
        bytecode=artifact["bytecode"],
    )

    build_info_path = find_build_info(artifact_path, build_info_dir)
    if build_info_path is None:
        return compiled

    build_info = parse_build_info(build_info_path)
    if (
        expected_compiler_version is not None
        and build_info["solc_version"] != expected_compiler_version
    ):
        raise CompilerVersionMismatchError(
            f"{contract_name} was compiled with solc {build_info['solc_version']}, "
            f"expected {expected_compiler_version}"
        )

    compiled.compiler_version = build_info["solc_long_version"]
    compiled.standard_json_input = build_info["input"]
    return compiled
