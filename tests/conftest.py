"""Shared pytest fixtures for evmchain-deploy tests."""

import json
from pathlib import Path
from typing import Dict, List

import pytest

from evmchain_deploy.types import DeploymentConfig, NetworkProfile, VerificationCredential
from helpers import HARDHAT_PRIVATE_KEY, POS25_ABI


@pytest.fixture
def environ() -> Dict[str, str]:
    """Environment with every variable the goerli profile needs."""
    return {
        "PRIVATE_KEY": HARDHAT_PRIVATE_KEY[2:],
        "PROVIDER_TESTNET_URL": "http://testnet-rpc.example.com",
        "PROVIDER_MAINNET_URL": "http://mainnet-rpc.example.com",
        "ETHERSCAN_API_KEY": "TESTAPIKEY",
    }


@pytest.fixture
def goerli_profile() -> NetworkProfile:
    """Goerli profile signing with Hardhat's first default account."""
    return NetworkProfile(
        name="goerli",
        chain_id=5,
        rpc_endpoint="http://testnet-rpc.example.com",
        signing_credential=HARDHAT_PRIVATE_KEY,
        block_explorer_url="https://goerli.etherscan.io",
    )


@pytest.fixture
def verifying_config(goerli_profile: NetworkProfile) -> DeploymentConfig:
    """Config with a verification API key."""
    return DeploymentConfig(
        network=goerli_profile,
        verification=VerificationCredential(api_key="TESTAPIKEY"),
    )


@pytest.fixture
def non_verifying_config(goerli_profile: NetworkProfile) -> DeploymentConfig:
    """Config without a verification API key."""
    return DeploymentConfig(network=goerli_profile, verification=VerificationCredential())


@pytest.fixture
def events() -> List[str]:
    """Ordered log of calls shared by the stubs of one test."""
    return []


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Hardhat artifacts tree for Pos25 compiled with solc 0.8.19."""
    root = tmp_path / "artifacts"
    contract_dir = root / "contracts" / "Pos25.sol"
    build_info_dir = root / "build-info"
    contract_dir.mkdir(parents=True)
    build_info_dir.mkdir(parents=True)

    with open(contract_dir / "Pos25.json", "w") as f:
        json.dump(
            {
                "_format": "hh-sol-artifact-1",
                "contractName": "Pos25",
                "sourceName": "contracts/Pos25.sol",
                "abi": POS25_ABI,
                "bytecode": "0x6080604052348015600f57600080fd5b50",
                "deployedBytecode": "0x6080604052",
            },
            f,
        )

    with open(contract_dir / "Pos25.dbg.json", "w") as f:
        json.dump({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc123.json"}, f)

    with open(build_info_dir / "abc123.json", "w") as f:
        json.dump(
            {
                "_format": "hh-sol-build-info-1",
                "solcVersion": "0.8.19",
                "solcLongVersion": "0.8.19+commit.7dd6d404",
                "input": {
                    "language": "Solidity",
                    "sources": {"contracts/Pos25.sol": {"content": "contract Pos25 {}"}},
                    "settings": {"optimizer": {"enabled": False, "runs": 200}},
                },
            },
            f,
        )

    return root
