"""Command-line entry point: evmchain-deploy --network goerli"""

import argparse
import logging
import sys
from functools import lru_cache, partial
from typing import List, Optional

from .artifacts import load_compiled_contract
from .config import load_config
from .constants import DEFAULT_CONTRACT_NAME, DEFAULT_POLL_INTERVAL, NETWORK_CONFIG
from .exceptions import DeploymentError
from .orchestrator import DeploymentOrchestrator
from .transport import Web3Transport
from .types import ContractArtifact, DeploymentConfig
from .verification import EtherscanVerifier

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="evmchain-deploy",
        description="Deploy a compiled contract and verify it on Etherscan",
    )
    parser.add_argument("--network", required=True, choices=sorted(NETWORK_CONFIG))
    parser.add_argument("--contract", default=DEFAULT_CONTRACT_NAME, help="Contract name")
    parser.add_argument("--artifacts-dir", default=None, help="Hardhat artifacts directory")
    parser.add_argument("--env-file", default=".env", help="Optional .env file")
    parser.add_argument(
        "--confirmation-timeout",
        type=float,
        default=None,
        help="Seconds to wait for each confirmation depth (default: no limit)",
    )
    parser.add_argument("--poll-interval", type=float, default=DEFAULT_POLL_INTERVAL)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_orchestrator(config: DeploymentConfig, contract_name: str) -> DeploymentOrchestrator:
    """Wire the web3 transport and Etherscan verifier for a resolved config."""
    # Parsed once, shared by the transport and the verifier
    load_contract = lru_cache(maxsize=None)(
        partial(
            load_compiled_contract,
            artifacts_root=config.artifacts_dir,
            expected_compiler_version=config.compiler_version,
        )
    )
    transport = Web3Transport.from_profile(
        config.network,
        load_contract,
        poll_interval=config.poll_interval,
        timeout=config.confirmation_timeout,
    )

    verifier = None
    if config.verification.enabled:
        verifier = EtherscanVerifier(
            api_key=config.verification.api_key,
            chain_id=config.network.chain_id,
            compiled=load_contract(contract_name),
        )

    return DeploymentOrchestrator(config, transport, verifier)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one deployment.

    Returns:
        0 once the contract is deployed and confirmed, whatever the verification
        outcome; 1 on configuration or deployment errors
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(
            args.network,
            env_file=args.env_file,
            artifacts_dir=args.artifacts_dir,
            poll_interval=args.poll_interval,
            confirmation_timeout=args.confirmation_timeout,
        )
        orchestrator = build_orchestrator(config, args.contract)
    except DeploymentError as e:
        logger.error("Setup failed: %s", e)
        return 1

    try:
        orchestrator.run(ContractArtifact(name=args.contract))
    except Exception:
        logger.exception("Deployment failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
