"""Network configuration resolution for evmchain-deploy library."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from .constants import (
    DEFAULT_POLL_INTERVAL,
    ETHERSCAN_API_KEY_ENV,
    NETWORK_CONFIG,
    PRIVATE_KEY_ENV,
    SOLIDITY_VERSION,
)
from .exceptions import MissingEndpointError, MissingSigningCredentialError, UnknownNetworkError
from .paths import get_default_artifacts_dir
from .types import DeploymentConfig, NetworkProfile, VerificationCredential

logger = logging.getLogger(__name__)


def _normalize_private_key(value: str) -> str:
    """Add the 0x prefix the signer expects; the key itself is not validated."""
    if value.startswith(("0x", "0X")):
        return value
    return f"0x{value}"


def resolve_network_profile(
    name: str, environ: Optional[Mapping[str, str]] = None
) -> NetworkProfile:
    """
    Build the connection profile for a named network.

    Pure lookup: the RPC endpoint and signing credential are copied from the
    environment without any validation. Missing values come back empty and are
    reported by load_config().

    Args:
        name: Network name ("goerli" or "mainnet")
        environ: Environment mapping (defaults to os.environ)

    Returns:
        NetworkProfile for the network

    Raises:
        UnknownNetworkError: If name is not a supported network
    """
    if environ is None:
        environ = os.environ

    if name not in NETWORK_CONFIG:
        raise UnknownNetworkError(
            f"Unknown network '{name}'. Supported networks: {', '.join(NETWORK_CONFIG)}"
        )

    network_config = NETWORK_CONFIG[name]
    private_key = environ.get(PRIVATE_KEY_ENV) or ""

    return NetworkProfile(
        name=name,
        chain_id=network_config["chain_id"],
        rpc_endpoint=environ.get(network_config["rpc_env"]) or "",
        signing_credential=_normalize_private_key(private_key) if private_key else "",
        block_explorer_url=network_config["block_explorer_url"],
    )


def resolve_verification_credential(
    environ: Optional[Mapping[str, str]] = None,
) -> VerificationCredential:
    """
    Read the verification service API key.

    An unset or empty key yields a credential with api_key None, which
    disables verification.
    """
    if environ is None:
        environ = os.environ
    return VerificationCredential(api_key=environ.get(ETHERSCAN_API_KEY_ENV) or None)


def read_environment(env_file: Optional[Union[Path, str]] = None) -> dict:
    """
    Merge a .env file under the process environment.

    Values already present in the process environment win over the file.
    A missing file is ignored.
    """
    merged = {}
    if env_file is not None:
        env_path = Path(env_file)
        if env_path.exists():
            merged.update({k: v for k, v in dotenv_values(env_path).items() if v is not None})
        else:
            logger.debug("Env file %s not found, using process environment only", env_path)
    merged.update(os.environ)
    return merged


def load_config(
    network: str,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Union[Path, str]] = None,
    artifacts_dir: Optional[Union[Path, str]] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    confirmation_timeout: Optional[float] = None,
) -> DeploymentConfig:
    """
    Resolve and validate everything a deployment run needs.

    Args:
        network: Network name ("goerli" or "mainnet")
        environ: Environment mapping (defaults to os.environ merged over env_file)
        env_file: Optional .env file, ignored when environ is given
        artifacts_dir: Hardhat artifacts directory (defaults to ./artifacts)
        poll_interval: Seconds between confirmation polls
        confirmation_timeout: Seconds to wait for each confirmation depth,
                              None to wait indefinitely

    Returns:
        DeploymentConfig

    Raises:
        UnknownNetworkError: If network is not supported
        MissingEndpointError: If the network's RPC URL variable is unset
        MissingSigningCredentialError: If PRIVATE_KEY is unset
    """
    if environ is None:
        environ = read_environment(env_file)

    profile = resolve_network_profile(network, environ)

    if not profile.rpc_endpoint:
        raise MissingEndpointError(
            f"RPC endpoint required for network '{network}': "
            f"set ${NETWORK_CONFIG[network]['rpc_env']}"
        )

    if not profile.signing_credential:
        raise MissingSigningCredentialError(
            f"Signing credential required: set ${PRIVATE_KEY_ENV}"
        )

    verification = resolve_verification_credential(environ)
    if not verification.enabled:
        logger.info("%s not set, contract verification is disabled", ETHERSCAN_API_KEY_ENV)

    return DeploymentConfig(
        network=profile,
        verification=verification,
        artifacts_dir=Path(artifacts_dir) if artifacts_dir is not None else get_default_artifacts_dir(),
        compiler_version=SOLIDITY_VERSION,
        poll_interval=poll_interval,
        confirmation_timeout=confirmation_timeout,
    )
