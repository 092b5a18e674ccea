"""
evmchain-deploy: deploy a compiled contract and verify its source on Etherscan
"""

from importlib.metadata import PackageNotFoundError, version

from .config import load_config, resolve_network_profile, resolve_verification_credential
from .exceptions import (
    ArtifactNotFoundError,
    CompilerVersionMismatchError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DefectiveArtifactError,
    DeploymentError,
    DeploymentRevertedError,
    MissingEndpointError,
    MissingSigningCredentialError,
    TransactionHandleUnavailableError,
    UnknownNetworkError,
    VerificationError,
)
from .orchestrator import DeploymentOrchestrator
from .types import (
    ContractArtifact,
    DeploymentConfig,
    DeploymentRecord,
    DeploymentState,
    NetworkProfile,
    VerificationCredential,
    VerificationOutcome,
)
from .verification import EtherscanVerifier, classify_verification_error

try:
    __version__ = version("evmchain-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "EtherscanVerifier",
    "classify_verification_error",
    "load_config",
    "resolve_network_profile",
    "resolve_verification_credential",
    "ContractArtifact",
    "DeploymentConfig",
    "DeploymentRecord",
    "DeploymentState",
    "NetworkProfile",
    "VerificationCredential",
    "VerificationOutcome",
    "DeploymentError",
    "ConfigurationError",
    "UnknownNetworkError",
    "MissingSigningCredentialError",
    "MissingEndpointError",
    "ArtifactNotFoundError",
    "DefectiveArtifactError",
    "CompilerVersionMismatchError",
    "TransactionHandleUnavailableError",
    "DeploymentRevertedError",
    "ConfirmationTimeoutError",
    "VerificationError",
]
