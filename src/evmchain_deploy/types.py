"""Data types and dataclasses for evmchain-deploy library."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .constants import DEFAULT_POLL_INTERVAL, SOLIDITY_VERSION


class DeploymentState(Enum):
    """States a single orchestration run moves through."""

    PENDING = "pending"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    VERIFY_SKIPPED = "verify-skipped"
    VERIFY_FAILED = "verify-failed"
    DONE = "done"


class VerificationOutcome(Enum):
    """How the verification stage ended."""

    VERIFIED = "verified"
    ALREADY_VERIFIED = "already-verified"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class NetworkProfile:
    """Connection parameters for one target network."""

    name: str  # "goerli" or "mainnet"
    chain_id: int
    rpc_endpoint: str
    signing_credential: str = field(repr=False)  # 0x-prefixed private key
    block_explorer_url: Optional[str] = None

    def address_url(self, address: str) -> Optional[str]:
        """Explorer page for an address, if the network has an explorer."""
        if self.block_explorer_url is None:
            return None
        return f"{self.block_explorer_url}/address/{address}"


@dataclass(frozen=True)
class VerificationCredential:
    """API credential for the verification service."""

    api_key: Optional[str] = field(default=None, repr=False)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class ContractArtifact:
    """Identifies the contract to deploy and its constructor arguments."""

    name: str  # e.g., "Pos25"
    constructor_args: Sequence[Any] = ()


@dataclass
class CompiledContract:
    """Compiler output needed to deploy and verify a contract."""

    name: str  # e.g., "Pos25"
    source_name: str  # e.g., "contracts/Pos25.sol"
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode

    # From the build-info file; required only for verification
    compiler_version: Optional[str] = None  # long form, e.g., "0.8.19+commit.7dd6d404"
    standard_json_input: Optional[Dict[str, Any]] = None

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.name}"


@dataclass
class DeploymentRecord:
    """In-memory result of a single orchestration run. Never persisted."""

    address: Optional[str] = None
    confirmations_observed: int = 0
    verified: bool = False
    state: DeploymentState = DeploymentState.PENDING
    transaction_hash: Optional[str] = None
    verification_outcome: Optional[VerificationOutcome] = None
    verification_message: Optional[str] = None


@dataclass(frozen=True)
class DeploymentConfig:
    """Everything a run needs, resolved once at process start."""

    network: NetworkProfile
    verification: VerificationCredential
    artifacts_dir: Path = Path("artifacts")
    compiler_version: str = SOLIDITY_VERSION
    poll_interval: float = DEFAULT_POLL_INTERVAL
    confirmation_timeout: Optional[float] = None  # None blocks indefinitely
