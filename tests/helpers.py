"""Test doubles and sample values shared by the evmchain-deploy tests."""

from typing import Any, Dict, List, Optional, Sequence

from evmchain_deploy.transport import SubmittedDeployment
from evmchain_deploy.types import ContractArtifact, NetworkProfile

# Hardhat's first default account and the address of its first deployment
HARDHAT_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
FIRST_CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

TX_HASH = "0x" + "ab" * 32

POS25_ABI: List[Dict[str, Any]] = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]


class StubPendingTransaction:
    """Pending transaction whose confirmation count advances one per poll."""

    def __init__(self, address: str, events: List[str], counts: Optional[Sequence[int]] = None):
        self.address = address
        self.events = events
        self._counts = iter(counts if counts is not None else range(0, 100))
        self.waits: List[int] = []

    def wait(self, confirmations: int) -> str:
        self.waits.append(confirmations)
        for count in self._counts:
            if count >= confirmations:
                self.events.append(f"wait:{confirmations}")
                return self.address
        raise AssertionError("stub ran out of confirmation counts")


class StubTransport:
    """Transport returning a canned submission, or raising a canned error."""

    def __init__(
        self,
        address: str = FIRST_CONTRACT_ADDRESS,
        events: Optional[List[str]] = None,
        error: Optional[Exception] = None,
        with_handle: bool = True,
        counts: Optional[Sequence[int]] = None,
    ):
        self.events = events if events is not None else []
        self.error = error
        self.transaction = StubPendingTransaction(address, self.events, counts) if with_handle else None
        self.address = address
        self.deploy_calls: List[ContractArtifact] = []

    def deploy(self, artifact: ContractArtifact, network: NetworkProfile) -> SubmittedDeployment:
        self.deploy_calls.append(artifact)
        self.events.append("deploy")
        if self.error is not None:
            raise self.error
        return SubmittedDeployment(
            address=self.address,
            transaction_hash=TX_HASH,
            transaction=self.transaction,
        )


class StubVerifier:
    """Verification service that records calls and optionally fails."""

    def __init__(self, events: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.events = events if events is not None else []
        self.error = error
        self.calls: List[tuple] = []

    def verify(self, address: str, constructor_args: Sequence[Any]) -> None:
        self.calls.append((address, list(constructor_args)))
        self.events.append("verify")
        if self.error is not None:
            raise self.error
