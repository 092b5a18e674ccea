"""Network transport for submitting and confirming contract deployments."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

import rlp
from eth_account import Account
from eth_utils import to_canonical_address, to_checksum_address
from web3 import Web3
from web3.exceptions import TransactionNotFound

from .exceptions import ConfirmationTimeoutError, DeploymentRevertedError
from .types import CompiledContract, ContractArtifact, NetworkProfile

logger = logging.getLogger(__name__)


class PendingTransaction(Protocol):
    """Handle on a broadcast contract-creation transaction."""

    def wait(self, confirmations: int) -> str:
        """Block until the transaction has `confirmations` confirmations.

        Returns the finalized contract address.
        """
        ...


@dataclass
class SubmittedDeployment:
    """What the transport knows right after broadcasting a deployment."""

    address: str  # predicted CREATE address, final once confirmed
    transaction_hash: Optional[str]
    transaction: Optional[PendingTransaction]  # None if the node gave no handle


class Transport(Protocol):
    def deploy(self, artifact: ContractArtifact, network: NetworkProfile) -> SubmittedDeployment:
        ...


def compute_contract_address(sender: str, nonce: int) -> str:
    """
    Address of a contract created by `sender` with transaction `nonce`.

    keccak256(rlp([sender, nonce]))[12:], checksummed.
    """
    encoded = rlp.encode([to_canonical_address(sender), nonce])
    return to_checksum_address(Web3.keccak(encoded)[12:])


class Web3PendingTransaction:
    """Polls a node until a deploy transaction reaches a confirmation depth."""

    def __init__(
        self,
        web3: Web3,
        transaction_hash: str,
        poll_interval: float,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._web3 = web3
        self.transaction_hash = transaction_hash
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._sleep = sleep

    def _fetch_receipt(self) -> Optional[Any]:
        try:
            return self._web3.eth.get_transaction_receipt(self.transaction_hash)
        except TransactionNotFound:
            return None

    def _poll(self) -> tuple[Optional[Any], int]:
        """Read the receipt once and return it with its confirmation count."""
        receipt = self._fetch_receipt()
        if receipt is None:
            return None, 0
        if receipt["status"] == 0:
            raise DeploymentRevertedError(
                f"Deployment transaction {self.transaction_hash} reverted "
                f"in block {receipt['blockNumber']}"
            )
        return receipt, max(self._web3.eth.block_number - receipt["blockNumber"] + 1, 0)

    def confirmations(self) -> int:
        """Current confirmation count; 0 while the transaction is unmined."""
        return self._poll()[1]

    def wait(self, confirmations: int) -> str:
        """
        Block until the transaction has the given number of confirmations.

        The receipt is fetched again on every poll so a reorganised
        transaction is not reported from a stale block.

        Args:
            confirmations: Required depth (1 means mined)

        Returns:
            Checksummed address of the created contract

        Raises:
            DeploymentRevertedError: If the transaction was mined but failed
            ConfirmationTimeoutError: If a timeout was configured and elapsed
        """
        deadline = None if self._timeout is None else time.monotonic() + self._timeout

        while True:
            receipt, observed = self._poll()
            logger.debug(
                "Transaction %s has %d/%d confirmation(s)",
                self.transaction_hash,
                observed,
                confirmations,
            )
            if receipt is not None and observed >= confirmations:
                return to_checksum_address(receipt["contractAddress"])

            if deadline is not None and time.monotonic() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {self.transaction_hash} did not reach {confirmations} "
                    f"confirmation(s) within {self._timeout} seconds"
                )

            self._sleep(self._poll_interval)


class Web3Transport:
    """Signs and broadcasts contract-creation transactions through web3."""

    def __init__(
        self,
        web3: Web3,
        load_contract: Callable[[str], CompiledContract],
        poll_interval: float,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._web3 = web3
        self._load_contract = load_contract
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._sleep = sleep

    @classmethod
    def from_profile(
        cls,
        network: NetworkProfile,
        load_contract: Callable[[str], CompiledContract],
        poll_interval: float,
        timeout: Optional[float] = None,
    ) -> "Web3Transport":
        """Connect to the network's RPC endpoint over HTTP."""
        web3 = Web3(Web3.HTTPProvider(network.rpc_endpoint))
        return cls(web3, load_contract, poll_interval, timeout)

    def deploy(self, artifact: ContractArtifact, network: NetworkProfile) -> SubmittedDeployment:
        """
        Build, sign and broadcast the contract-creation transaction.

        Node and signing errors (insufficient funds, rejected key, unreachable
        endpoint) are raised unchanged.
        """
        compiled = self._load_contract(artifact.name)
        account = Account.from_key(network.signing_credential)

        contract = self._web3.eth.contract(abi=compiled.abi, bytecode=compiled.bytecode)
        nonce = self._web3.eth.get_transaction_count(account.address, "pending")

        transaction = contract.constructor(*artifact.constructor_args).build_transaction(
            {
                "from": account.address,
                "nonce": nonce,
                "chainId": network.chain_id,
            }
        )

        signed = account.sign_transaction(transaction)
        transaction_hash = Web3.to_hex(self._web3.eth.send_raw_transaction(signed.raw_transaction))

        return SubmittedDeployment(
            address=compute_contract_address(account.address, nonce),
            transaction_hash=transaction_hash,
            transaction=Web3PendingTransaction(
                self._web3,
                transaction_hash,
                poll_interval=self._poll_interval,
                timeout=self._timeout,
                sleep=self._sleep,
            ),
        )
