"""Deploy, confirm and verify a single contract."""

import logging
from typing import Any, Optional, Protocol, Sequence

from .constants import DEPLOY_CONFIRMATIONS, VERIFY_CONFIRMATIONS
from .exceptions import ConfigurationError, TransactionHandleUnavailableError
from .transport import PendingTransaction, Transport
from .types import (
    ContractArtifact,
    DeploymentConfig,
    DeploymentRecord,
    DeploymentState,
    VerificationOutcome,
)
from .verification import classify_verification_error

logger = logging.getLogger(__name__)


class Verifier(Protocol):
    def verify(self, address: str, constructor_args: Sequence[Any]) -> None:
        ...


class DeploymentOrchestrator:
    """
    Runs the deploy -> confirm -> verify sequence for one contract.

    Deploy-stage and confirmation errors propagate to the caller. Verification
    errors never do: they are classified and recorded on the returned
    DeploymentRecord.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        transport: Transport,
        verifier: Optional[Verifier] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Resolved configuration, read but never modified
            transport: Network transport used to submit the deployment
            verifier: Verification service client; only called when
                      config.verification has an API key

        Raises:
            ConfigurationError: If an API key is configured but no verifier is given
        """
        if config.verification.enabled and verifier is None:
            raise ConfigurationError(
                "A verification API key is configured but no verifier was provided"
            )

        self._config = config
        self._transport = transport
        self._verifier = verifier

    def _transition(self, record: DeploymentRecord, state: DeploymentState) -> None:
        logger.debug("%s -> %s", record.state.name, state.name)
        record.state = state

    def _wait(self, record: DeploymentRecord, transaction: PendingTransaction, confirmations: int) -> None:
        logger.info("Waiting for %d confirmation(s)...", confirmations)
        address = transaction.wait(confirmations)
        if address != record.address:
            logger.warning("Predicted address %s, contract created at %s", record.address, address)
        record.address = address
        record.confirmations_observed = confirmations
        logger.info("Reached %d confirmation(s)", confirmations)

    def run(self, artifact: ContractArtifact) -> DeploymentRecord:
        """
        Deploy the artifact and, if a verification key is configured, verify it.

        Args:
            artifact: Contract to deploy

        Returns:
            DeploymentRecord in state DONE

        Raises:
            TransactionHandleUnavailableError: If the transport returned no handle
            Exception: Transport and confirmation errors, unchanged
        """
        network = self._config.network
        record = DeploymentRecord()

        logger.info(
            "Deploying %s to %s (chain id %d)...", artifact.name, network.name, network.chain_id
        )
        submitted = self._transport.deploy(artifact, network)
        record.address = submitted.address
        record.transaction_hash = submitted.transaction_hash
        self._transition(record, DeploymentState.SUBMITTED)
        logger.info("Deployment transaction submitted: %s", submitted.transaction_hash)

        if submitted.transaction is None:
            raise TransactionHandleUnavailableError(
                f"No transaction handle for the deployment of {artifact.name}; "
                "cannot wait for confirmations"
            )

        self._wait(record, submitted.transaction, DEPLOY_CONFIRMATIONS)
        self._transition(record, DeploymentState.CONFIRMED)
        logger.info("Contract Address: %s", record.address)

        if self._config.verification.enabled:
            self._verify(record, submitted.transaction, artifact)
        else:
            logger.info("No verification API key, skipping verification")
            record.verification_outcome = VerificationOutcome.SKIPPED
            self._transition(record, DeploymentState.VERIFY_SKIPPED)

        self._transition(record, DeploymentState.DONE)
        url = network.address_url(record.address)
        logger.info(
            "Done: %s deployed at %s (verification: %s)%s",
            artifact.name,
            record.address,
            record.verification_outcome.value,
            f" {url}" if url else "",
        )
        return record

    def _verify(
        self,
        record: DeploymentRecord,
        transaction: PendingTransaction,
        artifact: ContractArtifact,
    ) -> None:
        self._transition(record, DeploymentState.VERIFYING)
        self._wait(record, transaction, VERIFY_CONFIRMATIONS)

        logger.info("Verifying contract...")
        try:
            self._verifier.verify(record.address, list(artifact.constructor_args))
        except Exception as e:
            message = str(e)
            record.verification_message = message
            outcome = classify_verification_error(message)
            record.verification_outcome = outcome

            if outcome is VerificationOutcome.ALREADY_VERIFIED:
                logger.info("Already verified: %s", message)
                record.verified = True
                self._transition(record, DeploymentState.VERIFIED)
            else:
                logger.error("Verification failed: %s", message, exc_info=True)
                self._transition(record, DeploymentState.VERIFY_FAILED)
            return

        record.verified = True
        record.verification_outcome = VerificationOutcome.VERIFIED
        self._transition(record, DeploymentState.VERIFIED)
        logger.info("Contract verified")
