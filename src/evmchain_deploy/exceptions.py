"""Custom exception classes for evmchain-deploy library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when the run cannot be configured; no on-chain action was taken."""

    pass


class UnknownNetworkError(ConfigurationError):
    """Raised when the requested network is not a supported profile."""

    pass


class MissingSigningCredentialError(ConfigurationError):
    """Raised when no private key is available to sign the deployment."""

    pass


class MissingEndpointError(ConfigurationError):
    """Raised when the RPC endpoint for the selected network is not set."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled artifact or its build info is not found."""

    pass


class DefectiveArtifactError(DeploymentError, ValueError):
    """Raised when a compiled artifact is missing its ABI or bytecode."""

    pass


class CompilerVersionMismatchError(DefectiveArtifactError):
    """Raised when an artifact was built with a different solc than pinned."""

    pass


class TransactionHandleUnavailableError(DeploymentError, RuntimeError):
    """Raised when the transport returns no handle for the deploy transaction."""

    pass


class DeploymentRevertedError(DeploymentError, RuntimeError):
    """Raised when the contract-creation transaction was mined but reverted."""

    pass


class ConfirmationTimeoutError(DeploymentError, TimeoutError):
    """Raised when a configured confirmation timeout elapses."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when the verification service rejects or fails a request."""

    pass
