"""Exceptions raised by path tracking, persistence and ledger submission."""


class PathlikeError(Exception):
    """Base exception for pathlike errors."""


class SignerUnavailable(PathlikeError):
    """Raised when a ledger submission is attempted without an active signer session."""

    def __init__(self, message: str = "No active signer session") -> None:
        super().__init__(message)


class LedgerRejected(PathlikeError):
    """Raised when the signer or the ledger refuses or times out a submission."""

    def __init__(self, message: str, node_id: str | None = None) -> None:
        """Initialize ledger rejection.

        Args:
            message: Error message
            node_id: Liked node whose submission failed (optional)
        """
        self.node_id = node_id
        super().__init__(message)


class ReplayInProgress(PathlikeError):
    """Raised when a pending-queue replay is requested while another one is running."""


class PersistenceError(PathlikeError):
    """Base exception for durable store failures."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class PersistenceWriteFailed(PersistenceError):
    """Raised when the durable store cannot write a key."""
    pass


class PersistenceLoadCorrupt(PersistenceError):
    """Raised when stored data fails decoding or schema validation."""
    pass
