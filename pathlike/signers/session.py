import asyncio

from loguru import logger

from pathlike.domain.ledger import LedgerAction, LedgerReceipt, SignerIdentity
from pathlike.errors import LedgerRejected, SignerUnavailable
from pathlike.signers.base import Signer, Transactor


class SessionSigner(Signer):
    """Signer backed by a wallet session that is connected and disconnected at runtime."""

    def __init__(self, transactor: Transactor, timeout_seconds: float = 30.0) -> None:
        """Initialize SessionSigner.

        Args:
            transactor: Async callable that signs and pushes the serialized actions
            timeout_seconds: How long to wait for the transactor before giving up
        """
        self._transactor = transactor
        self._timeout_seconds = timeout_seconds
        self._identity: SignerIdentity | None = None

    def connect(self, identity: SignerIdentity) -> None:
        self._identity = identity
        logger.info(f"Signer connected as {identity.actor}@{identity.permission}")

    def disconnect(self) -> None:
        if self._identity is not None:
            logger.info(f"Signer disconnected ({self._identity.actor})")
        self._identity = None

    def is_connected(self) -> bool:
        return self._identity is not None

    def current_identity(self) -> SignerIdentity | None:
        return self._identity

    async def submit(self, actions: list[LedgerAction]) -> LedgerReceipt:
        """Submit actions through the transactor.

        Raises:
            SignerUnavailable: No session is connected
            LedgerRejected: The transactor failed or did not answer in time
        """
        identity = self._identity
        if identity is None:
            raise SignerUnavailable()

        payload = [action.model_dump() for action in actions]
        try:
            response = await asyncio.wait_for(
                self._transactor(identity, payload), timeout=self._timeout_seconds
            )
        except asyncio.TimeoutError as e:
            raise LedgerRejected(
                f"Transaction timed out after {self._timeout_seconds}s"
            ) from e
        except LedgerRejected:
            raise
        except Exception as e:
            raise LedgerRejected(f"Transaction failed: {str(e)}") from e

        return LedgerReceipt(
            transaction_id=_transaction_id(response),
            raw=response if isinstance(response, dict) else {},
        )


def _transaction_id(response: object) -> str | None:
    if not isinstance(response, dict):
        return None
    if response.get("transaction_id"):
        return str(response["transaction_id"])
    nested = response.get("response")
    if isinstance(nested, dict) and nested.get("transaction_id"):
        return str(nested["transaction_id"])
    return None
