from typing import Protocol

from pathlike.domain.ledger import LedgerAction, LedgerReceipt, SignerIdentity


class Signer(Protocol):
    """Protocol for the wallet session that authorizes and submits ledger actions."""

    def is_connected(self) -> bool:
        """Whether a session with a usable identity is active."""
        ...

    def current_identity(self) -> SignerIdentity | None:
        """Get the identity actions are authorized with, or None when disconnected."""
        ...

    async def submit(self, actions: list[LedgerAction]) -> LedgerReceipt:
        """Sign and submit actions as one transaction."""
        ...


class Transactor(Protocol):
    """The wallet SDK call that pushes a signed transaction to the chain."""

    async def __call__(self, identity: SignerIdentity, actions: list[dict]) -> dict: ...
