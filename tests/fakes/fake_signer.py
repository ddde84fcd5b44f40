import asyncio
from typing import List, Set

from pathlike.domain.ledger import LedgerAction, LedgerReceipt, SignerIdentity
from pathlike.errors import LedgerRejected
from pathlike.signers.base import Signer


class FakeSigner(Signer):
    """Fake signer that records submitted actions and returns numbered receipts."""

    def __init__(
        self,
        identity: SignerIdentity | None = None,
        fail_for: Set[str] | None = None,
        crash_for: Set[str] | None = None,
        blocker: asyncio.Event | None = None,
    ) -> None:
        """Initialize FakeSigner.

        Args:
            identity: Connected identity, None for a disconnected signer
            fail_for: Node IDs (as submitted) the ledger rejects
            crash_for: Node IDs (as submitted) that make the signer raise a plain error
            blocker: Event every submission waits on before answering
        """
        self.identity = identity
        self.fail_for = fail_for or set()
        self.crash_for = crash_for or set()
        self.blocker = blocker
        self.submitted: List[List[LedgerAction]] = []

    def is_connected(self) -> bool:
        return self.identity is not None

    def current_identity(self) -> SignerIdentity | None:
        return self.identity

    async def submit(self, actions: List[LedgerAction]) -> LedgerReceipt:
        self.submitted.append(actions)
        if self.blocker is not None:
            await self.blocker.wait()

        node_id = actions[0].data.node_id
        if node_id in self.fail_for:
            raise LedgerRejected("assertion failure with message: already liked")
        if node_id in self.crash_for:
            raise RuntimeError("connection reset")
        return LedgerReceipt(transaction_id=f"tx-{len(self.submitted)}")
