"""Relays likes to the ledger, deferring them while no signer is available."""

import asyncio
from typing import Any, Callable, Literal

from loguru import logger

from pathlike.domain.ledger import (
    LedgerAction,
    LikeActionData,
    LikeResult,
    PendingSubmission,
    SignerIdentity,
    SubmissionResult,
)
from pathlike.domain.path import NodeId
from pathlike.errors import (
    LedgerRejected,
    PathlikeError,
    ReplayInProgress,
    SignerUnavailable,
)
from pathlike.relay.identifiers import (
    Digest,
    digest_ledger_id,
    fallback_ledger_id,
    is_ledger_id,
    sha256_digest,
)
from pathlike.signers.base import Signer
from pathlike.storage.documents import PENDING_SUBMISSIONS_KEY, PendingSubmissionsDocument
from pathlike.storage.versioned import VersionedStore
from pathlike.tracking.path_tracker import PathTracker, epoch_ms

SubmissionEvent = Literal["on_success", "on_error"]
Callback = Callable[[dict[str, Any]], Any]


class SubmissionQueue:
    """Turns likes into ledger actions, submitting immediately or queuing for later.

    Local like state is authoritative: a like is always recorded in the tracker first and
    is never rolled back because the ledger could not be reached. Ledger actions are
    immutable, so unliking only changes local state.
    """

    def __init__(
        self,
        *,
        tracker: PathTracker,
        signer: Signer,
        storage: VersionedStore,
        digest: Digest | None = sha256_digest,
        ledger_max_path_length: int = 20,
        contract_account: str = "polaris",
        action_name: str = "like",
        allow_fallback_hash: bool = False,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        """Initialize the queue and reload pending submissions from storage.

        Args:
            tracker: Path tracker that owns the like records
            signer: Wallet session used to submit actions
            storage: Versioned durable store for the pending queue
            digest: Cryptographic digest for identifier hashing. None selects the
                non-cryptographic fallback hash.
            ledger_max_path_length: Number of most recent path entries the ledger accepts
            contract_account: Account of the smart contract receiving likes
            action_name: Name of the like action on the contract
            allow_fallback_hash: Allow submitting identifiers produced by the fallback hash
            clock: Returns the current time in milliseconds since epoch
        """
        self.tracker = tracker
        self.signer = signer
        self.storage = storage
        self.ledger_max_path_length = ledger_max_path_length
        self.contract_account = contract_account
        self.action_name = action_name
        self.allow_fallback_hash = allow_fallback_hash
        self._digest = digest
        self._clock = clock

        self._pending: list[PendingSubmission] = []
        self._callbacks: dict[str, list[Callback]] = {"on_success": [], "on_error": []}
        self._submit_lock = asyncio.Lock()
        self._replay_in_progress = False

        self._load_pending()

    async def toggle_like(
        self, node_id: NodeId, metadata: dict[str, Any] | None = None
    ) -> LikeResult:
        if self.tracker.is_liked(node_id):
            return await self.unlike_node(node_id)
        return await self.like_node(node_id, metadata)

    async def like_node(
        self,
        node_id: NodeId,
        metadata: dict[str, Any] | None = None,
        submit_immediately: bool = True,
    ) -> LikeResult:
        """Like a node locally and submit it to the ledger, or queue it for later.

        Args:
            node_id: Liked node ID
            metadata: Node type, name and other fields kept with the like
            submit_immediately: Submit (or queue) the like for the ledger

        Returns:
            Result of the local like. The ledger outcome is in ``submission``.
        """
        record = self.tracker.record_like(node_id, metadata)
        result = LikeResult(success=True, liked=True, node_id=node_id, path=record.path)

        if not submit_immediately:
            return result

        if self.signer.is_connected() and not self._replay_in_progress:
            try:
                result.submission = await self.submit_to_ledger(node_id, record.path)
                return result
            except SignerUnavailable:
                logger.info(f"Signer went away while liking {node_id}, queuing instead")
            except PathlikeError as e:
                result.submission = SubmissionResult(success=False, node_id=node_id, error=str(e))
                return result

        self.queue_submission(node_id, record.path)
        result.queued = True
        result.submission = SubmissionResult(success=False, node_id=node_id, deferred=True)
        logger.info(f"Like for {node_id} queued for ledger submission")
        return result

    async def unlike_node(self, node_id: NodeId) -> LikeResult:
        """Remove a local like. Likes already on the ledger stay there."""
        self.tracker.remove_like(node_id)
        return LikeResult(success=True, liked=False, node_id=node_id)

    async def submit_to_ledger(self, node_id: NodeId, path: list[NodeId]) -> SubmissionResult:
        """Submit a single like action through the signer.

        Only the most recent ``ledger_max_path_length`` path entries are sent, so the final
        approach to the liked node is preserved.

        Raises:
            SignerUnavailable: No signer session is active
            LedgerRejected: Signing or submission failed
        """
        identity = self.signer.current_identity() if self.signer.is_connected() else None
        if identity is None:
            raise SignerUnavailable()

        async with self._submit_lock:
            # The session may have ended while waiting for an earlier submission
            identity = self.signer.current_identity() if self.signer.is_connected() else None
            if identity is None:
                raise SignerUnavailable()

            try:
                action = self._build_action(identity, node_id, path)
                logger.info(
                    f"Submitting like for {node_id} to ledger ({len(action.data.node_path)} steps)"
                )
                receipt = await self.signer.submit([action])
            except (LedgerRejected, SignerUnavailable) as e:
                logger.error(f"Ledger submission failed for {node_id}: {str(e)}")
                self.emit("on_error", {"node_id": node_id, "error": e})
                raise
            except Exception as e:
                logger.error(f"Ledger submission failed for {node_id}: {str(e)}")
                error = LedgerRejected(f"Ledger submission failed: {str(e)}", node_id=node_id)
                self.emit("on_error", {"node_id": node_id, "error": error})
                raise error from e

        logger.info(f"Like for {node_id} accepted by ledger: {receipt.transaction_id}")
        self.emit("on_success", {"node_id": node_id, "receipt": receipt})
        return SubmissionResult(
            success=True, node_id=node_id, transaction_id=receipt.transaction_id
        )

    def normalize_to_ledger_id(self, node_id: NodeId) -> str:
        """Map a node ID onto the ledger's 64 hex character identifier shape."""
        if is_ledger_id(node_id):
            return node_id.lower()
        if self._digest is not None:
            return digest_ledger_id(node_id, self._digest)

        logger.warning(f"No digest available, using non-cryptographic hash for {node_id}")
        return fallback_ledger_id(node_id)

    def queue_submission(self, node_id: NodeId, path: list[NodeId]) -> PendingSubmission:
        """Append a like to the pending queue and persist the whole queue."""
        submission = PendingSubmission(
            node_id=node_id,
            truncated_path=self._truncate(path),
            queued_at_ms=self._clock(),
        )
        self._pending.append(submission)
        self._save_pending()
        return submission

    async def submit_pending_likes(self) -> list[SubmissionResult]:
        """Submit queued likes in FIFO order, one at a time.

        A failing item does not stop the rest. All replayed items leave the queue whatever
        their outcome; callers decide from the results whether to try again.

        Raises:
            SignerUnavailable: No signer session is active
            ReplayInProgress: Another replay has not finished yet
        """
        if not self.signer.is_connected():
            raise SignerUnavailable()
        if self._replay_in_progress:
            raise ReplayInProgress("Pending likes are already being submitted")

        self._replay_in_progress = True
        try:
            batch = list(self._pending)
            logger.info(f"Submitting {len(batch)} pending likes")

            results = []
            for submission in batch:
                try:
                    result = await self.submit_to_ledger(
                        submission.node_id, submission.truncated_path
                    )
                except PathlikeError as e:
                    result = SubmissionResult(
                        success=False, node_id=submission.node_id, error=str(e)
                    )
                results.append(result)

            # Likes queued while the replay ran stay for the next one
            del self._pending[: len(batch)]
            self._save_pending()
        finally:
            self._replay_in_progress = False

        failed = sum(1 for result in results if not result.success)
        if failed:
            logger.warning(f"{failed} of {len(results)} pending likes failed to submit")
        return results

    def get_pending_count(self) -> int:
        return len(self._pending)

    def get_pending(self) -> list[PendingSubmission]:
        return [submission.model_copy(deep=True) for submission in self._pending]

    def on(self, event: SubmissionEvent, callback: Callback) -> None:
        """Register a callback for ``on_success`` or ``on_error``."""
        if event not in self._callbacks:
            raise ValueError(f"Unknown event: {event}")
        self._callbacks[event].append(callback)

    def emit(self, event: SubmissionEvent, data: dict[str, Any]) -> None:
        """Call every callback registered for an event, in registration order.

        A failing callback is logged and does not prevent the others from running.
        """
        if event not in self._callbacks:
            raise ValueError(f"Unknown event: {event}")

        for callback in list(self._callbacks[event]):
            try:
                callback(data)
            except Exception as e:
                logger.exception(f"Error in {event} callback: {str(e)}")

    def _build_action(
        self, identity: SignerIdentity, node_id: NodeId, path: list[NodeId]
    ) -> LedgerAction:
        if self._digest is None and not self.allow_fallback_hash:
            ids = [node_id, *self._truncate(path)]
            if not all(is_ledger_id(i) for i in ids):
                raise LedgerRejected(
                    "Refusing to submit identifiers hashed without a cryptographic digest",
                    node_id=node_id,
                )

        return LedgerAction(
            account=self.contract_account,
            name=self.action_name,
            authorization=[identity],
            data=LikeActionData(
                account=identity.actor,
                node_id=self.normalize_to_ledger_id(node_id),
                node_path=[self.normalize_to_ledger_id(i) for i in self._truncate(path)],
            ),
        )

    def _truncate(self, path: list[NodeId]) -> list[NodeId]:
        if len(path) <= self.ledger_max_path_length:
            return list(path)
        return list(path[len(path) - self.ledger_max_path_length :])

    def _save_pending(self) -> None:
        if not self._pending:
            self.storage.remove(PENDING_SUBMISSIONS_KEY)
            return
        self.storage.save(
            PENDING_SUBMISSIONS_KEY, PendingSubmissionsDocument(pending=self._pending)
        )

    def _load_pending(self) -> None:
        document = self.storage.load(PENDING_SUBMISSIONS_KEY, PendingSubmissionsDocument)
        if document is not None:
            self._pending = list(document.pending)
            logger.info(f"Loaded {len(self._pending)} pending like submissions")
