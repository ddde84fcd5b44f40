"""Wiring of the tracker and the submission queue for one visualization session."""

from pathlike.config import settings
from pathlike.relay import SubmissionQueue
from pathlike.relay.identifiers import Digest, sha256_digest
from pathlike.signers.base import Signer
from pathlike.storage.base import KeyValueStore
from pathlike.storage.versioned import VersionedStore
from pathlike.tracking.path_tracker import PathTracker


class VisualizationSession:
    """Owns the path tracker and submission queue the renderer talks to."""

    def __init__(self, tracker: PathTracker, submissions: SubmissionQueue) -> None:
        self.tracker = tracker
        self.submissions = submissions


def create_session(
    *,
    store: KeyValueStore,
    signer: Signer,
    digest: Digest | None = sha256_digest,
) -> VisualizationSession:
    """Create a session whose tracker and queue share one durable store."""
    storage = VersionedStore(store, prefix=settings.storage_key_prefix)
    tracker = PathTracker(
        storage,
        max_path_length=settings.max_path_length,
        max_browse_history=settings.max_browse_history,
    )
    submissions = SubmissionQueue(
        tracker=tracker,
        signer=signer,
        storage=storage,
        digest=digest,
        ledger_max_path_length=settings.ledger_max_path_length,
        contract_account=settings.contract_account,
        action_name=settings.like_action_name,
        allow_fallback_hash=settings.allow_fallback_hash,
    )
    return VisualizationSession(tracker=tracker, submissions=submissions)
