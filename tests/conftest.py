import pytest

from pathlike.domain.ledger import SignerIdentity
from pathlike.relay.submission_queue import SubmissionQueue
from pathlike.storage.versioned import VersionedStore
from pathlike.tracking.path_tracker import PathTracker
from tests.fakes import FakeClock, FakeKeyValueStore, FakeSigner


@pytest.fixture
def fake_store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def storage(fake_store: FakeKeyValueStore) -> VersionedStore:
    return VersionedStore(fake_store, prefix="test_")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(storage: VersionedStore, clock: FakeClock) -> PathTracker:
    return PathTracker(storage, clock=clock)


@pytest.fixture
def identity() -> SignerIdentity:
    return SignerIdentity(actor="alice", permission="active")


@pytest.fixture
def signer(identity: SignerIdentity) -> FakeSigner:
    """Connected fake signer."""
    return FakeSigner(identity=identity)


@pytest.fixture
def disconnected_signer() -> FakeSigner:
    return FakeSigner(identity=None)


@pytest.fixture
def submission_queue(
    tracker: PathTracker, signer: FakeSigner, storage: VersionedStore, clock: FakeClock
) -> SubmissionQueue:
    return SubmissionQueue(tracker=tracker, signer=signer, storage=storage, clock=clock)


@pytest.fixture
def offline_queue(
    tracker: PathTracker,
    disconnected_signer: FakeSigner,
    storage: VersionedStore,
    clock: FakeClock,
) -> SubmissionQueue:
    return SubmissionQueue(
        tracker=tracker, signer=disconnected_signer, storage=storage, clock=clock
    )
