from tests.fakes.fake_clock import FakeClock
from tests.fakes.fake_signer import FakeSigner
from tests.fakes.fake_store import FakeKeyValueStore

__all__ = ["FakeClock", "FakeKeyValueStore", "FakeSigner"]
