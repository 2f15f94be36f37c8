"""
Tests for the acknowledgement store
"""
from core.engine import FixedClock
from services.acknowledgement_store import AcknowledgementStore
from conftest import NOW


class TestAcknowledgementStore:
    """Test set, get and clear"""

    def test_set_and_get(self):
        store = AcknowledgementStore(clock=FixedClock(NOW))
        timestamp = store.set("SHP-1", "alice")
        assert timestamp == NOW
        ack = store.get("SHP-1")
        assert ack.user_id == "alice"
        assert ack.timestamp == NOW
        assert "SHP-1" in store

    def test_get_unknown(self):
        assert AcknowledgementStore().get("nope") is None

    def test_overwrite(self):
        store = AcknowledgementStore(clock=FixedClock(NOW))
        store.set("SHP-1", "alice")
        store.set("SHP-1", "bob")
        assert store.get("SHP-1").user_id == "bob"
        assert len(store) == 1

    def test_clear(self, caplog):
        store = AcknowledgementStore()
        store.set("SHP-1", "alice")
        store.set("SHP-2", "bob")
        assert store.clear() == 2
        assert len(store) == 0
        assert "Cleared 2 acknowledgement(s)" in caplog.text
