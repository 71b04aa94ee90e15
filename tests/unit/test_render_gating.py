from __future__ import annotations

from pdf2site.model.job import LeadGatePolicy
from pdf2site.render.gating import (
    GateState,
    GateStatus,
    InMemoryGateStore,
    gate_storage_key,
)


def test_storage_key_is_per_site() -> None:
    assert gate_storage_key("abc") == "pdf2site:unlocked:abc"
    assert gate_storage_key("abc") != gate_storage_key("abd")


def test_enabled_gate_starts_locked_and_blocks_locked_pages() -> None:
    gate = GateState(LeadGatePolicy(enabled=True, free_pages=2), InMemoryGateStore(), "s1")
    assert gate.status is GateStatus.LOCKED
    assert [gate.blocks(i) for i in range(4)] == [False, False, True, True]


def test_disabled_gate_never_blocks() -> None:
    gate = GateState(LeadGatePolicy(enabled=False, free_pages=1), InMemoryGateStore(), "s1")
    assert gate.status is GateStatus.UNLOCKED
    assert not any(gate.blocks(i) for i in range(10))
    assert not GateState.open().is_locked


def test_unlock_is_one_shot_and_persisted() -> None:
    store = InMemoryGateStore()
    policy = LeadGatePolicy(enabled=True, free_pages=1)
    gate = GateState(policy, store, "s1")

    assert gate.unlock() is True
    assert gate.status is GateStatus.UNLOCKED
    assert not gate.blocks(5)
    assert gate.unlock() is False
    assert store.values == {"pdf2site:unlocked:s1": True}

    # a later visit to the same site starts unlocked
    assert not GateState(policy, store, "s1").is_locked
    # other sites are unaffected
    assert GateState(policy, store, "s2").is_locked
