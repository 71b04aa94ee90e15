"""Lead-gate unlock state.

The gate is a two-state machine shared by every template variant:

- ``locked`` is the initial state when the gate is enabled and the viewer has
  not unlocked this site before; a disabled gate is permanently ``unlocked``.
- ``locked -> unlocked`` fires once, on form submission, and is persisted
  through a ``GateStore`` keyed by site id. There is no way back.

The generated client runtime implements the same machine with
``localStorage`` as its store; this module is the reference used by the
renderer and by tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from pdf2site.model.job import LeadGatePolicy

STORAGE_KEY_PREFIX = "pdf2site:unlocked:"


class GateStatus(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"


class GateStore(Protocol):
    """Persistence boundary: one boolean per key."""

    def read(self, key: str) -> bool:  # pragma: no cover - interface
        ...

    def write(self, key: str, value: bool) -> None:  # pragma: no cover - interface
        ...


@dataclass
class InMemoryGateStore:
    values: dict[str, bool] = field(default_factory=dict)

    def read(self, key: str) -> bool:
        return self.values.get(key, False)

    def write(self, key: str, value: bool) -> None:
        self.values[key] = value


def gate_storage_key(site_id: str) -> str:
    return f"{STORAGE_KEY_PREFIX}{site_id}"


class GateState:
    """Unlock state for one viewer of one site."""

    def __init__(self, policy: LeadGatePolicy, store: GateStore, site_id: str) -> None:
        self.policy = policy
        self.key = gate_storage_key(site_id)
        self._store = store
        if policy.enabled and not store.read(self.key):
            self._status = GateStatus.LOCKED
        else:
            self._status = GateStatus.UNLOCKED

    @classmethod
    def open(cls) -> GateState:
        """A gate that is disabled and therefore never locks anything."""
        return cls(LeadGatePolicy(enabled=False), InMemoryGateStore(), "")

    @property
    def status(self) -> GateStatus:
        return self._status

    @property
    def is_locked(self) -> bool:
        return self._status is GateStatus.LOCKED

    def blocks(self, page_index: int) -> bool:
        """Whether moving to ``page_index`` must present the form instead."""
        return self.is_locked and self.policy.is_locked(page_index)

    def unlock(self) -> bool:
        """Apply the one-shot ``locked -> unlocked`` transition.

        Returns True when the transition fired, False when already unlocked.
        """
        if not self.is_locked:
            return False
        self._store.write(self.key, True)
        self._status = GateStatus.UNLOCKED
        return True


__all__ = [
    "GateState",
    "GateStatus",
    "GateStore",
    "InMemoryGateStore",
    "STORAGE_KEY_PREFIX",
    "gate_storage_key",
]
