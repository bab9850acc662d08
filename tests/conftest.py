from collections import deque

import pytest

from qpauli.qiskit_backend import QiskitBackend, QiskitStatevectorBackend
from qpauli.quantum_backend import StabilizerQuantumState
from qpauli.settings import get_settings
from qpauli.stim_backend import StimBackend

BACKENDS = [StimBackend, QiskitBackend, QiskitStatevectorBackend]


class RecordingState(StabilizerQuantumState):
    """
    Fake state: records every call in `ops` and answers measurements from a
    scripted list of outcomes (default 0).
    """

    def __init__(self, n_qubits: int, outcomes=()):
        super().__init__(n_qubits)
        self.ops: list[tuple] = []
        self.outcomes = deque(outcomes)

    def _add_wire(self) -> None:
        self.n += 1

    def allocate_qubit(self) -> int:
        idx = super().allocate_qubit()
        self.ops.append(("alloc", idx))
        return idx

    def release_qubit(self, idx: int) -> None:
        super().release_qubit(idx)
        self.ops.append(("release", idx))

    def expectation_pauli(self, idx: int, basis: str) -> float:
        raise NotImplementedError

    def measure(self, idx: int, basis: str = "Z") -> int:
        self.ops.append(("measure", idx, basis))
        return self.outcomes.popleft() if self.outcomes else 0

    def apply_gate(self, gate, targets) -> None:
        self.ops.append(("gate", str(gate), list(targets)))

    def apply_controlled(self, gate, controls, target) -> None:
        self.ops.append(("ctrl", str(gate), list(controls), target))

    def reset(self) -> None:
        self.ops.append(("reset",))


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; drop the cache around every test so env changes apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def scripted_sampler(indices):
    """Sampler capability returning the given indices in order and recording the probabilities."""
    queue = deque(indices)
    seen = []

    def sample(probs):
        seen.append(list(probs))
        return queue.popleft()

    sample.seen = seen
    return sample
