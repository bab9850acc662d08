# qpauli/quantum_backend.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import IntEnum, StrEnum
from typing import Iterator, List, Sequence

log = logging.getLogger("qpauli.backend")


class QuantumGate(StrEnum):
    """
    Backend-agnostic gate vocabulary
    """

    # Single-qubit
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    Sdg = "Sdg"

    # Two-qubit
    CX = "CX"
    CY = "CY"
    CZ = "CZ"
    SWAP = "SWAP"

    @property
    def adjoint(self) -> QuantumGate:
        """Inverse gate. Every gate in the vocabulary except S/Sdg is self-inverse."""
        if self is QuantumGate.S:
            return QuantumGate.Sdg
        if self is QuantumGate.Sdg:
            return QuantumGate.S
        return self

    @property
    def controlled(self) -> QuantumGate:
        """Singly-controlled form of a Pauli gate (X -> CX, ...)."""
        try:
            return _CONTROLLED[self]
        except KeyError:
            raise ValueError(f"No native controlled form for {self}") from None


_CONTROLLED = {QuantumGate.X: QuantumGate.CX, QuantumGate.Y: QuantumGate.CY, QuantumGate.Z: QuantumGate.CZ}


class MeasurementResult(IntEnum):
    """
    Binary measurement outcome.

    ZERO is the +1 eigenvalue of the measured observable, ONE the -1 eigenvalue.
    """

    ZERO = 0
    ONE = 1

    @property
    def eigenvalue(self) -> int:
        return 1 if self is MeasurementResult.ZERO else -1

    @classmethod
    def from_eigenvalue(cls, value: int) -> MeasurementResult:
        if value == 1:
            return cls.ZERO
        if value == -1:
            return cls.ONE
        raise ValueError(f"Eigenvalue must be +1 or -1, got {value}")


class StabilizerQuantumState(ABC):
    """
    Runtime quantum state handle.

    Wires 0..n_qubits-1 belong to the caller that created the state. Extra
    wires are handed out by `allocate_qubit` and must be given back with
    `release_qubit` (see `borrowed_qubit`).
    """

    def __init__(self, n_qubits: int):
        self.n = n_qubits
        self._borrowed: set[int] = set()
        self._spare: list[int] = []
        self._dirty: set[int] = set()

    @abstractmethod
    def expectation_pauli(self, idx: int, basis: str) -> float:
        """Return ⟨basis⟩ for qubit `idx`, where basis ∈ {'X','Y','Z'}."""
        ...

    @abstractmethod
    def measure(self, idx: int, basis: str = "Z") -> int:
        """Projectively measure qubit `idx` in a Pauli basis and return 0/1."""
        ...

    @abstractmethod
    def apply_gate(self, gate: QuantumGate | str, targets: List[int]) -> None:
        """Apply a named gate to the specified targets."""
        ...

    @abstractmethod
    def apply_controlled(self, gate: QuantumGate | str, controls: Sequence[int], target: int) -> None:
        """
        Apply Pauli `gate` on `target` conditioned on every qubit in `controls`
        being |1⟩. Raises ValueError if the backend cannot handle this many
        controls; nothing is applied in that case.
        """
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset every wire to |0⟩ (same number of qubits as currently held)."""
        ...

    @abstractmethod
    def _add_wire(self) -> None:
        """Append one fresh |0⟩ wire at index `self.n` and increment `self.n`."""
        ...

    # ---------- scoped allocation ----------

    def allocate_qubit(self) -> int:
        """
        Borrow a wire in |0⟩: the lowest released one if any, else a new wire.
        A reused wire that was marked dirty is measured and flipped back first.
        """
        if self._spare:
            self._spare.sort()
            idx = self._spare.pop(0)
            if idx in self._dirty:
                if self.measure(idx):
                    self.apply_gate(QuantumGate.X, [idx])
                self._dirty.discard(idx)
                log.debug("cleaned dirty qubit %d", idx)
        else:
            idx = self.n
            self._add_wire()
        self._borrowed.add(idx)
        log.debug("allocated qubit %d", idx)
        return idx

    def release_qubit(self, idx: int) -> None:
        """Give a borrowed wire back. The wire is not reset."""
        if idx not in self._borrowed:
            raise ValueError(f"Qubit {idx} is not currently allocated")
        self._borrowed.remove(idx)
        self._spare.append(idx)
        log.debug("released qubit %d", idx)

    def mark_dirty(self, idx: int) -> None:
        """Record that `idx` may not be in |0⟩; it is cleaned before its next allocation."""
        self._dirty.add(idx)

    # ---------- reference measurement ----------

    def measure_pauli(self, paulis: Sequence[str], targets: Sequence[int]) -> int:
        """
        Directly measure the tensor-product Pauli observable `paulis` on `targets`.

        Each support qubit is rotated so its Pauli becomes Z, the parity is
        fanned in with CX onto the last support qubit, that qubit is measured
        in Z, and everything is undone. The result is a projective measurement
        of the joint observable (0 for +1, 1 for -1).
        """
        if len(paulis) != len(targets):
            raise ValueError(f"Got {len(paulis)} Paulis for {len(targets)} targets")

        support: list[tuple[str, int]] = []
        for p, t in zip(paulis, targets):
            label = str(p).upper()
            if label not in ("I", "X", "Y", "Z"):
                raise ValueError(f"Unknown Pauli label: {p}")
            if label != "I":
                support.append((label, t))
        if not support:
            return 0

        for label, t in support:
            if label == "X":
                self.apply_gate(QuantumGate.H, [t])
            elif label == "Y":
                self.apply_gate(QuantumGate.Sdg, [t])
                self.apply_gate(QuantumGate.H, [t])

        last = support[-1][1]
        for _, t in support[:-1]:
            self.apply_gate(QuantumGate.CX, [t, last])
        out = int(self.measure(last))
        for _, t in reversed(support[:-1]):
            self.apply_gate(QuantumGate.CX, [t, last])

        for label, t in support:
            if label == "X":
                self.apply_gate(QuantumGate.H, [t])
            elif label == "Y":
                self.apply_gate(QuantumGate.H, [t])
                self.apply_gate(QuantumGate.S, [t])
        return out


class QuantumBackend(ABC):
    """Factory that creates a fresh state for n qubits."""

    @abstractmethod
    def generate_stabilizer_state(self, n_qubits: int) -> StabilizerQuantumState:
        """Create a new, reset state with `n_qubits` wires."""
        ...


@contextmanager
def borrowed_qubit(state: StabilizerQuantumState) -> Iterator[int]:
    """Allocate one wire for the duration of the block; always released on exit."""
    idx = state.allocate_qubit()
    try:
        yield idx
    finally:
        state.release_qubit(idx)
