# qpauli/pauli.py
"""
Multi-qubit Pauli strings and their application to a backend state.

A Pauli string is an immutable tuple of `Pauli` entries lined up position by
position with a sequence of target qubit indices. Construction helpers are
pure; the `apply_*` functions issue gates on a `StabilizerQuantumState`.
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Callable, Iterable, Optional, Sequence, Tuple, assert_never

import numpy as np

from qpauli.errors import IndexOutOfRangeError, check_same_length
from qpauli.quantum_backend import QuantumGate, StabilizerQuantumState

log = logging.getLogger("qpauli.pauli")


class Pauli(StrEnum):
    """Single-qubit Pauli operator."""

    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"

    @property
    def gate(self) -> Optional[QuantumGate]:
        """Backend gate implementing this operator, None for the identity."""
        match self:
            case Pauli.I:
                return None
            case Pauli.X:
                return QuantumGate.X
            case Pauli.Y:
                return QuantumGate.Y
            case Pauli.Z:
                return QuantumGate.Z
            case _:
                assert_never(self)


PauliString = Tuple[Pauli, ...]

# Order used by weight-one enumeration and random draws
NONTRIVIAL_PAULIS: Tuple[Pauli, ...] = (Pauli.X, Pauli.Y, Pauli.Z)
ALL_PAULIS: Tuple[Pauli, ...] = (Pauli.I, Pauli.X, Pauli.Y, Pauli.Z)

# discrete-distribution capability: probabilities -> drawn index
Sampler = Callable[[Sequence[float]], int]


def pauli_string(label: str | Iterable[Pauli | str]) -> PauliString:
    """
    Build a Pauli string from a label such as "XIZ" (qubit 0 is the left-most
    character) or from an iterable of Pauli values.
    """
    out = []
    for ch in label:
        try:
            out.append(Pauli(str(ch).upper()))
        except ValueError:
            raise ValueError(f"Unknown Pauli label {ch!r} in {label!r}") from None
    return tuple(out)


def pauli_weight(pauli: Sequence[Pauli]) -> int:
    """Number of non-identity entries."""
    return sum(1 for p in pauli if p is not Pauli.I)


def embed(op: Pauli, location: int, n: int) -> PauliString:
    """Length-`n` string, identity everywhere except `op` at `location`."""
    if not 0 <= location < n:
        raise IndexOutOfRangeError(f"location {location} outside register of size {n}")
    return tuple(op if i == location else Pauli.I for i in range(n))


def weight_one_paulis(n: int) -> list[PauliString]:
    """
    All 3n weight-one Pauli strings on `n` qubits.

    Ordered qubit-major, then X, Y, Z: entry ``3*q + k`` carries
    ``NONTRIVIAL_PAULIS[k]`` on qubit ``q``.
    """
    return [embed(op, q, n) for q in range(n) for op in NONTRIVIAL_PAULIS]


def apply_pauli(
    state: StabilizerQuantumState,
    pauli: Sequence[Pauli],
    targets: Sequence[int],
    *,
    controls: Sequence[int] = (),
    adjoint: bool = False,  # Paulis are self-inverse: same gates either way
) -> None:
    """
    Apply `pauli[i]` to `targets[i]` for every non-identity position.

    With `controls`, every gate is conditioned on all control qubits being |1⟩.
    Pauli gates are self-inverse, so `adjoint=True` issues the same sequence.
    """
    check_same_length("apply_pauli", pauli, targets)
    pauli = tuple(Pauli(p) for p in pauli)
    for p, t in zip(pauli, targets):
        gate = p.gate
        if gate is None:
            continue
        if controls:
            state.apply_controlled(gate, controls, t)
        else:
            state.apply_gate(gate, [t])
    log.debug("applied %s on %s (controls=%s, adjoint=%s)", "".join(pauli), list(targets), list(controls), adjoint)


def apply_pauli_from_bitstring(
    state: StabilizerQuantumState,
    op: Pauli,
    apply_when: bool,
    bits: Sequence[bool],
    targets: Sequence[int],
    *,
    controls: Sequence[int] = (),
    adjoint: bool = False,
) -> None:
    """Apply `op` to `targets[i]` wherever `bits[i] == apply_when`."""
    check_same_length("apply_pauli_from_bitstring", bits, targets)
    pauli = tuple(op if bool(b) == apply_when else Pauli.I for b in bits)
    apply_pauli(state, pauli, targets, controls=controls, adjoint=adjoint)


def numpy_sampler(seed: Optional[int] = None) -> Sampler:
    """Discrete sampler backed by a numpy Generator."""
    rng = np.random.default_rng(seed)

    def sample(probs: Sequence[float]) -> int:
        return int(rng.choice(len(probs), p=np.asarray(probs, dtype=float)))

    return sample


def random_single_qubit_pauli(sample: Sampler) -> Pauli:
    """Draw one of I, X, Y, Z uniformly using the supplied sampler."""
    idx = sample([0.25] * len(ALL_PAULIS))
    return ALL_PAULIS[idx]
