# qpauli/reset.py
"""
Measure-and-restore procedures.

Each `reset_*` measures a qubit in one Pauli basis and returns the outcome,
leaving the qubit in |0⟩. The basis change back to the Z frame always comes
before the conditional X: the correction is expressed in the Z frame.
"""
from __future__ import annotations

import logging
from typing import Iterable

from qpauli.measurement import basis_change_z_to_y
from qpauli.quantum_backend import MeasurementResult, QuantumGate, StabilizerQuantumState

log = logging.getLogger("qpauli.reset")


def _flip_if_one(state: StabilizerQuantumState, q: int, result: MeasurementResult) -> None:
    if result is MeasurementResult.ONE:
        state.apply_gate(QuantumGate.X, [q])


def reset_z(state: StabilizerQuantumState, q: int) -> MeasurementResult:
    """Measure in Z, then flip back to |0⟩ if the outcome was ONE."""
    result = MeasurementResult(state.measure(q, basis="Z"))
    _flip_if_one(state, q, result)
    return result


def reset_x(state: StabilizerQuantumState, q: int) -> MeasurementResult:
    """Measure in X, rotate back with H, then flip if the outcome was ONE."""
    result = MeasurementResult(state.measure(q, basis="X"))
    state.apply_gate(QuantumGate.H, [q])
    _flip_if_one(state, q, result)
    return result


def reset_y(state: StabilizerQuantumState, q: int) -> MeasurementResult:
    """Measure in Y, undo the Z->Y basis change, then flip if the outcome was ONE."""
    result = MeasurementResult(state.measure(q, basis="Y"))
    basis_change_z_to_y(state, q, adjoint=True)
    _flip_if_one(state, q, result)
    return result


def reset(state: StabilizerQuantumState, q: int) -> None:
    """Return `q` to |0⟩, discarding the outcome."""
    reset_z(state, q)


def reset_all(state: StabilizerQuantumState, qubits: Iterable[int]) -> None:
    """Reset each qubit independently."""
    qubits = list(qubits)
    for q in qubits:
        reset(state, q)
    log.debug("reset %d qubits", len(qubits))
