# qpauli/measurement.py
"""
Ancilla-assisted parity measurement of multi-qubit Pauli observables.

`measure_with_scratch` reproduces the statistics of a direct projective
measurement of the tensor-product observable using only controlled Paulis,
Hadamards and a single computational-basis measurement of a scratch qubit:

    ancilla ──H──●──●── ... ──H──M
                 │  │
    target[i] ──P_i─┼──
    target[j] ─────P_j─

Result ZERO is the +1 eigenvalue, ONE the -1 eigenvalue.
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import Optional, Sequence

from qpauli.errors import check_same_length
from qpauli.pauli import Pauli, apply_pauli
from qpauli.quantum_backend import MeasurementResult, QuantumGate, StabilizerQuantumState, borrowed_qubit
from qpauli.settings import get_settings

log = logging.getLogger("qpauli.measurement")


class AncillaReleasePolicy(StrEnum):
    """
    What `measure_with_scratch` does with its scratch qubit before release.

    RESET   flip the ancilla back to |0⟩ using the outcome just measured
            (no extra measurement is issued).
    AS_IS   release straight after measurement; the wire may be left in |1⟩
            and is marked dirty, so the backend cleans it before reuse.
    """

    RESET = "reset"
    AS_IS = "as_is"


def _resolve_policy(policy: Optional[AncillaReleasePolicy | str]) -> AncillaReleasePolicy:
    if policy is None:
        policy = get_settings().ANCILLA_RELEASE_POLICY
    try:
        return AncillaReleasePolicy(str(policy).lower())
    except ValueError:
        raise ValueError(f"Unknown ancilla release policy: {policy!r}") from None


def basis_change_z_to_y(state: StabilizerQuantumState, q: int, *, adjoint: bool = False) -> None:
    """
    Rotate qubit `q` from the Z frame to the Y frame (H then S).

    The adjoint (Sdg then H) undoes it; the order matters for the post-state
    even though it does not change measurement statistics.
    """
    if adjoint:
        state.apply_gate(QuantumGate.Sdg, [q])
        state.apply_gate(QuantumGate.H, [q])
    else:
        state.apply_gate(QuantumGate.H, [q])
        state.apply_gate(QuantumGate.S, [q])


def measure_with_scratch(
    state: StabilizerQuantumState,
    pauli: Sequence[Pauli],
    targets: Sequence[int],
    *,
    release_policy: Optional[AncillaReleasePolicy | str] = None,
) -> MeasurementResult:
    """
    Measure the Pauli observable `pauli` on `targets` through one ancilla.

    Parameters
    ----------
    state : StabilizerQuantumState
        Backend state holding `targets`. The ancilla is borrowed from it.
    pauli : Sequence[Pauli]
        Observable, position-aligned with `targets`.
    targets : Sequence[int]
        Qubit indices the observable acts on.
    release_policy : AncillaReleasePolicy | str, optional
        Scratch-qubit hygiene; defaults to ``Settings.ANCILLA_RELEASE_POLICY``.

    Returns
    -------
    MeasurementResult
        ZERO for the +1 eigenvalue, ONE for -1.

    Raises
    ------
    LengthMismatchError
        If `pauli` and `targets` differ in length. Nothing is issued to the
        backend in that case.
    """
    check_same_length("measure_with_scratch", pauli, targets)
    pauli = tuple(Pauli(p) for p in pauli)
    policy = _resolve_policy(release_policy)

    with borrowed_qubit(state) as anc:
        state.apply_gate(QuantumGate.H, [anc])
        apply_pauli(state, pauli, targets, controls=[anc])
        state.apply_gate(QuantumGate.H, [anc])
        result = MeasurementResult(state.measure(anc))
        if result is MeasurementResult.ONE:
            if policy is AncillaReleasePolicy.RESET:
                state.apply_gate(QuantumGate.X, [anc])
            else:
                state.mark_dirty(anc)

    log.debug("measured %s on %s -> %s (ancilla %d, %s)", "".join(pauli), list(targets), result.name, anc, policy)
    return result


def measure_paulis(
    state: StabilizerQuantumState,
    paulis: Sequence[Sequence[Pauli]],
    targets: Sequence[int],
    *,
    release_policy: Optional[AncillaReleasePolicy | str] = None,
) -> list[MeasurementResult]:
    """Measure several observables on the same targets, in order."""
    checked = []
    for pauli in paulis:
        check_same_length("measure_paulis", pauli, targets)
        checked.append(tuple(Pauli(p) for p in pauli))
    policy = _resolve_policy(release_policy)
    return [measure_with_scratch(state, pauli, targets, release_policy=policy) for pauli in checked]
