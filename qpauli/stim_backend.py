# qpauli/stim_backend.py
from __future__ import annotations

from typing import Sequence

import stim

from qpauli.quantum_backend import QuantumBackend, QuantumGate, StabilizerQuantumState

# QuantumGate -> stim instruction name
_STIM_NAMES = {
    QuantumGate.X: "X",
    QuantumGate.Y: "Y",
    QuantumGate.Z: "Z",
    QuantumGate.H: "H",
    QuantumGate.S: "S",
    QuantumGate.Sdg: "S_DAG",
    QuantumGate.CX: "CX",
    QuantumGate.CY: "CY",
    QuantumGate.CZ: "CZ",
    QuantumGate.SWAP: "SWAP",
}

_TWO_QUBIT = {QuantumGate.CX, QuantumGate.CY, QuantumGate.CZ, QuantumGate.SWAP}


def _as_gate(gate: QuantumGate | str) -> QuantumGate:
    if isinstance(gate, QuantumGate):
        return gate
    try:
        return QuantumGate[gate]
    except KeyError:
        raise ValueError(f"Unsupported gate for Stim: {gate}") from None


class StimState(StabilizerQuantumState):
    """Stim-based stabilizer simulation backend."""

    def __init__(self, n_qubits: int):
        super().__init__(n_qubits)
        self._init_state()

    # ---------- internal helpers ----------

    def _init_state(self) -> None:
        """Initialize tableau to |0>^n."""
        self.tab = stim.TableauSimulator()
        self.tab.set_num_qubits(self.n)

    def _do1(self, opname: str, t: int) -> None:
        """Apply a single-qubit op by name to target index."""
        self.tab.do(stim.Circuit(f"{opname} {t}"))

    def _do2(self, opname: str, t0: int, t1: int) -> None:
        """Apply a two-qubit op by name to (t0, t1)."""
        self.tab.do(stim.Circuit(f"{opname} {t0} {t1}"))

    def _add_wire(self) -> None:
        self.n += 1
        self.tab.set_num_qubits(self.n)

    # ---------- public API ----------

    def reset(self) -> None:
        """Reset to |0>^n."""
        self._init_state()

    def expectation_pauli(self, idx: int, basis: str) -> float:
        """
        Return ⟨basis⟩ for qubit at idx.
        basis ∈ {"X","Y","Z"}.
        """
        if basis not in ("X", "Y", "Z"):
            raise ValueError("Basis must be 'X','Y','Z'")
        pauli = ["I"] * self.n
        pauli[idx] = basis
        obs = stim.PauliString("".join(pauli))
        return float(self.tab.peek_observable_expectation(obs))

    def measure(self, idx: int, basis: str = "Z") -> int:
        """
        Projectively measure qubit `idx` in a Pauli basis (X, Y, or Z).
        We rotate into Z, measure, then rotate back, so the post-measurement
        state matches a true X/Y/Z measurement collapse.
        """
        if basis == "Z":
            return int(self.tab.measure(idx))

        if basis == "X":
            # U = H; U Z U† = X
            self._do1("H", idx)
            out = int(self.tab.measure(idx))
            self._do1("H", idx)
            return out

        if basis == "Y":
            # U = S_DAG ∘ H; U Z U† = Y
            self._do1("S_DAG", idx)
            self._do1("H", idx)
            out = int(self.tab.measure(idx))
            self._do1("H", idx)
            self._do1("S", idx)
            return out

        raise ValueError("Basis must be 'X','Y','Z'")

    def measure_pauli(self, paulis: Sequence[str], targets: Sequence[int]) -> int:
        """Measure a multi-qubit Pauli observable with stim's native observable measurement."""
        if len(paulis) != len(targets):
            raise ValueError(f"Got {len(paulis)} Paulis for {len(targets)} targets")
        obs = stim.PauliString(self.n)
        for p, t in zip(paulis, targets):
            label = str(p).upper()
            if label not in ("I", "X", "Y", "Z"):
                raise ValueError(f"Unknown Pauli label: {p}")
            if label != "I":
                obs[t] = label
        if obs.weight == 0:
            return 0
        return int(self.tab.measure_observable(obs))

    def apply_gate(self, gate: QuantumGate | str, targets: list[int]) -> None:
        """
        Apply a supported Clifford gate.

        Parameters
        ----------
        gate : QuantumGate | str
            Gate name or QuantumGate enum.
        targets : list[int]
            Target indices. One-qubit gates act on each target in turn,
            two-qubit gates expect exactly two.
        """
        gate_enum = _as_gate(gate)
        name = _STIM_NAMES[gate_enum]

        if gate_enum in _TWO_QUBIT:
            if len(targets) != 2:
                raise ValueError(f"{gate_enum} expects 2 targets")
            self._do2(name, targets[0], targets[1])
            return

        for t in targets:
            self._do1(name, t)

    def apply_controlled(self, gate: QuantumGate | str, controls: Sequence[int], target: int) -> None:
        """Singly-controlled Pauli via stim's CX/CY/CZ."""
        gate_enum = _as_gate(gate)
        if len(controls) != 1:
            raise ValueError(f"Stim backend supports exactly one control, got {len(controls)}")
        cgate = gate_enum.controlled
        self._do2(_STIM_NAMES[cgate], controls[0], target)


class StimBackend(QuantumBackend):
    """Factory that creates Stim stabilizer states."""

    def generate_stabilizer_state(self, n_qubits: int) -> StabilizerQuantumState:
        return StimState(n_qubits)
