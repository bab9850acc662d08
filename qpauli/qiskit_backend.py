# qpauli/qiskit_backend.py
from __future__ import annotations

from typing import Sequence

from qiskit import QuantumCircuit
from qiskit.circuit import Gate
from qiskit.circuit.library import (
    CXGate,
    CYGate,
    CZGate,
    HGate,
    SdgGate,
    SGate,
    SwapGate,
    XGate,
    YGate,
    ZGate,
)
from qiskit.quantum_info import Clifford, Pauli, StabilizerState, Statevector

from qpauli.quantum_backend import QuantumBackend, QuantumGate, StabilizerQuantumState

_GATES: dict[QuantumGate, type[Gate]] = {
    QuantumGate.X: XGate,
    QuantumGate.Y: YGate,
    QuantumGate.Z: ZGate,
    QuantumGate.H: HGate,
    QuantumGate.S: SGate,
    QuantumGate.Sdg: SdgGate,
    QuantumGate.CX: CXGate,
    QuantumGate.CY: CYGate,
    QuantumGate.CZ: CZGate,
    QuantumGate.SWAP: SwapGate,
}


def _as_gate(gate: QuantumGate | str) -> QuantumGate:
    if isinstance(gate, QuantumGate):
        return gate
    try:
        return QuantumGate[gate]
    except KeyError:
        raise ValueError(f"Unsupported gate string: {gate}") from None


class _QiskitStateBase(StabilizerQuantumState):
    """Shared gate/measurement plumbing for qiskit `quantum_info` states."""

    def __init__(self, n_qubits: int):
        super().__init__(n_qubits)
        self._init_state()

    def _init_state(self) -> None:
        raise NotImplementedError

    def _evolve(self, gate: Gate, qargs: list[int]) -> None:
        raise NotImplementedError

    # ---------- public API ----------

    def reset(self) -> None:
        """Reset the state to |0...0⟩."""
        self._init_state()

    def expectation_pauli(self, idx: int, basis: str) -> float:
        """
        Compute ⟨basis⟩ for a single qubit at index.

        Qiskit uses little-endian order for Pauli labels:
        qubit 0 corresponds to the *right-most* character.

        Parameters
        ----------
        idx : int
            Index of the qubit.
        basis : str
            Pauli basis: one of {"X", "Y", "Z"}.

        Returns
        -------
        float
            Expectation value in the given basis.
        """
        if basis not in ("X", "Y", "Z"):
            raise ValueError("Basis must be one of 'X','Y','Z'")

        # Right-most char = qubit 0 (little-endian)
        label = "I" * (self.n - idx - 1) + basis + "I" * idx
        value = self.state.expectation_value(Pauli(label))
        return float(value.real)

    def measure(self, idx: int, basis: str = "Z") -> int:
        """
        Perform a projective measurement in the given Pauli basis.

        Parameters
        ----------
        idx : int
            Index of the qubit to measure.
        basis : str, default="Z"
            Measurement basis, one of {"X", "Y", "Z"}.

        Returns
        -------
        int
            The measurement outcome (0 or 1).
        """
        if basis == "Z":
            outcome, self.state = self.state.measure([idx])
            return int(outcome)

        if basis == "X":
            self._evolve(HGate(), [idx])
            outcome, self.state = self.state.measure([idx])
            self._evolve(HGate(), [idx])
            return int(outcome)

        if basis == "Y":
            # U = Sdg ∘ H, then measure Z, then undo with H ∘ S
            self._evolve(SdgGate(), [idx])
            self._evolve(HGate(), [idx])
            outcome, self.state = self.state.measure([idx])
            self._evolve(HGate(), [idx])
            self._evolve(SGate(), [idx])
            return int(outcome)

        raise ValueError("Basis must be one of 'X', 'Y', 'Z'")

    def apply_gate(self, gate: QuantumGate | str, targets: list[int]) -> None:
        """
        Apply a supported gate.

        Parameters
        ----------
        gate : QuantumGate | str
            The gate to apply. Can be passed as a QuantumGate enum or as a string
            (e.g. "X", "H").
        targets : list[int]
            Indices of the target qubits. One-qubit gates act on each target,
            two-qubit gates expect exactly two.

        Raises
        ------
        ValueError
            If the gate is unsupported or applied to the wrong number of qubits.
        """
        gate_enum = _as_gate(gate)
        op = _GATES[gate_enum]()

        if op.num_qubits == 1:
            for t in targets:
                self._evolve(op, [t])
            return

        if op.num_qubits != len(targets):
            raise ValueError(f"Gate {gate_enum} expects {op.num_qubits} qubits, got {len(targets)}")
        self._evolve(op, list(targets))


class QiskitState(_QiskitStateBase):
    """
    Stabilizer state implementation using Qiskit's Clifford simulator.
    """

    def _init_state(self) -> None:
        """Initialize stabilizer state to |0...0⟩."""
        self.state = StabilizerState(QuantumCircuit(self.n))

    def _evolve(self, gate: Gate, qargs: list[int]) -> None:
        self.state = self.state.evolve(Clifford(gate), qargs)

    def _add_wire(self) -> None:
        # expand() places the new qubit after the existing ones
        self.state = self.state.expand(StabilizerState(QuantumCircuit(1)))
        self.n += 1

    def apply_controlled(self, gate: QuantumGate | str, controls: Sequence[int], target: int) -> None:
        """Singly-controlled Pauli; multi-control Paulis are not Clifford."""
        gate_enum = _as_gate(gate)
        if len(controls) != 1:
            raise ValueError(f"Clifford backend supports exactly one control, got {len(controls)}")
        cgate = _GATES[gate_enum.controlled]()
        self._evolve(cgate, [controls[0], target])


class QiskitStatevectorState(_QiskitStateBase):
    """
    Dense statevector implementation. Slower, but supports any number of controls.
    """

    def _init_state(self) -> None:
        self.state = Statevector.from_label("0" * self.n)

    def _evolve(self, gate: Gate, qargs: list[int]) -> None:
        self.state = self.state.evolve(gate, qargs)

    def _add_wire(self) -> None:
        self.state = self.state.expand(Statevector.from_label("0"))
        self.n += 1

    def apply_controlled(self, gate: QuantumGate | str, controls: Sequence[int], target: int) -> None:
        """Pauli on `target` controlled by all of `controls` (qiskit puts controls first)."""
        gate_enum = _as_gate(gate)
        if gate_enum not in (QuantumGate.X, QuantumGate.Y, QuantumGate.Z):
            raise ValueError(f"Only Pauli gates can be controlled, got {gate_enum}")
        if not controls:
            raise ValueError("At least one control qubit is required")
        op = _GATES[gate_enum]().control(len(controls))
        self._evolve(op, [*controls, target])


class QiskitBackend(QuantumBackend):
    """
    Qiskit Clifford (stabilizer) backend.
    """

    def generate_stabilizer_state(self, n_qubits: int) -> StabilizerQuantumState:
        """Initialize a fresh stabilizer state with `n_qubits`."""
        return QiskitState(n_qubits)


class QiskitStatevectorBackend(QuantumBackend):
    """
    Qiskit statevector backend, for multi-controlled Paulis and small registers.
    """

    def generate_stabilizer_state(self, n_qubits: int) -> StabilizerQuantumState:
        return QiskitStatevectorState(n_qubits)
