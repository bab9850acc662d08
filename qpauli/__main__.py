# qpauli/__main__.py
from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.table import Table

from qpauli.errors import QPauliError
from qpauli.logging_config import setup_logging
from qpauli.measurement import measure_with_scratch
from qpauli.pauli import numpy_sampler, pauli_string, random_single_qubit_pauli, weight_one_paulis
from qpauli.qiskit_backend import QiskitBackend, QiskitStatevectorBackend
from qpauli.quantum_backend import MeasurementResult, QuantumBackend, QuantumGate
from qpauli.settings import get_settings
from qpauli.spin_orbital import SpinOrbital
from qpauli.stim_backend import StimBackend

app = typer.Typer(help="Pauli parity measurement toolkit")
console = Console()
log = logging.getLogger("qpauli.cli")

BACKENDS: dict[str, type[QuantumBackend]] = {
    "stim": StimBackend,
    "qiskit": QiskitBackend,
    "statevector": QiskitStatevectorBackend,
}


_GATES_BY_NAME = {g.value.upper(): g for g in QuantumGate}
_TWO_QUBIT = {QuantumGate.CX, QuantumGate.CY, QuantumGate.CZ, QuantumGate.SWAP}


def make_backend(name: str | None) -> QuantumBackend:
    """Instantiate a backend by name; settings.BACKEND when `name` is None."""
    chosen = (name or get_settings().BACKEND).strip().lower()
    if chosen not in BACKENDS:
        raise typer.BadParameter(f"Invalid backend, choose one of {', '.join(BACKENDS)}")
    return BACKENDS[chosen]()


def parse_prep(prep: str, n_qubits: int | None = None) -> list[tuple[str, list[int]]]:
    """
    Parse a preparation recipe such as ``"H 0; CX 0 1"`` into
    ``[("H", [0]), ("CX", [0, 1])]``.

    Gate names are matched case-insensitively against QuantumGate. With
    `n_qubits`, every target must lie in ``0..n_qubits-1``.
    """
    circuit: list[tuple[str, list[int]]] = []
    for chunk in prep.split(";"):
        parts = chunk.split()
        if not parts:
            continue
        step = chunk.strip()
        gate = _GATES_BY_NAME.get(parts[0].upper())
        if gate is None:
            raise typer.BadParameter(f"Unknown gate in preparation step: {step!r}")
        try:
            targets = [int(t) for t in parts[1:]]
        except ValueError:
            raise typer.BadParameter(f"Bad preparation step: {step!r}") from None
        arity_ok = len(targets) == 2 if gate in _TWO_QUBIT else len(targets) >= 1
        if not arity_ok:
            raise typer.BadParameter(f"Wrong number of targets in preparation step: {step!r}")
        if n_qubits is not None and any(not 0 <= t < n_qubits for t in targets):
            raise typer.BadParameter(f"Target out of range 0..{n_qubits - 1} in preparation step: {step!r}")
        circuit.append((gate.value, targets))
    return circuit


@app.command()
def measure(
    pauli: str = typer.Argument(..., help="Observable label, e.g. XX or ZIZ"),
    prep: str = typer.Option("", help='Preparation circuit, e.g. "H 0; CX 0 1"'),
    shots: int = typer.Option(100, min=1, help="Number of fresh preparations"),
    backend: str | None = typer.Option(None, help="Backend: stim, qiskit or statevector"),
):
    """
    Measure PAULI through the ancilla gadget and through the backend's direct
    measurement, and tabulate both outcome counts.
    """
    try:
        observable = pauli_string(pauli)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from None
    be = make_backend(backend)
    n = len(observable)
    circuit = parse_prep(prep, n)
    targets = list(range(n))

    counts = {"gadget": [0, 0], "direct": [0, 0]}
    for _ in range(shots):
        for kind in counts:
            st = be.generate_stabilizer_state(n)
            for gate, qubits in circuit:
                st.apply_gate(gate, qubits)
            if kind == "gadget":
                out = measure_with_scratch(st, observable, targets)
            else:
                out = MeasurementResult(st.measure_pauli(observable, targets))
            counts[kind][out] += 1
    log.info("measured %s for %d shots on %s", pauli, shots, type(be).__name__)

    table = Table(title=f"{''.join(observable)} ({shots} shots)", header_style="bold cyan")
    table.add_column("method")
    table.add_column("ZERO (+1)", justify="right")
    table.add_column("ONE (-1)", justify="right")
    for kind, (zero, one) in counts.items():
        table.add_row(kind, str(zero), str(one))
    console.print(table)


@app.command("weight-one")
def weight_one(n: int = typer.Argument(..., min=0, help="Number of qubits")):
    """List every weight-one Pauli string on N qubits."""
    table = Table(header_style="bold cyan", box=None)
    table.add_column("#", justify="right")
    table.add_column("pauli")
    for i, p in enumerate(weight_one_paulis(n)):
        table.add_row(str(i), "".join(p))
    console.print(table)


@app.command("orbital-index")
def orbital_index(orbital: int, spin: int, n_orbitals: int):
    """Qubit index of (ORBITAL, SPIN) among N_ORBITALS orbitals."""
    try:
        so = SpinOrbital(orbital, spin)
        console.print(f"{so} -> [bold]{so.to_index(n_orbitals)}[/bold]")
    except QPauliError as exc:
        raise typer.BadParameter(str(exc)) from None


@app.command("orbital-from-index")
def orbital_from_index(index: int, n_orbitals: int):
    """Spin-orbital stored at qubit INDEX among N_ORBITALS orbitals."""
    try:
        so = SpinOrbital.from_index(n_orbitals, index)
    except QPauliError as exc:
        raise typer.BadParameter(str(exc)) from None
    console.print(f"{index} -> [bold]{so}[/bold]")


@app.command("random-pauli")
def random_pauli(
    count: int = typer.Option(1, min=1, help="How many to draw"),
    seed: int | None = typer.Option(None, help="RNG seed (default: settings.SEED)"),
):
    """Draw uniformly random single-qubit Paulis."""
    sample = numpy_sampler(seed if seed is not None else get_settings().SEED)
    console.print(" ".join(random_single_qubit_pauli(sample) for _ in range(count)))


if __name__ == "__main__":
    setup_logging()
    app()
