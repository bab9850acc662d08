import pytest

from conftest import BACKENDS, RecordingState
from qpauli.quantum_backend import MeasurementResult, QuantumBackend
from qpauli.reset import reset, reset_all, reset_x, reset_y, reset_z

# single-qubit preparations covering the six stabilizer states
PREPS = {
    "0": [],
    "1": ["X"],
    "+": ["H"],
    "-": ["X", "H"],
    "+i": ["H", "S"],
    "-i": ["X", "H", "S"],
}


def _prepared(Backend, prep: str):
    st = Backend().generate_stabilizer_state(1)
    for g in PREPS[prep]:
        st.apply_gate(g, [0])
    return st


def _is_zero(st, q: int) -> bool:
    return st.expectation_pauli(q, "Z") == pytest.approx(1.0, abs=1e-9)


# ---------- gate order (recording fake) ----------


@pytest.mark.parametrize("outcome", [0, 1])
def test_reset_z_order(outcome: int):
    st = RecordingState(1, outcomes=[outcome])
    assert reset_z(st, 0) == outcome
    expected = [("measure", 0, "Z")] + ([("gate", "X", [0])] if outcome else [])
    assert st.ops == expected


@pytest.mark.parametrize("outcome", [0, 1])
def test_reset_x_rotates_before_correction(outcome: int):
    st = RecordingState(1, outcomes=[outcome])
    assert reset_x(st, 0) == outcome
    expected = [("measure", 0, "X"), ("gate", "H", [0])] + ([("gate", "X", [0])] if outcome else [])
    assert st.ops == expected


@pytest.mark.parametrize("outcome", [0, 1])
def test_reset_y_undoes_basis_change_before_correction(outcome: int):
    st = RecordingState(1, outcomes=[outcome])
    assert reset_y(st, 0) == outcome
    expected = [("measure", 0, "Y"), ("gate", "Sdg", [0]), ("gate", "H", [0])]
    expected += [("gate", "X", [0])] if outcome else []
    assert st.ops == expected


def test_reset_all_touches_each_qubit_once():
    st = RecordingState(3, outcomes=[1, 0, 1])
    reset_all(st, iter([2, 0, 1]))
    assert [op for op in st.ops if op[0] == "measure"] == [("measure", q, "Z") for q in (2, 0, 1)]
    assert [op for op in st.ops if op[0] == "gate"] == [("gate", "X", [2]), ("gate", "X", [1])]


# ---------- real backends ----------


@pytest.mark.parametrize("Backend", BACKENDS)
@pytest.mark.parametrize("prep", list(PREPS))
@pytest.mark.parametrize("reset_fn", [reset_z, reset_x, reset_y])
def test_reset_leaves_zero(Backend: type[QuantumBackend], prep: str, reset_fn):
    """Whatever the outcome, the qubit ends in |0⟩."""
    for _ in range(10):
        st = _prepared(Backend, prep)
        out = reset_fn(st, 0)
        assert isinstance(out, MeasurementResult)
        assert _is_zero(st, 0)
        assert st.measure(0) == 0


@pytest.mark.parametrize("Backend", BACKENDS)
@pytest.mark.parametrize(
    "reset_fn,prep,expected",
    [
        (reset_z, "0", 0),
        (reset_z, "1", 1),
        (reset_x, "+", 0),
        (reset_x, "-", 1),
        (reset_y, "+i", 0),
        (reset_y, "-i", 1),
    ],
)
def test_reset_reports_eigenstate_outcome(Backend: type[QuantumBackend], reset_fn, prep: str, expected: int):
    st = _prepared(Backend, prep)
    assert reset_fn(st, 0) == expected


@pytest.mark.parametrize("Backend", BACKENDS)
def test_reset_is_idempotent(Backend: type[QuantumBackend]):
    st = _prepared(Backend, "-i")
    reset(st, 0)
    assert _is_zero(st, 0)
    reset(st, 0)
    assert _is_zero(st, 0)
    assert st.measure(0) == 0


@pytest.mark.parametrize("Backend", BACKENDS)
def test_reset_all_on_entangled_register(Backend: type[QuantumBackend]):
    st = Backend().generate_stabilizer_state(3)
    st.apply_gate("H", [0])
    st.apply_gate("CX", [0, 1])
    st.apply_gate("CX", [1, 2])
    st.apply_gate("S", [2])
    reset_all(st, range(3))
    assert all(_is_zero(st, q) for q in range(3))
