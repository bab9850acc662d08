import importlib.metadata

from .errors import IndexOutOfRangeError, InvalidSpinOrbitalError, LengthMismatchError, QPauliError
from .measurement import AncillaReleasePolicy, basis_change_z_to_y, measure_paulis, measure_with_scratch
from .pauli import (
    Pauli, PauliString, apply_pauli, apply_pauli_from_bitstring, embed, numpy_sampler,
    pauli_string, pauli_weight, random_single_qubit_pauli, weight_one_paulis,
)
from .quantum_backend import MeasurementResult, QuantumBackend, QuantumGate, StabilizerQuantumState, borrowed_qubit
from .reset import reset, reset_all, reset_x, reset_y, reset_z
from .spin_orbital import Spin, SpinOrbital, from_index, to_index

__version__ = importlib.metadata.version("qpauli")
