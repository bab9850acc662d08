# qpauli/errors.py
from __future__ import annotations


class QPauliError(Exception):
    """Base class for classical precondition failures raised by qpauli."""


class LengthMismatchError(QPauliError, ValueError):
    """A Pauli string, bit string or qubit sequence disagree in length."""


class IndexOutOfRangeError(QPauliError, IndexError):
    """A position or flattened index lies outside its register."""


class InvalidSpinOrbitalError(QPauliError, ValueError):
    """Spin not in {0, 1}, negative orbital, or orbital/n_orbitals inconsistent."""


def check_same_length(what: str, left, right) -> None:
    """Raise LengthMismatchError unless `left` and `right` have equal length."""
    if len(left) != len(right):
        raise LengthMismatchError(f"{what}: length {len(left)} does not match {len(right)} target qubits")
