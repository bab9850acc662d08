# qpauli/spin_orbital.py
"""
Spin-orbital <-> qubit index encoding.

A register of ``2 * n_orbitals`` qubits holds all spin-up orbitals first,
then all spin-down orbitals::

    index = spin * n_orbitals + orbital
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from numbers import Integral

from qpauli.errors import IndexOutOfRangeError, InvalidSpinOrbitalError


class Spin(IntEnum):
    UP = 0
    DOWN = 1

    def __str__(self) -> str:
        return "u" if self is Spin.UP else "d"


def _check_n_orbitals(n_orbitals: int) -> None:
    if n_orbitals <= 0:
        raise InvalidSpinOrbitalError(f"n_orbitals must be positive, got {n_orbitals}")


@dataclass(frozen=True, order=True)
class SpinOrbital:
    """A spatial orbital index paired with a spin projection."""

    orbital: int
    spin: Spin

    def __post_init__(self):
        if isinstance(self.orbital, bool) or not isinstance(self.orbital, Integral):
            raise InvalidSpinOrbitalError(f"orbital must be an integer, got {self.orbital!r}")
        object.__setattr__(self, "orbital", int(self.orbital))
        if self.orbital < 0:
            raise InvalidSpinOrbitalError(f"orbital must be non-negative, got {self.orbital}")
        try:
            spin = Spin(self.spin)
        except ValueError:
            raise InvalidSpinOrbitalError(f"spin must be 0 or 1, got {self.spin!r}") from None
        object.__setattr__(self, "spin", spin)

    def to_index(self, n_orbitals: int) -> int:
        """Flattened qubit index in a register of ``2 * n_orbitals`` qubits."""
        _check_n_orbitals(n_orbitals)
        if self.orbital >= n_orbitals:
            raise InvalidSpinOrbitalError(f"orbital {self.orbital} does not fit in {n_orbitals} orbitals")
        return int(self.spin) * n_orbitals + self.orbital

    @classmethod
    def from_index(cls, n_orbitals: int, index: int) -> SpinOrbital:
        """Inverse of `to_index`."""
        _check_n_orbitals(n_orbitals)
        if not 0 <= index < 2 * n_orbitals:
            raise IndexOutOfRangeError(f"index {index} outside [0, {2 * n_orbitals})")
        spin, orbital = divmod(index, n_orbitals)
        return cls(orbital, Spin(spin))

    def to_tuple(self) -> tuple[int, int]:
        return (self.orbital, int(self.spin))

    def __str__(self) -> str:
        return f"({self.orbital}, {self.spin})"


def to_index(orbital: int, spin: int, n_orbitals: int) -> int:
    return SpinOrbital(orbital, spin).to_index(n_orbitals)


def from_index(index: int, n_orbitals: int) -> tuple[int, int]:
    """Return ``(orbital, spin)`` for a flattened index."""
    return SpinOrbital.from_index(n_orbitals, index).to_tuple()
