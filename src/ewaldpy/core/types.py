"""Core data structures for Ewald summation over a periodic cell."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import DegenerateLatticeError, InvalidNeighborError


Array = np.ndarray

DEFAULT_C0 = 6.0
DEFAULT_C1 = 2.0


@dataclass(frozen=True)
class System:
    """Point sites periodic in the three supercell lattice vectors.

    ``latvecs`` holds one lattice vector per row. ``c0`` controls accuracy of
    the Ewald sum (the default yields errors of order 1e-12, smaller values run
    faster). ``c1`` balances real against Fourier space work (larger values
    imply more real-space summation).

    The positions array is owned by the system and is rewritten in place by
    :func:`ewaldpy.core.geometry.wrap_positions`; nothing else mutates it.
    """

    latvecs: Array
    positions: Array
    c0: float = DEFAULT_C0
    c1: float = DEFAULT_C1

    def __post_init__(self) -> None:
        latvecs = np.array(self.latvecs, dtype=float)
        if latvecs.shape != (3, 3):
            raise DegenerateLatticeError("latvecs must contain exactly three 3-component vectors.")
        if not np.all(np.isfinite(latvecs)):
            raise DegenerateLatticeError("latvecs must be finite.")
        vol = abs(float(np.dot(np.cross(latvecs[0], latvecs[1]), latvecs[2])))
        scale = float(np.prod(np.linalg.norm(latvecs, axis=1)))
        if scale == 0.0 or vol <= 1e-12 * scale:
            raise DegenerateLatticeError("latvecs must be linearly independent (cell volume is zero).")

        positions = np.array(self.positions, dtype=float)
        if positions.size == 0:
            positions = positions.reshape(0, 3)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError("positions must be a sequence of 3-component vectors.")
        if not np.all(np.isfinite(positions)):
            raise ValueError("positions must be finite.")

        if not self.c0 > 0.0:
            raise ValueError("c0 must be positive.")
        if not self.c1 > 0.0:
            raise ValueError("c1 must be positive.")

        object.__setattr__(self, "latvecs", latvecs)
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "c0", float(self.c0))
        object.__setattr__(self, "c1", float(self.c1))

    @property
    def n_sites(self) -> int:
        return int(self.positions.shape[0])


@dataclass(frozen=True)
class Neighbor:
    """Site ``j`` in the periodic image shifted by cell offset ``n``, as seen from site ``i``."""

    i: int
    j: int
    n: tuple[int, int, int]

    def __post_init__(self) -> None:
        offset = tuple(int(x) for x in self.n)
        if len(offset) != 3:
            raise InvalidNeighborError("Neighbor cell offset must have three integer components.")
        if self.i < 0 or self.j < 0:
            raise InvalidNeighborError("Neighbor site indices must be non-negative.")
        if self.i == self.j and offset == (0, 0, 0):
            raise InvalidNeighborError(f"Site {self.i} cannot neighbor itself at zero cell offset.")
        object.__setattr__(self, "i", int(self.i))
        object.__setattr__(self, "j", int(self.j))
        object.__setattr__(self, "n", offset)


# Entry k lists the neighbors whose first site index is k.
NeighborList = tuple[tuple[Neighbor, ...], ...]


@dataclass(frozen=True)
class WrappedPosition:
    """A site found outside the unit cell before wrapping."""

    index: int
    position: Array
    fractional: Array


@dataclass(frozen=True)
class EwaldEnergyTerms:
    """Real-space, Fourier-space and self-energy parts of the Ewald energy."""

    real_space: float
    fourier_space: float
    self_energy: float

    @property
    def total(self) -> float:
        return self.real_space + self.fourier_space + self.self_energy
