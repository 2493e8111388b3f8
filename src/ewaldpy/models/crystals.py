"""Reference ionic crystals with tabulated Madelung constants."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from ewaldpy.core import System, energy
from ewaldpy.core.types import DEFAULT_C0, DEFAULT_C1


Array = np.ndarray

# Y. Sakamoto, J. Chem. Phys. 28, 164 (1958).
MADELUNG_NACL = -1.7475645946331822
MADELUNG_CSCL = -1.76267477307099


@dataclass(frozen=True)
class IonicCrystal:
    """Unit cell, ion positions and unit charges of a binary ionic crystal."""

    name: str
    latvecs: Array
    positions: Array
    charges: Array
    nearest_neighbor_distance: float
    formula_units: int
    reference_madelung: float

    def __post_init__(self) -> None:
        if self.positions.shape[0] != self.charges.shape[0]:
            raise ValueError("charges must have one entry per position.")
        if self.nearest_neighbor_distance <= 0.0:
            raise ValueError("nearest_neighbor_distance must be positive.")
        if self.formula_units <= 0:
            raise ValueError("formula_units must be positive.")

    def system(self, c0: float = DEFAULT_C0, c1: float = DEFAULT_C1) -> System:
        """Return a fresh system; wrapping it never touches this crystal."""

        return System(latvecs=self.latvecs.copy(), positions=self.positions.copy(), c0=c0, c1=c1)


def cscl_crystal(lattice_constant: float = 1.0, shear: float = 0.0) -> IonicCrystal:
    """CsCl: opposite unit charges at the cube corner and body center.

    ``shear`` adds a multiple of the first lattice vector to the second. The
    crystal is unchanged, only its cell is tilted.
    """

    if lattice_constant <= 0.0:
        raise ValueError("lattice_constant must be positive.")
    a = float(lattice_constant)
    latvecs = a * np.array([[1.0, 0.0, 0.0], [shear, 1.0, 0.0], [0.0, 0.0, 1.0]])
    positions = a * np.array([[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]])
    return IonicCrystal(
        name="cscl",
        latvecs=latvecs,
        positions=positions,
        charges=np.array([1.0, -1.0]),
        nearest_neighbor_distance=a * np.sqrt(3.0) / 2.0,
        formula_units=1,
        reference_madelung=MADELUNG_CSCL,
    )


def nacl_conventional_crystal(lattice_constant: float = 2.0) -> IonicCrystal:
    """NaCl rock salt in its 8-ion cubic cell."""

    if lattice_constant <= 0.0:
        raise ValueError("lattice_constant must be positive.")
    a = float(lattice_constant)
    corners = np.array([(x, y, z) for z in (0, 1) for y in (0, 1) for x in (0, 1)], dtype=float)
    charges = np.where(corners.sum(axis=1) % 2 == 1, 1.0, -1.0)
    return IonicCrystal(
        name="nacl_conventional",
        latvecs=a * np.eye(3),
        positions=0.5 * a * corners,
        charges=charges,
        nearest_neighbor_distance=0.5 * a,
        formula_units=4,
        reference_madelung=MADELUNG_NACL,
    )


def nacl_primitive_crystal(lattice_constant: float = 2.0) -> IonicCrystal:
    """NaCl rock salt in its 2-ion FCC primitive cell."""

    if lattice_constant <= 0.0:
        raise ValueError("lattice_constant must be positive.")
    a = float(lattice_constant)
    latvecs = 0.5 * a * np.array([[1.0, 1.0, 0.0], [1.0, 0.0, 1.0], [0.0, 1.0, 1.0]])
    positions = 0.5 * a * np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])
    return IonicCrystal(
        name="nacl_primitive",
        latvecs=latvecs,
        positions=positions,
        charges=np.array([1.0, -1.0]),
        nearest_neighbor_distance=0.5 * a,
        formula_units=1,
        reference_madelung=MADELUNG_NACL,
    )


_CRYSTALS: dict[str, Callable[[float], IonicCrystal]] = {
    "cscl": cscl_crystal,
    "nacl_conventional": nacl_conventional_crystal,
    "nacl_primitive": nacl_primitive_crystal,
}


def list_crystals() -> tuple[str, ...]:
    return tuple(sorted(_CRYSTALS.keys()))


def reference_crystal(name: str, lattice_constant: float | None = None) -> IonicCrystal:
    key = name.strip().lower()
    try:
        builder = _CRYSTALS[key]
    except KeyError as exc:
        available = ", ".join(list_crystals())
        raise KeyError(f"Unknown crystal '{name}'. Available crystals: {available}") from exc
    return builder() if lattice_constant is None else builder(lattice_constant)


def madelung_constant(crystal: IonicCrystal, c0: float = DEFAULT_C0, c1: float = DEFAULT_C1) -> float:
    """Ewald energy per formula unit in units of ``1 / r_nn``."""

    e_cell = energy(crystal.system(c0=c0, c1=c1), charges=crystal.charges)
    return e_cell * crystal.nearest_neighbor_distance / crystal.formula_units
