"""Unit conversion helpers for Ewald energies."""

from __future__ import annotations

import numpy as np


# CODATA 2018 constants (SI).
ELEMENTARY_CHARGE_C = 1.602176634e-19
VACUUM_PERMITTIVITY_F_M = 8.8541878128e-12
BOHR_M = 5.29177210903e-11
ANGSTROM_M = 1.0e-10
HARTREE_EV = 27.211386245988

_LENGTH_UNITS_M = {
    "angstrom": ANGSTROM_M,
    "bohr": BOHR_M,
}


def coulomb_prefactor_ev(length_unit: str = "angstrom") -> float:
    """Return ``e^2 / (4 pi eps0 L)`` in eV for the unit length ``L``.

    Multiplying an Ewald energy computed from positions in that length unit
    and charges in units of ``e`` gives eV.
    """

    key = length_unit.strip().lower()
    try:
        length_m = _LENGTH_UNITS_M[key]
    except KeyError as exc:
        available = ", ".join(sorted(_LENGTH_UNITS_M))
        raise ValueError(f"Unknown length unit '{length_unit}'. Available units: {available}") from exc
    return ELEMENTARY_CHARGE_C / (4.0 * np.pi * VACUUM_PERMITTIVITY_F_M * length_m)


def ewald_energy_to_ev(energy: np.ndarray | float, length_unit: str = "angstrom") -> np.ndarray | float:
    return np.asarray(energy, dtype=float) * coulomb_prefactor_ev(length_unit)


def ewald_energy_to_hartree(energy: np.ndarray | float, length_unit: str = "bohr") -> np.ndarray | float:
    """Convert to Hartree; exact identity for lengths in Bohr."""

    return np.asarray(ewald_energy_to_ev(energy, length_unit), dtype=float) / HARTREE_EV


def list_length_units() -> tuple[str, ...]:
    return tuple(sorted(_LENGTH_UNITS_M))
