"""Gaussian width and truncation radii derived from the c0/c1 controls."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .errors import EmptySystemError
from .geometry import reciprocal_vectors, volume
from .types import Array, System


logger = logging.getLogger(__name__)

# Extra cells searched per axis to cover sites near the cell faces.
CELL_MARGIN = 1
# Guards the rounding in required_cell_displacement at exact boundaries.
ROUNDING_EPS = 1e-6


@dataclass(frozen=True)
class EwaldParameters:
    """Derived summation parameters for one system."""

    sigma: float
    real_space_cutoff: float
    fourier_space_cutoff: float
    cell_bounds: tuple[int, int, int]
    mode_bounds: tuple[int, int, int]


def sigma(system: System) -> float:
    """Gaussian screening width ``L / (c1 N^(1/6))`` with ``L = V^(1/3)``."""

    n = system.n_sites
    if n == 0:
        raise EmptySystemError("Empty system: sigma is undefined without sites.")
    length = np.cbrt(volume(system.latvecs))
    return float(length / (system.c1 * n ** (1.0 / 6.0)))


def real_space_cutoff(system: System) -> float:
    return float(np.sqrt(2.0) * system.c0 * sigma(system))


def fourier_space_cutoff(system: System) -> float:
    return float(np.sqrt(2.0) * system.c0 / sigma(system))


def required_cell_displacement(basis_vectors: Array, cutoff_radius: float) -> tuple[int, int, int]:
    """Multiples of each basis vector needed to cover a sphere of ``cutoff_radius``.

    The extent of one cell along basis vector ``a`` is its projection onto the
    unit normal of the opposite face, i.e. onto the dual vector. For a
    non-orthogonal basis this is shorter than ``|a|``. Applies equally to a
    direct lattice (dual = reciprocal vectors) and a reciprocal lattice
    (dual = direct vectors).
    """

    basis = np.asarray(basis_vectors, dtype=float)
    dual = reciprocal_vectors(basis)
    out = []
    for v, w in zip(basis, dual):
        extent = float(np.dot(v, w / np.linalg.norm(w)))
        out.append(int(round(cutoff_radius / extent + ROUNDING_EPS)))
    return (out[0], out[1], out[2])


def real_space_search_bounds(system: System, rmax: float | None = None) -> tuple[int, int, int]:
    if rmax is None:
        rmax = real_space_cutoff(system)
    n1, n2, n3 = required_cell_displacement(system.latvecs, rmax)
    return (n1 + CELL_MARGIN, n2 + CELL_MARGIN, n3 + CELL_MARGIN)


def fourier_space_search_bounds(system: System) -> tuple[int, int, int]:
    kmax = fourier_space_cutoff(system)
    m1, m2, m3 = required_cell_displacement(reciprocal_vectors(system.latvecs), kmax)
    return (m1 + CELL_MARGIN, m2 + CELL_MARGIN, m3 + CELL_MARGIN)


def ewald_parameters(system: System) -> EwaldParameters:
    params = EwaldParameters(
        sigma=sigma(system),
        real_space_cutoff=real_space_cutoff(system),
        fourier_space_cutoff=fourier_space_cutoff(system),
        cell_bounds=real_space_search_bounds(system),
        mode_bounds=fourier_space_search_bounds(system),
    )
    logger.debug(
        "sigma=%.6g rcut=%.6g kcut=%.6g cells=%s modes=%s",
        params.sigma,
        params.real_space_cutoff,
        params.fourier_space_cutoff,
        params.cell_bounds,
        params.mode_bounds,
    )
    return params
