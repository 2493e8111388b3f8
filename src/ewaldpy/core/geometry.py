"""Lattice algebra and periodic-image geometry."""

from __future__ import annotations

import warnings

import numpy as np

from .errors import DegenerateLatticeError, PositionOutsideCellWarning
from .types import Array, Neighbor, System, WrappedPosition


def _as_basis(vectors: Array) -> Array:
    basis = np.asarray(vectors, dtype=float)
    if basis.shape != (3, 3):
        raise DegenerateLatticeError("A lattice basis must contain exactly three 3-component vectors.")
    return basis


def reciprocal_vectors(latvecs: Array) -> Array:
    """Return reciprocal vectors ``b`` (rows) with ``a[α]·b[β] = 2π δ_αβ``."""

    basis = _as_basis(latvecs)
    try:
        inv = np.linalg.inv(basis.T)
    except np.linalg.LinAlgError as exc:
        raise DegenerateLatticeError("Lattice vectors are linearly dependent.") from exc
    return 2.0 * np.pi * inv


def volume(latvecs: Array) -> float:
    a = _as_basis(latvecs)
    return abs(float(np.dot(np.cross(a[0], a[1]), a[2])))


def offset_grid(bounds: tuple[int, int, int]) -> Array:
    """All integer triples in ``[-b, b]`` per axis, last axis varying fastest."""

    axes = [np.arange(-int(b), int(b) + 1) for b in bounds]
    mesh = np.meshgrid(*axes, indexing="ij")
    return np.stack([m.ravel() for m in mesh], axis=1)


def displacement(system: System, neighbor: Neighbor) -> Array:
    """Vector from site ``i`` to the image of site ``j`` selected by the cell offset."""

    ri = system.positions[neighbor.i]
    rj = system.positions[neighbor.j]
    return rj - ri + np.asarray(neighbor.n, dtype=float) @ system.latvecs


def distance2(system: System, neighbor: Neighbor) -> float:
    r = displacement(system, neighbor)
    return float(np.dot(r, r))


def pair_displacements(system: System, i: Array, j: Array, offsets: Array) -> Array:
    """Vectorized :func:`displacement` over parallel index/offset arrays."""

    shifts = np.asarray(offsets, dtype=float).reshape(-1, 3) @ system.latvecs
    return system.positions[j] - system.positions[i] + shifts


def wrap_positions(system: System, warn: bool = False) -> tuple[WrappedPosition, ...]:
    """Wrap every site into the fundamental cell, in place.

    Returns one record per site whose fractional coordinates fell outside
    ``[0, 1]``. With ``warn=True`` each record is also reported as a
    :class:`PositionOutsideCellWarning`.
    """

    a = system.latvecs.T
    try:
        inv_a = np.linalg.inv(a)
    except np.linalg.LinAlgError as exc:
        raise DegenerateLatticeError("Lattice vectors are linearly dependent.") from exc

    frac = system.positions @ inv_a.T
    outside = np.any((frac < 0.0) | (frac > 1.0), axis=1)
    records: list[WrappedPosition] = []
    for idx in np.flatnonzero(outside):
        rec = WrappedPosition(
            index=int(idx),
            position=system.positions[idx].copy(),
            fractional=frac[idx].copy(),
        )
        records.append(rec)
        if warn:
            warnings.warn(
                f"Ion {rec.index} at {rec.position} is outside unit cell. "
                f"Its fractional coordinates are {rec.fractional}.",
                PositionOutsideCellWarning,
                stacklevel=2,
            )

    system.positions[...] = np.mod(frac, 1.0) @ a.T
    return tuple(records)
