"""Validation helpers for per-site charges and dipoles."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ewaldpy.core.types import Array


def validate_charges(charges: Sequence[float] | Array | None, n_sites: int) -> Array:
    """Return a fresh float array of charges; ``None`` or empty means all zero."""

    if charges is None:
        return np.zeros(n_sites, dtype=float)
    q = np.array(charges, dtype=float)
    if q.size == 0:
        return np.zeros(n_sites, dtype=float)
    if q.ndim != 1:
        raise ValueError("charges must be a 1D array.")
    if q.size != n_sites:
        raise ValueError(f"charges must have one entry per site ({n_sites}), got {q.size}.")
    if not np.all(np.isfinite(q)):
        raise ValueError("charges must be finite.")
    return q


def validate_dipoles(dipoles: Sequence[Sequence[float]] | Array | None, n_sites: int) -> Array:
    """Return a fresh ``(n_sites, 3)`` dipole array; ``None`` or empty means all zero."""

    if dipoles is None:
        return np.zeros((n_sites, 3), dtype=float)
    p = np.array(dipoles, dtype=float)
    if p.size == 0:
        return np.zeros((n_sites, 3), dtype=float)
    if p.ndim != 2 or p.shape[1] != 3:
        raise ValueError("dipoles must be a sequence of 3-component vectors.")
    if p.shape[0] != n_sites:
        raise ValueError(f"dipoles must have one entry per site ({n_sites}), got {p.shape[0]}.")
    if not np.all(np.isfinite(p)):
        raise ValueError("dipoles must be finite.")
    return p
