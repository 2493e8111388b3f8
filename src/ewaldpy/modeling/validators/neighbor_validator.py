"""Validation of externally supplied neighbor lists."""

from __future__ import annotations

import numpy as np

from ewaldpy.core.errors import InvalidNeighborError
from ewaldpy.core.types import Array, Neighbor, NeighborList


def validate_neighbor_list(neighbors: NeighborList, n_sites: int) -> tuple[Array, Array, Array]:
    """Check grouping and index ranges; return flat ``(i, j, offsets)`` arrays."""

    if len(neighbors) != n_sites:
        raise InvalidNeighborError(
            f"Neighbor list must have one group per site ({n_sites}), got {len(neighbors)}."
        )
    i_idx: list[int] = []
    j_idx: list[int] = []
    offsets: list[tuple[int, int, int]] = []
    for site, group in enumerate(neighbors):
        for neigh in group:
            if not isinstance(neigh, Neighbor):
                raise InvalidNeighborError(f"Neighbor list entry {neigh!r} under site {site} is not a Neighbor.")
            if neigh.i != site:
                raise InvalidNeighborError(f"{neigh} is listed under site {site}.")
            if neigh.j >= n_sites:
                raise InvalidNeighborError(f"{neigh} refers to a site outside the system.")
            i_idx.append(neigh.i)
            j_idx.append(neigh.j)
            offsets.append(neigh.n)
    return (
        np.asarray(i_idx, dtype=np.intp),
        np.asarray(j_idx, dtype=np.intp),
        np.asarray(offsets, dtype=float).reshape(-1, 3),
    )
