"""Brute-force O(N^2) neighbor search over periodic images."""

from __future__ import annotations

import logging

import numpy as np

from .errors import ZeroDistanceNeighborError
from .geometry import offset_grid, wrap_positions
from .parameters import real_space_cutoff, real_space_search_bounds
from .types import Neighbor, NeighborList, System


logger = logging.getLogger(__name__)

# Distinct sites closer than this are treated as coincident.
MIN_DISTANCE = 1e-12


def get_neighbors(system: System, rmax: float = 0.0) -> NeighborList:
    """Return, for each site ``i``, all images of sites ``j`` within ``rmax``.

    Positions are wrapped into the unit cell first (warning about any site that
    had to move). ``rmax = 0`` selects the real-space cutoff of the system.
    Within each site's group, entries are ordered by ``j`` and then by cell
    offset ``(n1, n2, n3)``, all ascending. An entry is kept iff
    ``0 < |r|^2 <= rmax^2``; two distinct sites that coincide raise
    :class:`ZeroDistanceNeighborError`.
    """

    if rmax < 0.0:
        raise ValueError("rmax must be non-negative.")

    wrap_positions(system, warn=True)

    if rmax == 0.0:
        rmax = real_space_cutoff(system)
    rmax2 = rmax * rmax

    bounds = real_space_search_bounds(system, rmax)
    offsets = offset_grid(bounds)
    shifts = offsets.astype(float) @ system.latvecs
    is_origin = np.all(offsets == 0, axis=1)

    n_sites = system.n_sites
    out: list[tuple[Neighbor, ...]] = []
    for i in range(n_sites):
        group: list[Neighbor] = []
        for j in range(n_sites):
            r = system.positions[j] - system.positions[i] + shifts
            d2 = np.einsum("ij,ij->i", r, r)
            coincident = np.flatnonzero(d2 <= MIN_DISTANCE * MIN_DISTANCE)
            if i != j and coincident.size:
                n1, n2, n3 = offsets[coincident[0]]
                raise ZeroDistanceNeighborError(Neighbor(i=i, j=j, n=(int(n1), int(n2), int(n3))))
            keep = (d2 > 0.0) & (d2 <= rmax2)
            if i == j:
                keep &= ~is_origin
            for n1, n2, n3 in offsets[keep]:
                group.append(Neighbor(i=i, j=j, n=(int(n1), int(n2), int(n3))))
        out.append(tuple(group))

    logger.debug(
        "neighbor search: %d sites, rmax=%.6g, bounds=%s, %d entries",
        n_sites,
        rmax,
        bounds,
        sum(len(g) for g in out),
    )
    return tuple(out)
