"""Ewald energy of periodic point charges and point dipoles.

The Coulomb sum is split with a Gaussian of width ``sigma`` into a
short-ranged real-space pair sum, a smooth Fourier-space mode sum and a
self-energy correction. Energies are in units where ``4 pi eps0 = 1`` with
tin-foil boundary conditions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from scipy.special import erfc

from ewaldpy.modeling.validators import validate_charges, validate_dipoles, validate_neighbor_list

from .errors import ChargeNeutralityError, ZeroDistanceNeighborError
from .geometry import offset_grid, pair_displacements, reciprocal_vectors, volume
from .neighbors import MIN_DISTANCE, get_neighbors
from .parameters import fourier_space_cutoff, fourier_space_search_bounds, sigma
from .types import Array, EwaldEnergyTerms, Neighbor, NeighborList, System


logger = logging.getLogger(__name__)

NEUTRALITY_TOL = 1e-12
# Number of Fourier modes evaluated per structure-factor batch.
MODE_CHUNK = 4096


def _real_space_sum(
    system: System,
    i: Array,
    j: Array,
    offsets: Array,
    q: Array,
    p: Array,
    sig: float,
) -> float:
    if i.size == 0:
        return 0.0

    rvec = pair_displacements(system, i, j, offsets)
    r2 = np.einsum("ij,ij->i", rvec, rvec)
    r = np.sqrt(r2)
    bad = np.flatnonzero(r <= MIN_DISTANCE)
    if bad.size:
        k = bad[0]
        n1, n2, n3 = (int(x) for x in offsets[k])
        raise ZeroDistanceNeighborError(Neighbor(i=int(i[k]), j=int(j[k]), n=(n1, n2, n3)))
    r3 = r2 * r
    rhat = rvec / r[:, None]

    sig2 = sig * sig
    erfc0 = erfc(r / (np.sqrt(2.0) * sig))
    gauss0 = np.sqrt(2.0 / np.pi) * (r / sig) * np.exp(-r2 / (2.0 * sig2))

    qi, qj = q[i], q[j]
    pi, pj = p[i], p[j]
    pi_r = np.einsum("ij,ij->i", pi, rhat)
    pj_r = np.einsum("ij,ij->i", pj, rhat)
    pi_pj = np.einsum("ij,ij->i", pi, pj)

    charge_charge = 0.5 * qi * qj * erfc0 / r
    # (q_i p_j - p_i q_j) . rhat
    cross = qi * pj_r - pi_r * qj
    charge_dipole = 0.5 * cross / r2 * (erfc0 + gauss0)
    dipole_dipole = 0.5 * (
        (pi_pj / r3) * (erfc0 + gauss0)
        - (3.0 * pi_r * pj_r / r3) * (erfc0 + (1.0 + r2 / (3.0 * sig2)) * gauss0)
    )
    return float(np.sum(charge_charge + charge_dipole + dipole_dipole))


def _fourier_space_sum(system: System, q: Array, p: Array, sig: float) -> float:
    vol = volume(system.latvecs)
    bs = reciprocal_vectors(system.latvecs)
    kmax = fourier_space_cutoff(system)

    modes = offset_grid(fourier_space_search_bounds(system))
    k = modes.astype(float) @ bs
    k2 = np.einsum("ij,ij->i", k, k)
    mask = (k2 > 0.0) & (k2 <= kmax * kmax)
    k, k2 = k[mask], k2[mask]
    logger.debug("Fourier sum over %d modes (kmax=%.6g)", k2.size, kmax)

    total = 0.0
    for start in range(0, k2.size, MODE_CHUNK):
        kc = k[start : start + MODE_CHUNK]
        kc2 = k2[start : start + MODE_CHUNK]
        # rho(k) = sum_s (q_s + i p_s.k) exp(-i k.r_s)
        phase = np.exp(-1j * (kc @ system.positions.T))
        rho = np.sum((q[None, :] + 1j * (kc @ p.T)) * phase, axis=1)
        weight = 4.0 * np.pi / (2.0 * vol) * np.exp(-sig * sig * kc2 / 2.0) / kc2
        total += float(np.sum(weight * np.abs(rho) ** 2))
    return total


def _self_energy(q: Array, p: Array, sig: float) -> float:
    pp = np.einsum("ij,ij->i", p, p)
    return float(
        -np.sum(q * q) / (np.sqrt(2.0 * np.pi) * sig)
        - np.sum(pp) / (np.sqrt(2.0 * np.pi) * 3.0 * sig**3)
    )


def energy_terms(
    system: System,
    *,
    charges: Sequence[float] | Array | None = None,
    dipoles: Sequence[Sequence[float]] | Array | None = None,
    neighbors: NeighborList | None = None,
) -> EwaldEnergyTerms:
    """Return the three parts of the Ewald energy.

    ``charges`` and ``dipoles`` default to zero on every site. ``neighbors``
    defaults to :func:`get_neighbors`; pass a cached list to reuse one geometry
    with different charge/dipole assignments. Charges must sum to zero within
    ``NEUTRALITY_TOL``; the residual is then spread evenly over all sites.
    """

    n_sites = system.n_sites
    sig = sigma(system)
    q = validate_charges(charges, n_sites)
    p = validate_dipoles(dipoles, n_sites)

    net = float(np.sum(q))
    if abs(net) >= NEUTRALITY_TOL:
        raise ChargeNeutralityError(net, NEUTRALITY_TOL)
    q -= net / n_sites

    # Sources are checked before the search, which wraps positions in place.
    if neighbors is None or len(neighbors) == 0:
        neighbors = get_neighbors(system)
    i, j, offsets = validate_neighbor_list(neighbors, n_sites)

    terms = EwaldEnergyTerms(
        real_space=_real_space_sum(system, i, j, offsets, q, p, sig),
        fourier_space=_fourier_space_sum(system, q, p, sig),
        self_energy=_self_energy(q, p, sig),
    )
    logger.debug(
        "Ewald energy: real=%.16g fourier=%.16g self=%.16g (%d neighbor entries)",
        terms.real_space,
        terms.fourier_space,
        terms.self_energy,
        i.size,
    )
    return terms


def energy(
    system: System,
    *,
    charges: Sequence[float] | Array | None = None,
    dipoles: Sequence[Sequence[float]] | Array | None = None,
    neighbors: NeighborList | None = None,
) -> float:
    """Calculate the Ewald energy in units of ``1/(4 pi eps0)``.

    Omitted charges or dipoles are taken to be zero. See :func:`energy_terms`.
    """

    return energy_terms(system, charges=charges, dipoles=dipoles, neighbors=neighbors).total
