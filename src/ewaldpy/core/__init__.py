from .energy import energy, energy_terms
from .errors import (
    ChargeNeutralityError,
    DegenerateLatticeError,
    EmptySystemError,
    EwaldError,
    InvalidNeighborError,
    PositionOutsideCellWarning,
    ZeroDistanceNeighborError,
)
from .geometry import displacement, distance2, reciprocal_vectors, volume, wrap_positions
from .neighbors import get_neighbors
from .parameters import (
    EwaldParameters,
    ewald_parameters,
    fourier_space_cutoff,
    real_space_cutoff,
    required_cell_displacement,
    sigma,
)
from .types import EwaldEnergyTerms, Neighbor, NeighborList, System, WrappedPosition

__all__ = [
    "System",
    "Neighbor",
    "NeighborList",
    "WrappedPosition",
    "EwaldEnergyTerms",
    "EwaldParameters",
    "EwaldError",
    "DegenerateLatticeError",
    "EmptySystemError",
    "ChargeNeutralityError",
    "InvalidNeighborError",
    "ZeroDistanceNeighborError",
    "PositionOutsideCellWarning",
    "reciprocal_vectors",
    "volume",
    "displacement",
    "distance2",
    "wrap_positions",
    "sigma",
    "real_space_cutoff",
    "fourier_space_cutoff",
    "required_cell_displacement",
    "ewald_parameters",
    "get_neighbors",
    "energy",
    "energy_terms",
]
