from .core import (
    EwaldEnergyTerms,
    Neighbor,
    System,
    energy,
    energy_terms,
    get_neighbors,
    wrap_positions,
)
from .models import MADELUNG_CSCL, MADELUNG_NACL, madelung_constant, reference_crystal

__all__ = [
    "System",
    "Neighbor",
    "EwaldEnergyTerms",
    "energy",
    "energy_terms",
    "get_neighbors",
    "wrap_positions",
    "MADELUNG_CSCL",
    "MADELUNG_NACL",
    "madelung_constant",
    "reference_crystal",
]
