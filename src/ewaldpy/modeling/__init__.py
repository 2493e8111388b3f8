from .units import (
    HARTREE_EV,
    coulomb_prefactor_ev,
    ewald_energy_to_ev,
    ewald_energy_to_hartree,
    list_length_units,
)
from .validators import validate_charges, validate_dipoles, validate_neighbor_list

__all__ = [
    "HARTREE_EV",
    "coulomb_prefactor_ev",
    "ewald_energy_to_ev",
    "ewald_energy_to_hartree",
    "list_length_units",
    "validate_charges",
    "validate_dipoles",
    "validate_neighbor_list",
]
