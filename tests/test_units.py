import numpy as np
import pytest

from ewaldpy.modeling import (
    HARTREE_EV,
    coulomb_prefactor_ev,
    ewald_energy_to_ev,
    ewald_energy_to_hartree,
    list_length_units,
)
from ewaldpy.models import MADELUNG_NACL


def test_coulomb_prefactors() -> None:
    assert np.isclose(coulomb_prefactor_ev("angstrom"), 14.399645478, rtol=1e-9)
    assert np.isclose(coulomb_prefactor_ev("Bohr"), HARTREE_EV, rtol=1e-8)
    assert list_length_units() == ("angstrom", "bohr")


def test_bohr_energies_are_hartree() -> None:
    e = np.array([-1.0, 0.5])
    assert np.allclose(ewald_energy_to_hartree(e, "bohr"), e, rtol=1e-8)


def test_nacl_lattice_energy_in_ev() -> None:
    # NaCl nearest-neighbor distance 2.82 Angstrom, energy per ion pair.
    e_ev = float(ewald_energy_to_ev(MADELUNG_NACL / 2.82, "angstrom"))
    assert np.isclose(e_ev, -8.92, atol=0.01)


def test_unknown_length_unit_is_rejected() -> None:
    with pytest.raises(ValueError, match="Available units"):
        coulomb_prefactor_ev("furlong")
