import warnings

import numpy as np
import pytest

from ewaldpy.core import (
    ChargeNeutralityError,
    DegenerateLatticeError,
    EmptySystemError,
    EwaldError,
    InvalidNeighborError,
    Neighbor,
    System,
    ZeroDistanceNeighborError,
    energy,
    get_neighbors,
)


def _cscl_system() -> System:
    return System(latvecs=np.eye(3), positions=[[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]])


def test_non_neutral_charges_are_rejected() -> None:
    with pytest.raises(ChargeNeutralityError) as info:
        energy(_cscl_system(), charges=[1.0, -0.5])
    assert isinstance(info.value, ValueError)
    assert isinstance(info.value, EwaldError)
    assert np.isclose(info.value.net_charge, 0.5)


def test_charge_imbalance_just_above_tolerance_is_rejected() -> None:
    with pytest.raises(ChargeNeutralityError):
        energy(_cscl_system(), charges=[1.0, -1.0 + 2e-12])


def test_tiny_charge_drift_is_recentered() -> None:
    system = _cscl_system()
    e_exact = energy(system, charges=[1.0, -1.0])
    e_drift = energy(system, charges=[1.0, -1.0 + 1e-14])
    assert np.isclose(e_drift, e_exact, rtol=0.0, atol=1e-12)


def test_source_lengths_must_match_sites() -> None:
    system = _cscl_system()
    with pytest.raises(ValueError):
        energy(system, charges=[1.0, -1.0, 0.0])
    with pytest.raises(ValueError):
        energy(system, dipoles=[[0.0, 0.0, 1.0]])
    with pytest.raises(ValueError):
        energy(system, dipoles=[[0.0, 1.0], [1.0, 0.0]])


def test_empty_system_is_a_domain_error() -> None:
    system = System(latvecs=np.eye(3), positions=[])
    with pytest.raises(EmptySystemError):
        energy(system)


def test_degenerate_lattice_is_rejected() -> None:
    with pytest.raises(DegenerateLatticeError):
        System(latvecs=[[1, 0, 0], [2, 0, 0], [0, 0, 1]], positions=[[0, 0, 0]])
    with pytest.raises(DegenerateLatticeError):
        System(latvecs=[[1, 0, 0], [0, 1, 0]], positions=[[0, 0, 0]])


def test_invalid_control_parameters_are_rejected() -> None:
    with pytest.raises(ValueError):
        System(latvecs=np.eye(3), positions=[[0, 0, 0]], c0=0.0)
    with pytest.raises(ValueError):
        System(latvecs=np.eye(3), positions=[[0, 0, 0]], c1=-2.0)
    with pytest.raises(ValueError):
        System(latvecs=np.eye(3), positions=[[0, 0]])


def test_self_neighbor_at_zero_offset_cannot_be_built() -> None:
    with pytest.raises(InvalidNeighborError):
        Neighbor(i=1, j=1, n=(0, 0, 0))
    assert Neighbor(i=1, j=1, n=(0, 0, 1)).n == (0, 0, 1)


def test_zero_distance_neighbor_is_fatal() -> None:
    system = System(latvecs=np.eye(3), positions=[[0.2, 0.2, 0.2], [0.2, 0.2, 0.2]])
    neighbors = (
        (Neighbor(i=0, j=1, n=(0, 0, 0)),),
        (Neighbor(i=1, j=0, n=(0, 0, 0)),),
    )
    with pytest.raises(ZeroDistanceNeighborError, match="zero-distance neighbor"):
        energy(system, charges=[1.0, -1.0], neighbors=neighbors)


def test_misgrouped_neighbor_list_is_rejected() -> None:
    system = _cscl_system()
    neighbors = get_neighbors(system)
    with pytest.raises(InvalidNeighborError):
        energy(system, charges=[1.0, -1.0], neighbors=(neighbors[1], neighbors[0]))
    with pytest.raises(InvalidNeighborError):
        energy(system, charges=[1.0, -1.0], neighbors=neighbors[:1])


def test_cached_neighbors_reused_across_sources() -> None:
    system = _cscl_system()
    neighbors = get_neighbors(system)
    for charges, dipoles in (
        ([1.0, -1.0], None),
        ([0.3, -0.3], [[0.1, 0.0, 0.2], [0.0, -0.4, 0.1]]),
        (None, [[0.0, 0.0, 1.0], [0.0, 0.0, -1.0]]),
    ):
        cached = energy(system, charges=charges, dipoles=dipoles, neighbors=neighbors)
        fresh = energy(system, charges=charges, dipoles=dipoles)
        assert np.isclose(cached, fresh, rtol=0.0, atol=1e-14)


def test_bad_sources_fail_before_positions_are_wrapped() -> None:
    system = System(latvecs=np.eye(3), positions=[[1.5, 0.5, 0.5], [0.0, 0.0, 0.0]])
    before = system.positions.copy()
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        with pytest.raises(ValueError):
            energy(system, charges=[1.0, -1.0, 0.0])
        with pytest.raises(ChargeNeutralityError):
            energy(system, charges=[1.0, 0.0])
    assert np.array_equal(system.positions, before)


def test_neighbor_entries_must_be_neighbor_records() -> None:
    with pytest.raises(InvalidNeighborError, match="not a Neighbor"):
        energy(_cscl_system(), charges=[1.0, -1.0], neighbors=([(0, 1, (0, 0, 0))], []))
