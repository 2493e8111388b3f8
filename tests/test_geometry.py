import warnings

import numpy as np
import pytest

from ewaldpy.core import (
    DegenerateLatticeError,
    Neighbor,
    PositionOutsideCellWarning,
    System,
    displacement,
    distance2,
    reciprocal_vectors,
    volume,
    wrap_positions,
)


def test_reciprocal_vectors_are_dual_to_lattice() -> None:
    latvecs = np.array([[1.0, 0.0, 0.0], [10.0, 1.0, 0.0], [0.3, -0.2, 2.0]])
    b = reciprocal_vectors(latvecs)
    assert np.allclose(latvecs @ b.T, 2.0 * np.pi * np.eye(3), atol=1e-12)
    assert np.allclose(reciprocal_vectors(np.eye(3)), 2.0 * np.pi * np.eye(3))


def test_reciprocal_vectors_reject_dependent_lattice() -> None:
    with pytest.raises(DegenerateLatticeError):
        reciprocal_vectors([[1.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 0.0, 1.0]])


def test_volume_is_absolute_triple_product() -> None:
    assert np.isclose(volume([[1, 1, 0], [1, 0, 1], [0, 1, 1]]), 2.0)
    assert np.isclose(volume([[0, 1, 0], [1, 0, 0], [0, 0, 3]]), 3.0)


def test_displacement_adds_lattice_offset() -> None:
    system = System(latvecs=np.eye(3), positions=[[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]])
    nb = Neighbor(i=0, j=1, n=(1, 0, -1))
    assert np.allclose(displacement(system, nb), [1.5, 0.5, -0.5])
    assert np.isclose(distance2(system, nb), 2.75)


def test_wrap_positions_reports_and_wraps_in_place() -> None:
    system = System(latvecs=np.eye(3), positions=[[1.25, -0.5, 2.0], [0.5, 0.5, 0.5]])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        records = wrap_positions(system)
    assert len(records) == 1
    assert records[0].index == 0
    assert np.allclose(records[0].position, [1.25, -0.5, 2.0])
    assert np.allclose(records[0].fractional, [1.25, -0.5, 2.0])
    assert np.allclose(system.positions, [[0.25, 0.5, 0.0], [0.5, 0.5, 0.5]])


def test_wrap_positions_warns_on_request() -> None:
    system = System(latvecs=np.eye(3), positions=[[0.5, 0.5, -0.1]])
    with pytest.warns(PositionOutsideCellWarning):
        wrap_positions(system, warn=True)


def test_wrap_positions_is_idempotent_and_preserves_lattice_sites() -> None:
    latvecs = np.array([[1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 0.5, 2.0]])
    original = np.array([[3.3, -1.7, 0.4], [0.1, 0.2, 0.3], [-5.0, 4.0, -3.0]])
    system = System(latvecs=latvecs, positions=original)
    wrap_positions(system)
    once = system.positions.copy()

    frac = np.linalg.solve(latvecs.T, once.T).T
    assert np.all(frac >= 0.0) and np.all(frac <= 1.0)
    shift = np.linalg.solve(latvecs.T, (once - original).T)
    assert np.allclose(shift, np.round(shift), atol=1e-10)

    wrap_positions(system)
    assert np.allclose(system.positions, once, atol=1e-12)


def test_system_copies_caller_positions() -> None:
    pos = [[1.5, 0.0, 0.0]]
    system = System(latvecs=np.eye(3), positions=pos)
    wrap_positions(system)
    assert pos == [[1.5, 0.0, 0.0]]
