"""Named error conditions raised by the Ewald engine."""

from __future__ import annotations


class EwaldError(Exception):
    """Base class for all ewaldpy failures."""


class DegenerateLatticeError(EwaldError, ValueError):
    """Lattice vectors do not span a 3D cell."""


class EmptySystemError(EwaldError, ValueError):
    """A quantity was requested that is undefined for a system with no sites."""


class ChargeNeutralityError(EwaldError, ValueError):
    """Charges do not sum to zero."""

    def __init__(self, net_charge: float, tolerance: float) -> None:
        self.net_charge = float(net_charge)
        super().__init__(
            f"System must be charge neutral: net charge {net_charge:.6g} exceeds tolerance {tolerance:g}."
        )


class InvalidNeighborError(EwaldError, ValueError):
    """Neighbor record or neighbor list inconsistent with the system."""


class ZeroDistanceNeighborError(EwaldError, ValueError):
    """Two interacting sites coincide."""

    def __init__(self, neighbor: object) -> None:
        self.neighbor = neighbor
        super().__init__(f"Detected zero-distance neighbor, {neighbor}.")


class PositionOutsideCellWarning(UserWarning):
    """Emitted when a site had to be wrapped back into the unit cell."""
