from .crystals import (
    MADELUNG_CSCL,
    MADELUNG_NACL,
    IonicCrystal,
    cscl_crystal,
    list_crystals,
    madelung_constant,
    nacl_conventional_crystal,
    nacl_primitive_crystal,
    reference_crystal,
)

__all__ = [
    "IonicCrystal",
    "MADELUNG_CSCL",
    "MADELUNG_NACL",
    "cscl_crystal",
    "nacl_conventional_crystal",
    "nacl_primitive_crystal",
    "reference_crystal",
    "list_crystals",
    "madelung_constant",
]
