"""Print Madelung constants of CsCl and NaCl from their Ewald energies."""

from ewaldpy.models import cscl_crystal, madelung_constant, nacl_conventional_crystal, nacl_primitive_crystal


crystals = [
    cscl_crystal(),
    cscl_crystal(lattice_constant=2.0),
    cscl_crystal(shear=1.0),
    nacl_conventional_crystal(),
    nacl_primitive_crystal(),
]

for crystal in crystals:
    m = madelung_constant(crystal)
    err = m - crystal.reference_madelung
    print(f"{crystal.name:18s} M={m:.15f}  error={err:+.2e}")
