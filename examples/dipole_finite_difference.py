"""Compare a periodic point dipole with a pair of nearby opposite charges."""

import numpy as np

from ewaldpy.core import System, energy


latvecs = np.eye(3)
p = np.array([0.2, 0.5, 0.7])
r = np.array([0.5, 0.5, 0.5])
e_ref = energy(System(latvecs=latvecs, positions=[r]), dipoles=[p])

for eps in (0.05, 0.02, 0.01, 0.005):
    charges = np.array([1.0, -1.0]) / eps
    sys_fd = System(latvecs=latvecs, positions=[r - eps * p / 2.0, r + eps * p / 2.0])
    e_pair = charges[0] * charges[1] / (eps * np.linalg.norm(p))
    e_fd = energy(sys_fd, charges=charges) - e_pair
    print(f"eps={eps:<6g} E_dipole={e_ref:.8f}  E_pair={e_fd:.8f}  diff={e_fd - e_ref:+.2e}")
