"""Plot the real/Fourier/self split of a charge+dipole energy against c1."""

import numpy as np
import matplotlib.pyplot as plt

from ewaldpy.core import System, energy_terms


latvecs = np.eye(3)
positions = [[0.0, 0.0, 0.0], [0.6, 0.4, 0.3]]
charges = [1.0, -1.0]
dipoles = [[0.35, -0.27, 0.8], [-0.1, 0.5, 0.32]]

c1_values = np.geomspace(0.4, 10.0, 15)
terms = [
    energy_terms(
        System(latvecs=latvecs, positions=positions, c1=c1),
        charges=charges,
        dipoles=dipoles,
    )
    for c1 in c1_values
]

plt.semilogx(c1_values, [t.real_space for t in terms], label="real space")
plt.semilogx(c1_values, [t.fourier_space for t in terms], label="Fourier space")
plt.semilogx(c1_values, [t.self_energy for t in terms], label="self energy")
plt.semilogx(c1_values, [t.total for t in terms], "k--", label="total")
plt.xlabel(r"$c_1$")
plt.ylabel("Energy ($1/4\\pi\\epsilon_0$ units)")
plt.title("Ewald energy split versus real/Fourier balance")
plt.grid(alpha=0.3)
plt.legend()
plt.tight_layout()
plt.show()
