import numpy as np
import pytest

from gravdisk import Diagnostics, NBodySimulation


def ring_state(n, radius=1.0, G=1.0, central_mass=1.0, eps=0.01, mass=1.0e-6):
    theta = 2.0 * np.pi * np.arange(n) / n
    pos = np.stack([radius * np.cos(theta), radius * np.sin(theta), np.zeros(n)], axis=1)
    speed = np.sqrt(G * central_mass / np.sqrt(radius * radius + eps * eps))
    vel = np.stack([-speed * np.sin(theta), speed * np.cos(theta), np.zeros(n)], axis=1)
    masses = np.full(n, mass)
    return masses, pos, vel


@pytest.fixture
def make_ring():
    sims = []

    def _make(n=8, radius=1.0, **overrides):
        opts = dict(G=1.0, central_mass=1.0, softening=0.01, n_workers=1)
        opts.update(overrides)
        masses, pos, vel = ring_state(
            n,
            radius=radius,
            G=opts["G"],
            central_mass=opts["central_mass"],
            eps=opts["softening"],
        )
        sim = NBodySimulation(masses=masses, positions=pos, velocities=vel, **opts)
        sims.append(sim)
        return sim

    yield _make
    for sim in sims:
        sim.close()


@pytest.fixture(autouse=True)
def _fresh_diag_counts():
    Diagnostics.reset_diag_counts()
    yield
    Diagnostics.reset_diag_counts()
