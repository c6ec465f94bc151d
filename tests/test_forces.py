import numpy as np
import pytest

from gravdisk import (
    BodyStore,
    NBodySimulation,
    accelerate,
    accelerate_block,
    accelerations,
    block_geometry,
    central_acceleration,
)

EPS = 0.05


def _pair(d, m_other=2.0):
    return np.array([
        [0.0, 0.0, 0.0, 1.0],
        [d, 0.0, 0.0, m_other],
    ])


def test_pair_force_is_attractive():
    pos4 = _pair(1.5)
    a0 = accelerate(0, pos4, G=1.0, eps=EPS, central_mass=0.0)
    a1 = accelerate(1, pos4, G=1.0, eps=EPS, central_mass=0.0)

    assert a0[0] > 0.0
    assert a1[0] < 0.0
    np.testing.assert_allclose(a0[1:], 0.0)
    np.testing.assert_allclose(a1[1:], 0.0)


def test_pair_force_matches_softened_law():
    d = 0.7
    a0 = accelerate(0, _pair(d), G=3.0, eps=EPS, central_mass=0.0)
    expected = 3.0 * 2.0 * d / (d * d + EPS * EPS) ** 1.5
    assert a0[0] == pytest.approx(expected, rel=1e-12)


def test_magnitude_decreases_with_distance():
    distances = [0.1, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0]
    mags = [
        np.linalg.norm(accelerate(0, _pair(d), G=1.0, eps=EPS, central_mass=0.0))
        for d in distances
    ]
    assert all(a > b for a, b in zip(mags, mags[1:]))


def test_central_only_when_other_masses_vanish():
    pos4 = np.array([
        [1.0, 2.0, 0.0, 0.3],
        [1.0, 2.0, 0.0, 0.0],
        [-4.0, 1.0, 0.0, 0.0],
    ])
    G, M = 1.5, 10.0
    a = accelerate(0, pos4, G=G, eps=EPS, central_mass=M)

    p = pos4[0, :3]
    expected = -G * M * p / (p @ p + EPS * EPS) ** 1.5
    np.testing.assert_allclose(a, expected, rtol=1e-12)
    np.testing.assert_allclose(central_acceleration(p[None, :], G, M, EPS)[0], expected, rtol=1e-12)


def test_coincident_bodies_and_origin_stay_finite():
    pos4 = np.array([
        [0.0, 0.0, 0.0, 5.0],
        [0.0, 0.0, 0.0, 5.0],
        [1e-12, 0.0, 0.0, 5.0],
    ])
    acc = accelerations(pos4, G=1.0, eps=EPS, central_mass=100.0)
    assert np.all(np.isfinite(acc))
    np.testing.assert_allclose(acc[0], acc[1])


def test_single_body_without_central_mass_is_unaccelerated():
    pos4 = np.array([[3.0, -1.0, 0.0, 1.0]])
    np.testing.assert_array_equal(accelerate(0, pos4, G=1.0, eps=EPS, central_mass=0.0), np.zeros(3))


def test_block_matches_per_body_and_is_pure():
    rng = np.random.default_rng(4)
    pos4 = np.empty((40, 4))
    pos4[:, :3] = rng.uniform(-5, 5, size=(40, 3))
    pos4[:, 3] = rng.uniform(0.1, 1.0, size=40)
    before = pos4.copy()

    full = accelerations(pos4, G=1.0, eps=EPS, central_mass=20.0)
    rows = np.arange(10, 25)
    out = np.zeros((40, 3))
    block = accelerate_block(rows, pos4, 1.0, EPS, 20.0, out=out)

    np.testing.assert_allclose(block, full[rows], rtol=1e-12, atol=1e-14)
    np.testing.assert_array_equal(out[rows], block)
    assert np.all(out[:10] == 0.0)
    for i in (0, 17, 39):
        np.testing.assert_allclose(
            accelerate(i, pos4, G=1.0, eps=EPS, central_mass=20.0), full[i], rtol=1e-12, atol=1e-14
        )
    np.testing.assert_array_equal(pos4, before)


def test_accepts_body_store():
    store = BodyStore()
    assert store.build_state(None, [1.0, 1.0], [(0.0, 0.0), (1.0, 0.0)], None)
    a = accelerate(0, store, G=1.0, eps=EPS, central_mass=0.0)
    assert a[0] > 0.0


def test_accepts_simulation_session():
    sim = NBodySimulation(4, seed=3, spatial_scale=5.0, body_mass=0.5, n_workers=1)
    opts = dict(G=1.0, eps=EPS, central_mass=10.0)
    pos4 = sim.pos4().copy()

    np.testing.assert_array_equal(accelerate(0, sim, **opts), accelerate(0, pos4, **opts))
    full = accelerations(sim, **opts)
    assert full.shape == (4, 3)
    np.testing.assert_array_equal(full, accelerations(pos4, **opts))
    sim.close()


def test_block_geometry_zeroes_self_terms():
    pos = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
    diff, r2, inv_r3 = block_geometry(np.array([1, 2]), pos, EPS)
    assert diff.shape == (2, 3, 3)
    assert inv_r3[0, 1] == 0.0
    assert inv_r3[1, 2] == 0.0
    assert r2[0, 0] == pytest.approx(1.0)
    np.testing.assert_allclose(diff[0, 0], [-1.0, 0.0, 0.0])
