import numpy as np
import pandas as pd
import pytest

from gravdisk import NBodySimulation, central_potential, pair_potential, softened_potential


def test_energies_match_direct_sums():
    masses = np.array([1.0, 2.0, 0.5])
    pos = np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0], [-1.0, -1.0, 1.0]])
    vel = np.array([[0.0, 1.0, 0.0], [0.5, 0.0, 0.0], [0.0, 0.0, 2.0]])
    G, M, eps = 2.0, 10.0, 0.1
    sim = NBodySimulation(masses=masses, positions=pos, velocities=vel,
                          G=G, central_mass=M, softening=eps, n_workers=1)
    diag = sim.diagnostics

    ke = 0.5 * sum(m * v @ v for m, v in zip(masses, vel))
    pe = 0.0
    for i in range(3):
        pe -= G * M * masses[i] / np.sqrt(pos[i] @ pos[i] + eps * eps)
        for j in range(i + 1, 3):
            d = pos[j] - pos[i]
            pe -= G * masses[i] * masses[j] / np.sqrt(d @ d + eps * eps)

    assert diag.kinetic_energy() == pytest.approx(ke, rel=1e-12)
    assert diag.potential_energy() == pytest.approx(pe, rel=1e-12)
    assert diag.energy() == pytest.approx(ke + pe, rel=1e-12)


def test_potential_helpers_split_pair_and_central():
    pos4 = np.array([[1.0, 0.0, 0.0, 1.0], [-1.0, 0.0, 0.0, 1.0]])
    assert pair_potential(pos4, 1.0, 0.0) == pytest.approx(-0.5)
    assert central_potential(pos4, 1.0, 4.0, 0.0) == pytest.approx(-8.0)
    assert softened_potential(pos4, 1.0, 4.0, 0.0) == pytest.approx(-8.5)
    assert pair_potential(pos4[:1], 1.0, 0.1) == 0.0


def test_ring_angular_momentum_and_center_of_mass(make_ring):
    sim = make_ring(n=8, radius=2.0)
    L = sim.diagnostics.angular_momentum()
    com_pos, com_vel = sim.diagnostics.center_of_mass()

    assert L[2] > 0.0
    np.testing.assert_allclose(L[:2], 0.0, atol=1e-18)
    np.testing.assert_allclose(com_pos, 0.0, atol=1e-12)
    np.testing.assert_allclose(com_vel, 0.0, atol=1e-12)


def test_energy_drift_stays_bounded_on_circular_orbits(make_ring):
    sim = make_ring(n=8, radius=1.0)
    diag = sim.diagnostics
    diag.record()

    sim.run(2000, 1.0e-3, record_every=250)

    df = diag.history_frame()
    assert len(df) == 9
    assert np.all(np.isfinite(df["total"]))
    assert df["drift"].abs().max() < 1.0e-2
    radii = np.linalg.norm(sim.positions(), axis=1)
    assert np.all(np.abs(radii - 1.0) < 0.05)


def test_history_frame_and_csv(tmp_path, make_ring, capsys):
    sim = make_ring(n=4)
    diag = sim.diagnostics
    diag.record()
    sim.advance(0.01)
    row = diag.record()

    assert row["step"] == 1
    assert row["time"] == pytest.approx(0.01)
    df = diag.history_frame()
    assert list(df.columns) == ["step", "time", "kinetic", "potential", "total", "drift", "max_acc"]
    assert df["drift"].iloc[0] == 0.0

    path = tmp_path / "history.csv"
    diag.save_history(str(path))
    assert "Saved 2 rows" in capsys.readouterr().out
    loaded = pd.read_csv(path)
    assert len(loaded) == 2
    assert loaded["step"].tolist() == [0, 1]


def test_save_without_history_reports_error(tmp_path, make_ring, capsys):
    sim = make_ring(n=2)
    sim.diagnostics.save_history(str(tmp_path / "empty.csv"))
    assert "[error] No history to save" in capsys.readouterr().out
    assert not (tmp_path / "empty.csv").exists()


def test_energy_drift_starts_at_zero(make_ring):
    sim = make_ring(n=3)
    assert sim.diagnostics.energy_drift() == 0.0


def test_check_finite_reports_without_changing_state(make_ring, capsys):
    sim = make_ring(n=3)
    assert sim.diagnostics.check_finite()

    sim.bodies[1].x = np.nan
    before = sim.pos4().copy()
    assert not sim.diagnostics.check_finite()
    assert "[diag] non-finite positions" in capsys.readouterr().out
    np.testing.assert_array_equal(sim.pos4(), before)


def test_runtime_guard_is_rate_limited(make_ring, capsys):
    sim = make_ring(n=3, enable_runtime_guard=True, diag_print_limit=2, diag_print_interval=1000)
    sim.bodies[0].vx = np.inf
    for _ in range(5):
        sim.advance(0.001)
    out = capsys.readouterr().out
    assert out.count("[diag] non-finite velocities") == 2


def test_guard_silent_when_disabled(make_ring, capsys):
    sim = make_ring(n=3)
    sim.bodies[0].vx = np.inf
    sim.advance(0.001)
    assert "[diag]" not in capsys.readouterr().out
