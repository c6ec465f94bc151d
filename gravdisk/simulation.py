"""
This module implements NBodySimulation, the driver that owns a fixed-size disk
population and advances it in time.

A session is created either from the scene initializer (body count, seed, spatial scale,
body mass) or from explicit initial conditions given as arrays or Body objects; any
SimConfig field can be overridden by keyword. advance runs exactly one integrator step,
force phase then update phase with a full barrier between them, and returns only when
both are complete. External readers (vertex-buffer export, acceleration visualisation)
get read-only views of positions, masses, velocities and accelerations, valid between
completed advance calls. Invalid configuration or state is reported on stdout and leaves
an empty session; an invalid timestep skips the step. The module-level initialize and
advance functions mirror the methods for callers that prefer a functional interface.
"""

from __future__ import annotations

import numpy as np
from typing import List, Sequence

from .body import Body
from .body_store import BodyStore
from .body_view import BodyView
from .diagnostics import Diagnostics
from .force_pool import ForcePool
from .integrator import Integrator
from .scene_initializer import SceneConfig, SceneInitializer
from .sim_config import SimConfig
from .simulation_validator import SimulationValidator




def _read_only(arr: np.ndarray) -> np.ndarray:
	view = arr.view()
	view.flags.writeable = False
	return view


class NBodySimulation:

	def __init__(
		self,
		n_bodies: int | None = None,
		*,
		bodies: List[Body] | None = None,
		masses: Sequence[float] | None = None,
		positions=None,
		velocities=None,
		cfg: SimConfig | None = None,
		**overrides,
	) -> None:
		self.cfg: SimConfig = (cfg or SimConfig()).copy()
		for key, value in overrides.items():
			if hasattr(self.cfg, key):
				setattr(self.cfg, key, value)
			else:
				print(f"[warning] unknown simulation option '{key}' ignored")
		if n_bodies is not None:
			self.cfg.n_bodies = n_bodies

		self._state = BodyStore()
		self._pool = ForcePool(self.cfg.n_workers, self.cfg.block_rows)
		self._integrator = Integrator(self, self._pool)
		self.diagnostics = Diagnostics(self)

		self.time = 0.0
		self.step_count = 0
		self.is_valid = False

		if bodies is not None or masses is not None:
			self.is_valid = self._build_explicit(bodies, masses, positions, velocities)
		else:
			self.is_valid = self._build_scene()

		if self.is_valid and self.cfg.fast_float32:
			self._state.set_fast_mode(True)

	def _build_scene(self) -> bool:
		if not SimulationValidator.config_is_valid(self.cfg):
			SimulationValidator.report_invalid_state("simulation config", cfg=self.cfg)
			self._state.disable()
			return False

		scene = SceneInitializer(SceneConfig.from_sim_config(self.cfg))
		if not scene.populate(self._state, self.cfg.n_bodies):
			SimulationValidator.report_invalid_state("generated scene", cfg=self.cfg)
			self._state.disable()
			return False
		return True

	def _build_explicit(self, bodies, masses, positions, velocities) -> bool:
		if bodies is None:
			valid = SimulationValidator.state_is_valid(
				masses, positions, velocities, float(self.cfg.softening)
			)
		else:
			valid = float(self.cfg.softening) > 0.0

		if valid:
			valid = self._state.build_state(bodies, masses, positions, velocities)

		if not valid:
			SimulationValidator.report_invalid_state(
				"initial state",
				masses=masses,
				positions=positions,
				velocities=velocities,
			)
			self._state.disable()
			self.cfg.n_bodies = 0
			return False

		self.cfg.n_bodies = self._state.n_bodies
		return True

	@property
	def n_bodies(self) -> int:
		return self._state.n_bodies

	@property
	def G(self) -> float:
		return float(self.cfg.G)

	@property
	def softening(self) -> float:
		return float(self.cfg.softening)

	@property
	def central_mass(self) -> float:
		return float(self.cfg.central_mass)

	@property
	def bodies(self) -> List[BodyView]:
		return [BodyView(self._state, i) for i in range(self.n_bodies)]


	def advance(self, dt: float | None = None) -> bool:
		if dt is None:
			dt = self.cfg.dt
		if not SimulationValidator.dt_is_valid(dt):
			SimulationValidator.report_invalid_state("timestep", dt=dt)
			return False

		if not self._integrator.step(float(dt)):
			return False

		self.step_count += 1
		self.time += float(dt)

		if self.cfg.enable_runtime_guard:
			self.diagnostics.check_finite()
		return True

	def run(self, n_steps: int, dt: float | None = None, record_every: int = 0) -> int:
		done = 0
		for k in range(int(n_steps)):
			if not self.advance(dt):
				break
			done += 1
			if record_every > 0 and (k + 1) % record_every == 0:
				self.diagnostics.record()
		return done


	def positions(self) -> np.ndarray:
		return _read_only(self._state._pos4[:, :3])

	def pos4(self) -> np.ndarray:
		return _read_only(self._state._pos4)

	def masses(self) -> np.ndarray:
		return _read_only(self._state._pos4[:, 3])

	def velocities(self) -> np.ndarray:
		return _read_only(self._state._vel)

	def accelerations(self) -> np.ndarray:
		return _read_only(self._state._acc)

	def acceleration_magnitudes(self) -> np.ndarray:
		return np.linalg.norm(self._state._acc, axis=1)


	def snapshot(self) -> dict:
		snap = self._state.snapshot()
		snap["time"] = float(self.time)
		snap["step_count"] = int(self.step_count)
		return snap

	def restore(self, snap: dict) -> bool:
		if not self._state.restore(snap):
			snap = snap or {}
			SimulationValidator.report_invalid_state(
				f"snapshot (pos4 {np.shape(snap.get('pos4'))}, vel {np.shape(snap.get('vel'))}, "
				f"acc {np.shape(snap.get('acc'))}) for {self.n_bodies} bodies",
			)
			return False
		self.time = float(snap.get("time", 0.0))
		self.step_count = int(snap.get("step_count", 0))
		self.cfg.n_bodies = self._state.n_bodies
		return True

	def close(self) -> None:
		self._pool.shutdown()

	def __enter__(self) -> "NBodySimulation":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	def __repr__(self) -> str:
		return (f"NBodySimulation(n_bodies={self.n_bodies}, step={self.step_count}, "
				f"time={self.time:.6g})")


def initialize(
	n_bodies: int,
	seed: int | None = None,
	spatial_scale: float | None = None,
	body_mass: float | None = None,
	cfg: SimConfig | None = None,
	**overrides,
) -> NBodySimulation:
	if seed is not None:
		overrides["seed"] = seed
	if spatial_scale is not None:
		overrides["spatial_scale"] = spatial_scale
	if body_mass is not None:
		overrides["body_mass"] = body_mass
	return NBodySimulation(n_bodies, cfg=cfg, **overrides)


def advance(sim: NBodySimulation, dt: float | None = None) -> bool:
	return sim.advance(dt)
