from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING

from .forces import accelerate_block
from .force_pool import ForcePool

if TYPE_CHECKING:
	from .simulation import NBodySimulation

"""
This central module implements the two-phase step that advances the disk. The force phase copies the packed position+mass array into the integrator's snapshot buffer and has every work block compute its accelerations from that snapshot into the store's acceleration array, so no evaluation can observe a position written during the same step. The pool's run_phase call is the barrier between the phases. The update phase then advances each block with the semi-implicit rule v' = v + a*dt, p' = p + (v + v')*dt/2, committing both in place and never touching the mass column. A second barrier closes the step before control returns to the driver. Numerical blow-up is not detected here; the optional guard lives in the diagnostics.

"""


def _row_slice(rows: np.ndarray) -> slice:
	return slice(int(rows[0]), int(rows[-1]) + 1)


class Integrator:

	def __init__(self, sim: "NBodySimulation", pool: ForcePool) -> None:
		self.sim = sim
		self.pool = pool

		self._snapshot: np.ndarray | None = None
		self._in_integration = False
		self._warned_reentrant = False
		self.steps_taken = 0

	def _ensure_snapshot(self) -> np.ndarray:
		pos4 = self.sim._state._pos4
		buf = self._snapshot
		if buf is None or buf.shape != pos4.shape or buf.dtype != pos4.dtype:
			buf = np.empty_like(pos4)
			self._snapshot = buf
		return buf

	def force_phase(self) -> None:
		sim = self.sim
		state = sim._state
		cfg = sim.cfg

		snap = self._ensure_snapshot()
		np.copyto(snap, state._pos4)

		acc = state._acc
		G = float(cfg.G)
		eps = float(cfg.softening)
		central_mass = float(cfg.central_mass)

		def _force_block(rows: np.ndarray) -> None:
			accelerate_block(rows, snap, G, eps, central_mass, out=acc)

		self.pool.run_phase(_force_block, self.pool.blocks(state.n_bodies))

	def update_phase(self, dt: float) -> None:
		state = self.sim._state
		pos4 = state._pos4
		vel = state._vel
		acc = state._acc
		half_dt = 0.5 * dt

		def _update_block(rows: np.ndarray) -> None:
			sl = _row_slice(rows)
			v_old = vel[sl].copy()
			v_new = v_old + acc[sl] * dt
			pos4[sl, :3] += (v_old + v_new) * half_dt
			vel[sl] = v_new

		self.pool.run_phase(_update_block, self.pool.blocks(state.n_bodies))

	def step(self, dt: float) -> bool:
		if self._in_integration:
			if not self._warned_reentrant:
				print("[warning] Integrator.step called re-entrantly; call ignored")
				self._warned_reentrant = True
			return False

		dt = float(dt)
		self._in_integration = True
		try:
			self.force_phase()
			self.update_phase(dt)
		finally:
			self._in_integration = False

		self.steps_taken += 1
		return True
