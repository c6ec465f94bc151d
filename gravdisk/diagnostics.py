from __future__ import annotations
import numpy as np
import pandas as pd
from typing import TYPE_CHECKING, Dict, List, Tuple
from .potential import softened_potential
if TYPE_CHECKING:
    from .simulation import NBodySimulation

"""
This module computes and monitors conserved quantities and health metrics of a running disk simulation. The Diagnostics class provides the kinetic energy, the softened potential energy (body pairs plus the central mass), the total energy and its relative drift from the first recorded value, the angular momentum vector, the center of mass and the largest acceleration magnitude. record appends one row per call to an in-memory history that history_frame returns as a pandas DataFrame and save_history writes to CSV. check_finite implements the optional runtime guard: it reports non-finite positions, velocities or accelerations through a rate-limited printer and never modifies state. The scheme is not energy conserving, so drift is something to watch, not an error.

"""




class Diagnostics:
	_GLOBAL_DIAG_COUNTS: Dict[str, int] = {}

	def __init__(self, simulation: "NBodySimulation"):
		self.sim = simulation
		self._E0: float | None = None
		self._history: List[dict] = []

	@classmethod
	def reset_diag_counts(cls) -> None:
		cls._GLOBAL_DIAG_COUNTS.clear()


	def kinetic_energy(self) -> float:
		state = self.sim._state
		m = state._pos4[:, 3].astype(np.float64)
		v = state._vel.astype(np.float64)
		return 0.5 * float(np.sum(m * np.sum(v * v, axis=1)))

	def potential_energy(self) -> float:
		cfg = self.sim.cfg
		return softened_potential(
			self.sim._state._pos4,
			float(cfg.G),
			float(cfg.central_mass),
			float(cfg.softening),
		)

	def energy(self) -> float:
		return float(self.kinetic_energy() + self.potential_energy())

	def angular_momentum(self) -> np.ndarray:
		state = self.sim._state
		m = state._pos4[:, 3].astype(np.float64)
		p = state._pos4[:, :3].astype(np.float64)
		v = state._vel.astype(np.float64)
		if m.size == 0:
			return np.zeros(3)
		return np.sum(m[:, None] * np.cross(p, v), axis=0)

	def center_of_mass(self) -> Tuple[np.ndarray, np.ndarray]:
		state = self.sim._state
		m = state._pos4[:, 3].astype(np.float64)
		total = float(np.sum(m))
		if total == 0.0:
			return np.zeros(3), np.zeros(3)
		com_pos = np.sum(m[:, None] * state._pos4[:, :3], axis=0) / total
		com_vel = np.sum(m[:, None] * state._vel, axis=0) / total
		return com_pos, com_vel

	def max_acceleration(self) -> float:
		acc = self.sim._state._acc
		if acc.shape[0] == 0:
			return 0.0
		return float(np.max(np.linalg.norm(acc, axis=1)))


	def energy_drift(self) -> float:
		E = self.energy()
		if self._E0 is None:
			self._E0 = E
		if self._E0 == 0.0:
			return 0.0
		return (E - self._E0) / abs(self._E0)

	def record(self) -> dict:
		T = self.kinetic_energy()
		U = self.potential_energy()
		E = T + U
		if self._E0 is None:
			self._E0 = E
		if self._E0 != 0.0:
			drift = (E - self._E0) / abs(self._E0)
		else:
			drift = 0.0

		row = {
			"step": int(self.sim.step_count),
			"time": float(self.sim.time),
			"kinetic": T,
			"potential": U,
			"total": E,
			"drift": drift,
			"max_acc": self.max_acceleration(),
		}
		self._history.append(row)
		return row

	def reset_history(self) -> None:
		self._history = []
		self._E0 = None

	def history_frame(self) -> pd.DataFrame:
		columns = ["step", "time", "kinetic", "potential", "total", "drift", "max_acc"]
		return pd.DataFrame(self._history, columns=columns)

	def save_history(self, filename: str) -> None:
		if not self._history:
			print("[error] No history to save. Call record first.")
			return
		df = self.history_frame()
		df.to_csv(filename, index=False)
		print(f"Saved {len(df)} rows to {filename}")


	def check_finite(self) -> bool:
		state = self.sim._state
		ok = True
		for name, arr in (("positions", state._pos4), ("velocities", state._vel), ("accelerations", state._acc)):
			if not np.all(np.isfinite(arr)):
				ok = False
				self._rate_limited_diag_print(
					name,
					f"[diag] non-finite {name} after step {self.sim.step_count}",
				)
		return ok

	def _rate_limited_diag_print(self, key: str, msg: str) -> None:

		sim = getattr(self, "sim", None)
		cfg = getattr(sim, "cfg", None)

		if cfg is None:
			enabled = True
		else:
			enabled = bool(getattr(cfg, "diag_prints", True))
		if not enabled:
			return

		if cfg is None:
			limit = 3
		else:
			limit = int(getattr(cfg, "diag_print_limit", 3))
		if cfg is None:
			interval = 1000
		else:
			interval = int(getattr(cfg, "diag_print_interval", 1000))
		if limit < 0:
			limit = 0
		if interval < 1:
			interval = 1

		counts = Diagnostics._GLOBAL_DIAG_COUNTS
		c = counts.get(key, 0) + 1
		counts[key] = c

		if (c <= limit) or (c % interval == 0):
			if c <= limit:
				suffix = ""
			else:
				suffix = f" (occurrence #{c})"
			print(msg + suffix)
