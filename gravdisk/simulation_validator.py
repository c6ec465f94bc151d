"""
This module provides validation utilities for disk simulation inputs.

The SimulationValidator class offers static methods to check a configuration (body
count, gravitational constant, strictly positive softening, non-negative finite masses
and scale), explicit initial state arrays (non-negative finite masses, finite positions
and velocities of matching 2D or 3D shape) and timesteps, and to report detailed
diagnostics for invalid input. The checks catch configuration errors before a session
starts; they never alter the values they inspect.
"""

from __future__ import annotations
import math
from typing import Sequence
import numpy as np

from .sim_config import SimConfig




class SimulationValidator:
	@staticmethod
	def config_is_valid(cfg: SimConfig) -> bool:
		if cfg is None:
			return False

		n = cfg.n_bodies
		if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
			return False

		if not math.isfinite(float(cfg.G)):
			return False

		eps = float(cfg.softening)
		if not (eps > 0.0 and math.isfinite(eps)):
			return False

		for value in (cfg.central_mass, cfg.body_mass, cfg.spatial_scale):
			v = float(value)
			if not (v >= 0.0 and math.isfinite(v)):
				return False

		if int(cfg.block_rows) < 1:
			return False

		return True

	@staticmethod
	def state_is_valid(
		masses: Sequence[float],
		positions,
		velocities,
		softening: float,
	) -> bool:

		if masses is None or positions is None:
			return False

		m = np.asarray(masses, dtype=float).ravel()
		r = np.asarray(positions, dtype=float)

		if r.ndim != 2 or r.shape[0] != m.size or r.shape[1] not in (2, 3):
			return False

		if velocities is not None and len(velocities) > 0:
			v = np.asarray(velocities, dtype=float)
			if v.ndim != 2 or v.shape[1] != r.shape[1]:
				return False
			if v.shape[0] not in (1, m.size):
				return False
			if not np.all(np.isfinite(v)):
				return False

		for m_i in m:
			if not (m_i >= 0.0 and math.isfinite(m_i)):
				return False

		if not np.all(np.isfinite(r)):
			return False

		if not (softening > 0.0 and math.isfinite(softening)):
			return False

		return True

	@staticmethod
	def dt_is_valid(dt) -> bool:
		if isinstance(dt, bool):
			return False
		if not isinstance(dt, (int, float, np.floating, np.integer)):
			return False
		return math.isfinite(float(dt))

	@staticmethod
	def report_invalid_state(
		label: str,
		cfg=None,
		masses=None,
		positions=None,
		velocities=None,
		dt=None,
	) -> None:

		print(f"[invalid] {label}")
		if cfg is not None:
			print("n_bodies", cfg.n_bodies)
			print("G", cfg.G)
			print("softening", cfg.softening)
			print("central_mass", cfg.central_mass)
			print("body_mass", cfg.body_mass)
			print("spatial_scale", cfg.spatial_scale)
		if masses is not None:
			print("masses", masses)
		if positions is not None:
			print("positions", positions)
			shape = np.shape(positions)
			if len(shape) == 2 and shape[1] not in (2, 3):
				print(f"  positions have {shape[1]} columns (expected 2 or 3)")
		if velocities is not None:
			print("velocities", velocities)
		if dt is not None:
			print("dt", dt)
